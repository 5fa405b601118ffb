"""Tool implementation for searching RadioFM stations and podcasts."""

import logging
import time
from typing import TYPE_CHECKING, Any, Dict

from mcp.types import CallToolResult, TextContent

from ..config import DEFAULT_PLAYER_BASE_URL
from ..errors import InvalidArgument
from ..utils.logging import get_logger, log_with_context
from .formatter import format_results

if TYPE_CHECKING:
    from ..upstream.client import RadioFMClient


logger = get_logger("SearchRadioStationsTool")


def extract_query(arguments: Any) -> str:
    """
    Validate tool arguments and return the search term.
    
    Raises:
        InvalidArgument: If `query` is missing, not a string, or empty
    """
    if not isinstance(arguments, dict):
        raise InvalidArgument("Missing query term.")
    query = arguments.get("query")
    if query is None or query == "":
        raise InvalidArgument("Missing query term.")
    if not isinstance(query, str):
        raise InvalidArgument("Query term must be a string.")
    return query


async def search_radio_stations_impl(
    arguments: Dict[str, Any],
    client: "RadioFMClient",
    player_base_url: str = DEFAULT_PLAYER_BASE_URL
) -> CallToolResult:
    """
    Search RadioFM stations and podcasts.
    
    Args:
        arguments: Tool arguments; must contain a non-empty `query` string
        client: RadioFM API client
        player_base_url: Base URL used for results without a deeplink
        
    Returns:
        Tool result with a single text content entry
        
    Raises:
        InvalidArgument: If the query is missing or empty
        UpstreamUnavailable: If the RadioFM API cannot be reached
        UpstreamMalformed: If the RadioFM API response cannot be parsed
    """
    query = extract_query(arguments)
    start_time = time.time()
    
    log_with_context(
        logger,
        logging.INFO,
        "search_radio_stations tool invoked",
        context={"query": query}
    )
    
    try:
        response = await client.search(query)
        text = format_results(query, response.groups, player_base_url)
    except Exception as e:
        execution_time_ms = (time.time() - start_time) * 1000
        logger.error(
            "search_radio_stations tool failed",
            exc_info=True,
            extra={
                "context": {"query": query, "error": str(e)},
                "execution_time_ms": execution_time_ms
            }
        )
        raise
    
    execution_time_ms = (time.time() - start_time) * 1000
    log_with_context(
        logger,
        logging.INFO,
        "search_radio_stations tool completed",
        context={"query": query, **response.to_dict()},
        execution_time_ms=execution_time_ms
    )
    
    return CallToolResult(content=[TextContent(type="text", text=text)])
