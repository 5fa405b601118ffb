"""HTTP client for the RadioFM combo search endpoint."""

import logging
import time
from typing import Any, Optional
from urllib.parse import quote

import httpx

from ..config import DEFAULT_UPSTREAM_BASE_URL
from ..errors import UpstreamMalformed, UpstreamUnavailable
from ..models.search_result import ResultGroup, UpstreamSearchResponse
from ..utils.logging import get_logger, log_with_context


logger = get_logger("RadioFMClient")

SEARCH_PATH = "/new_combo_search.php"

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_query(query: str) -> str:
    """Percent-encode a search term for use as a query string value."""
    return quote(query, safe=_URI_COMPONENT_SAFE)


class RadioFMClient:
    """
    Issues search queries against the RadioFM API.
    
    Each call to `search` is exactly one GET request on a fresh
    `httpx.AsyncClient`; there is no retry, caching, or timeout override.
    """
    
    def __init__(
        self,
        base_url: str = DEFAULT_UPSTREAM_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize RadioFM client.
        
        Args:
            base_url: Base URL of the RadioFM API (without trailing slash)
            transport: Optional httpx transport (used to stub the API in tests)
        """
        self.base_url = base_url.rstrip("/")
        self._transport = transport
    
    def build_url(self, query: str) -> str:
        """Build the full search URL for a query."""
        return f"{self.base_url}{SEARCH_PATH}?srch={encode_query(query)}"
    
    async def search(self, query: str) -> UpstreamSearchResponse:
        """
        Search stations and podcasts.
        
        Args:
            query: Non-empty search term
            
        Returns:
            Parsed search response (possibly with no groups)
            
        Raises:
            UpstreamUnavailable: If the request fails or returns an HTTP error
            UpstreamMalformed: If the body is not the expected JSON envelope
        """
        url = self.build_url(query)
        start_time = time.time()
        
        log_with_context(
            logger,
            logging.INFO,
            "Querying RadioFM search API",
            context={"query": query, "url": url}
        )
        
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            log_with_context(
                logger,
                logging.ERROR,
                "RadioFM search API returned an error status",
                context={"query": query, "status_code": e.response.status_code}
            )
            raise UpstreamUnavailable(
                f"RadioFM search failed with HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            log_with_context(
                logger,
                logging.ERROR,
                "RadioFM search API unreachable",
                context={"query": query, "error": str(e) or type(e).__name__}
            )
            raise UpstreamUnavailable(str(e) or type(e).__name__) from e
        
        execution_time_ms = (time.time() - start_time) * 1000
        
        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamMalformed(f"RadioFM search returned invalid JSON: {e}") from e
        
        result = parse_search_response(payload)
        
        log_with_context(
            logger,
            logging.INFO,
            "RadioFM search API call successful",
            context={"query": query, **result.to_dict()},
            execution_time_ms=execution_time_ms
        )
        
        return result


def parse_search_response(payload: Any) -> UpstreamSearchResponse:
    """
    Parse the `{data: {Data: [...]}}` envelope.
    
    A missing or null `data` / `data.Data` means zero results.
    
    Raises:
        UpstreamMalformed: If the payload or `data` is not an object, or
            `data.Data` is present but not a list
    """
    if not isinstance(payload, dict):
        raise UpstreamMalformed(
            f"RadioFM search returned {type(payload).__name__}, expected a JSON object"
        )
    
    data = payload.get("data")
    if data is None:
        return UpstreamSearchResponse()
    if not isinstance(data, dict):
        raise UpstreamMalformed("RadioFM search response field 'data' is not an object")
    
    groups = data.get("Data")
    if groups is None:
        return UpstreamSearchResponse()
    if not isinstance(groups, list):
        raise UpstreamMalformed("RadioFM search response field 'data.Data' is not a list")
    
    return UpstreamSearchResponse(groups=[ResultGroup.from_dict(group) for group in groups])
