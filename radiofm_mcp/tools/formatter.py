"""Rendering of RadioFM search results as a single text block."""

from typing import Sequence

from ..config import DEFAULT_PLAYER_BASE_URL
from ..models.search_result import ResultGroup, ResultItem


def format_no_results(query: str) -> str:
    """Text returned when the search produced no result groups."""
    return (
        f'🔍 No results found for "{query}". '
        "Try different station names, countries, or genres."
    )


def _format_item(position: int, item: ResultItem, player_base_url: str) -> str:
    return (
        f"{position}. {item.display_name} ({item.display_category})\n"
        f"▶ {item.link(player_base_url)}"
    )


def _format_group(group: ResultGroup, player_base_url: str) -> str:
    lines = [f"\n🎧 {group.type.upper()}"]
    lines.extend(
        _format_item(position, item, player_base_url)
        for position, item in enumerate(group.items, start=1)
    )
    return "\n".join(lines)


def format_results(
    query: str,
    groups: Sequence[ResultGroup],
    player_base_url: str = DEFAULT_PLAYER_BASE_URL
) -> str:
    """
    Format grouped search results for display to the model.
    
    Groups and items keep the order the API returned them in. Items are
    numbered from 1 within each group, and groups are separated by a blank
    line.
    
    Args:
        query: The original search term, embedded verbatim
        groups: Result groups from the search response
        player_base_url: Base URL used for items without a deeplink
        
    Returns:
        The formatted text (the no-results sentence when `groups` is empty)
    """
    if not groups:
        return format_no_results(query)
    
    blocks = "\n".join(_format_group(group, player_base_url) for group in groups)
    return f'🔍 Results for "{query}":\n{blocks}'
