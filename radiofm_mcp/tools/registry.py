"""Static registry of the tools this server exposes."""

from typing import List, Optional

from mcp.types import Tool


SEARCH_TOOL_NAME = "search_radio_stations"

SEARCH_RADIO_STATIONS = Tool(
    name=SEARCH_TOOL_NAME,
    description=(
        "Search for radio stations and podcasts on RadioFM by name, "
        "language, country, or genre."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "Search term (e.g., 'BBC', 'India', 'Hindi', 'Jazz', 'News')",
            },
        },
        "required": ["query"],
    },
)

_TOOLS: List[Tool] = [SEARCH_RADIO_STATIONS]


def list_tools() -> List[Tool]:
    """Return the descriptors of all registered tools."""
    return list(_TOOLS)


def get_tool(name: str) -> Optional[Tool]:
    """Look up a tool descriptor by name."""
    for tool in _TOOLS:
        if tool.name == name:
            return tool
    return None
