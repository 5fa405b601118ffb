"""MCP tool definitions and implementations."""

from .formatter import format_no_results, format_results
from .registry import SEARCH_TOOL_NAME, get_tool, list_tools

__all__ = ["SEARCH_TOOL_NAME", "format_no_results", "format_results", "get_tool", "list_tools"]
