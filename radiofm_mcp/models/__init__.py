"""Data models for RadioFM search results."""

from .search_result import ResultGroup, ResultItem, UpstreamSearchResponse

__all__ = ["ResultGroup", "ResultItem", "UpstreamSearchResponse"]
