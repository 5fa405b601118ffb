"""Transports carrying MCP messages to and from the protocol bridge."""

from .connections import Connection, ConnectionRegistry
from .request_response import RequestResponseAdapter
from .streaming import StreamingAdapter, requires_fallback

__all__ = [
    "Connection",
    "ConnectionRegistry",
    "RequestResponseAdapter",
    "StreamingAdapter",
    "requires_fallback",
]
