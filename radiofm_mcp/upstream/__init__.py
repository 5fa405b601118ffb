"""Client for the RadioFM search API."""

from .client import RadioFMClient, encode_query

__all__ = ["RadioFMClient", "encode_query"]
