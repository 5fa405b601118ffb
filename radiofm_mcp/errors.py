"""Error taxonomy for the RadioFM MCP Server.

Every error carries the JSON-RPC error code it is reported with, so the
protocol bridge can turn any of them into a structured error response.
"""

from mcp.types import INVALID_REQUEST, METHOD_NOT_FOUND, PARSE_ERROR

__all__ = [
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "SERVER_ERROR",
    "RadioSearchError",
    "InvalidArgument",
    "UpstreamUnavailable",
    "UpstreamMalformed",
    "MethodNotFound",
    "InvalidRequest",
    "ParseError",
    "InternalError",
]


# Implementation-defined server error, used for anything raised while serving a call
SERVER_ERROR = -32000


class RadioSearchError(Exception):
    """Base class for errors reported to MCP clients."""
    
    code: int = SERVER_ERROR
    
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(RadioSearchError):
    """Tool arguments are missing or invalid (e.g. empty query); reported as a server error."""


class UpstreamUnavailable(RadioSearchError):
    """The RadioFM search API could not be reached or answered with an HTTP error."""


class UpstreamMalformed(RadioSearchError):
    """The RadioFM search API answered with a body that is not the expected envelope."""


class MethodNotFound(RadioSearchError):
    """The JSON-RPC method is not one the server implements."""
    
    code = METHOD_NOT_FOUND
    
    def __init__(self, method: object):
        super().__init__(f"Unknown method: {method}")
        self.method = method


class InvalidRequest(RadioSearchError):
    """The message is not a JSON-RPC request object."""
    
    code = INVALID_REQUEST


class ParseError(RadioSearchError):
    """The message body is not valid JSON."""
    
    code = PARSE_ERROR


class InternalError(RadioSearchError):
    """Catch-all for unexpected failures while handling a request."""
