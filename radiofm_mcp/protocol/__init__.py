"""JSON-RPC message handling for the Model Context Protocol."""

from .bridge import ProtocolBridge
from .messages import PROTOCOL_VERSION, SERVER_NAME, Method, error_response, result_response

__all__ = [
    "PROTOCOL_VERSION",
    "SERVER_NAME",
    "Method",
    "ProtocolBridge",
    "error_response",
    "result_response",
]
