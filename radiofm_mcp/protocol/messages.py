"""JSON-RPC envelopes and MCP method names."""

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel


JSONRPC_VERSION = "2.0"

# Advertised to every client regardless of the version it requests
PROTOCOL_VERSION = "2025-06-18"

SERVER_NAME = "radiofm-mcp-server"


class Method(Enum):
    """MCP methods the server distinguishes."""
    
    INITIALIZE = "initialize"
    LIST_TOOLS = "tools/list"
    CALL_TOOL = "tools/call"
    PING = "ping"
    NOTIFICATION = "notifications/"  # any "notifications/..." method
    UNKNOWN = ""
    
    @classmethod
    def parse(cls, name: str) -> "Method":
        """Map a JSON-RPC method name onto the enum; unrecognized names map to UNKNOWN."""
        for method in (cls.INITIALIZE, cls.LIST_TOOLS, cls.CALL_TOOL, cls.PING):
            if name == method.value:
                return method
        if name.startswith(cls.NOTIFICATION.value):
            return cls.NOTIFICATION
        return cls.UNKNOWN


def to_json(model: BaseModel) -> Dict[str, Any]:
    """Serialize an `mcp.types` model the way it appears on the wire."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def result_response(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_response(request_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": {"code": code, "message": message},
    }
