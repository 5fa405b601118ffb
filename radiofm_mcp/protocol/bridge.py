"""Dispatch of MCP requests to the registered tool.

Both transports hand every decoded JSON-RPC message to `ProtocolBridge.handle`
and write back whatever it returns, so a request produces the same response
whichever transport carried it.
"""

import logging
import time
from typing import TYPE_CHECKING, Any, Dict, Optional, assert_never

from mcp.types import (
    Implementation,
    InitializeResult,
    ListToolsResult,
    ServerCapabilities,
    ToolsCapability,
)

from .. import __version__
from ..config import DEFAULT_PLAYER_BASE_URL
from ..errors import (
    SERVER_ERROR,
    InternalError,
    InvalidArgument,
    InvalidRequest,
    MethodNotFound,
    RadioSearchError,
)
from ..tools.registry import get_tool, list_tools
from ..tools.search_radio_stations import search_radio_stations_impl
from ..utils.logging import get_logger, log_with_context
from .messages import (
    PROTOCOL_VERSION,
    SERVER_NAME,
    Method,
    error_response,
    result_response,
    to_json,
)

if TYPE_CHECKING:
    from ..upstream.client import RadioFMClient


logger = get_logger("ProtocolBridge")


class ProtocolBridge:
    """
    Translates MCP JSON-RPC requests into tool execution and back.
    
    Stateless across requests: every call reads only its own message. All
    failures are converted into JSON-RPC error responses; `handle` never
    raises.
    """
    
    def __init__(
        self,
        client: "RadioFMClient",
        player_base_url: str = DEFAULT_PLAYER_BASE_URL
    ):
        """
        Initialize Protocol Bridge.
        
        Args:
            client: RadioFM API client used by the search tool
            player_base_url: Base URL used for results without a deeplink
        """
        self.client = client
        self.player_base_url = player_base_url
    
    async def handle(self, message: Any) -> Optional[Dict[str, Any]]:
        """
        Handle one JSON-RPC message.
        
        Args:
            message: Decoded JSON body of the request
            
        Returns:
            The JSON-RPC response object, or None for notifications
        """
        request_id = message.get("id") if isinstance(message, dict) else None
        method_name = message.get("method") if isinstance(message, dict) else None
        start_time = time.time()
        
        try:
            if not isinstance(method_name, str):
                raise InvalidRequest("Invalid Request: expected a JSON-RPC request object with a method")
            
            params = message.get("params")
            if not isinstance(params, dict):
                params = {}
            
            result = await self._dispatch(Method.parse(method_name), method_name, params)
            
        except RadioSearchError as e:
            self._log_failure(method_name, request_id, e.code, e.message, start_time)
            return error_response(request_id, e.code, e.message)
        
        except Exception as e:
            error = InternalError(str(e) or "Internal error")
            logger.error(
                "Unexpected error while handling request",
                exc_info=True,
                extra={
                    "context": {"method": method_name, "id": request_id, "error": error.message},
                    "error_code": error.code
                }
            )
            return error_response(request_id, error.code, error.message)
        
        if result is None:
            return None
        
        log_with_context(
            logger,
            logging.INFO,
            "Request handled",
            context={"method": method_name, "id": request_id},
            execution_time_ms=(time.time() - start_time) * 1000
        )
        return result_response(request_id, result)
    
    async def _dispatch(
        self,
        method: Method,
        method_name: str,
        params: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        if method is Method.INITIALIZE:
            return self._initialize(params)
        elif method is Method.LIST_TOOLS:
            return to_json(ListToolsResult(tools=list_tools()))
        elif method is Method.CALL_TOOL:
            return await self._call_tool(params)
        elif method is Method.PING:
            return {}
        elif method is Method.NOTIFICATION:
            log_with_context(
                logger,
                logging.DEBUG,
                "Notification received",
                context={"method": method_name}
            )
            return None
        elif method is Method.UNKNOWN:
            raise MethodNotFound(method_name)
        else:
            assert_never(method)
    
    def _initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        log_with_context(
            logger,
            logging.INFO,
            "Client initializing",
            context={
                "client_protocol_version": params.get("protocolVersion"),
                "server_protocol_version": PROTOCOL_VERSION,
                "client_info": params.get("clientInfo"),
            }
        )
        result = InitializeResult(
            protocolVersion=PROTOCOL_VERSION,
            capabilities=ServerCapabilities(tools=ToolsCapability()),
            serverInfo=Implementation(name=SERVER_NAME, version=__version__),
        )
        return to_json(result)
    
    async def _call_tool(self, params: Dict[str, Any]) -> Dict[str, Any]:
        # A call without a tool name targets the only tool the server exposes
        tool_name = params.get("name")
        if tool_name is not None and get_tool(tool_name) is None:
            raise InvalidArgument(f"Unknown tool: {tool_name}")
        
        result = await search_radio_stations_impl(
            params.get("arguments"),
            self.client,
            self.player_base_url
        )
        return to_json(result)
    
    def _log_failure(
        self,
        method_name: Any,
        request_id: Any,
        code: int,
        message: str,
        start_time: float
    ) -> None:
        log_with_context(
            logger,
            logging.WARNING if code != SERVER_ERROR else logging.ERROR,
            "Request failed",
            context={"method": method_name, "id": request_id, "error": message},
            execution_time_ms=(time.time() - start_time) * 1000,
            error_code=code
        )
