"""Request/response transport: one JSON-RPC message per POST."""

import logging
from typing import Any, Dict

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..errors import SERVER_ERROR, ParseError
from ..protocol.bridge import ProtocolBridge
from ..protocol.messages import error_response
from ..utils.logging import get_logger, log_with_context


logger = get_logger("RequestResponseAdapter")


def status_for(response: Dict[str, Any]) -> int:
    """HTTP status for a JSON-RPC response: 200 on success, 500 for server errors, 400 otherwise."""
    error = response.get("error")
    if error is None:
        return 200
    if error.get("code") == SERVER_ERROR:
        return 500
    return 400


class RequestResponseAdapter:
    """Dispatches a self-contained JSON-RPC request and writes exactly one response."""
    
    def __init__(self, bridge: ProtocolBridge):
        self.bridge = bridge
    
    async def handle(self, request: Request) -> Response:
        try:
            message = await request.json()
        except ValueError as e:
            error = ParseError("Parse error")
            log_with_context(
                logger,
                logging.WARNING,
                "Rejected POST /mcp with invalid JSON body",
                context={"error": str(e)},
                error_code=error.code
            )
            return JSONResponse(error_response(None, error.code, error.message), status_code=400)
        
        log_with_context(
            logger,
            logging.INFO,
            "POST /mcp",
            context={"body": message}
        )
        
        response = await self.bridge.handle(message)
        if response is None:
            return Response(status_code=202)
        return JSONResponse(response, status_code=status_for(response))
