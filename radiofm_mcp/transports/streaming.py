"""Streaming transport: MCP over Server-Sent Events.

`GET /mcp` opens an event stream whose first `endpoint` event tells the
client where to POST its messages (`/mcp?sessionId=...`). Responses to those
messages are pushed back on the stream as `message` events.
"""

import json
import logging
import re
from typing import Any, AsyncIterator, Dict

from sse_starlette.sse import EventSourceResponse
from starlette.background import BackgroundTask
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..errors import INVALID_REQUEST, ParseError
from ..protocol.bridge import ProtocolBridge
from ..protocol.messages import JSONRPC_VERSION, error_response
from ..utils.logging import get_logger, log_with_context
from .connections import Connection, ConnectionRegistry


logger = get_logger("StreamingAdapter")

FALLBACK_MESSAGE = "SSE not supported on this device. Use POST /mcp for tool calls."

SESSION_ID_PARAM = "sessionId"

_MOBILE_PATTERN = re.compile(r"iphone|ipad|ipod|android")


def requires_fallback(user_agent: str) -> bool:
    """
    Whether a client should be told to use POST instead of SSE.
    
    Desktop Safari and mobile browsers do not keep the event stream open
    reliably.
    """
    user_agent = user_agent.lower()
    is_safari = "safari" in user_agent and "chrome" not in user_agent and "android" not in user_agent
    is_mobile = _MOBILE_PATTERN.search(user_agent) is not None
    return is_safari or is_mobile


class StreamingAdapter:
    """Serves MCP sessions over SSE, one registered Connection per open stream."""
    
    def __init__(
        self,
        bridge: ProtocolBridge,
        registry: ConnectionRegistry,
        endpoint_path: str = "/mcp"
    ):
        """
        Initialize Streaming Adapter.
        
        Args:
            bridge: Protocol bridge handling every received message
            registry: Registry owning the open connections
            endpoint_path: Path clients POST their messages to
        """
        self.bridge = bridge
        self.registry = registry
        self.endpoint_path = endpoint_path
    
    async def open_stream(self, request: Request) -> Response:
        user_agent = request.headers.get("user-agent", "")
        if requires_fallback(user_agent):
            log_with_context(
                logger,
                logging.WARNING,
                "SSE not supported by client, answering with fallback message",
                context={"user_agent": user_agent}
            )
            return JSONResponse({
                "jsonrpc": JSONRPC_VERSION,
                "result": {"message": FALLBACK_MESSAGE},
            })
        
        return EventSourceResponse(self.events())
    
    async def events(self) -> AsyncIterator[Dict[str, str]]:
        """
        Open a connection and produce its SSE events until it closes.
        
        The connection is registered only once the stream is actually being
        consumed, and unregistered however the stream ends, including client
        disconnects, which cancel this generator.
        """
        connection = None
        try:
            connection = self.registry.open()
            yield {
                "event": "endpoint",
                "data": f"{self.endpoint_path}?{SESSION_ID_PARAM}={connection.session_id}",
            }
            while True:
                message = await connection.receive()
                if message is None:
                    break
                yield {"event": "message", "data": json.dumps(message, ensure_ascii=False)}
        finally:
            if connection is not None:
                self.registry.close(connection.session_id)
    
    async def post_message(self, request: Request, session_id: str) -> Response:
        """Accept a message for an open session; the response is pushed on its stream."""
        connection = self.registry.get(session_id)
        if connection is None:
            log_with_context(
                logger,
                logging.WARNING,
                "Message for unknown session",
                context={"session_id": session_id}
            )
            return JSONResponse(
                error_response(None, INVALID_REQUEST, f"Unknown session: {session_id}"),
                status_code=404
            )
        
        try:
            message = await request.json()
        except ValueError:
            error = ParseError("Parse error")
            return JSONResponse(error_response(None, error.code, error.message), status_code=400)
        
        return Response(
            "Accepted",
            status_code=202,
            background=BackgroundTask(self.deliver, connection, message)
        )
    
    async def deliver(self, connection: Connection, message: Any) -> None:
        """Handle a message and push the response to its connection."""
        response = await self.bridge.handle(message)
        if response is None:
            return
        if not connection.send(response):
            log_with_context(
                logger,
                logging.INFO,
                "Connection closed before response was ready, discarding it",
                context={"session_id": connection.session_id, "id": response.get("id")}
            )
