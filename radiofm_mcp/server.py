"""HTTP application: MCP endpoints, health check and discovery documents."""

import contextlib
import logging
import sys
from typing import AsyncIterator, Optional

import httpx
import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from .config import ServerConfig
from .protocol.bridge import ProtocolBridge
from .transports.connections import ConnectionRegistry
from .transports.request_response import RequestResponseAdapter
from .transports.streaming import SESSION_ID_PARAM, StreamingAdapter
from .upstream.client import RadioFMClient
from .utils.logging import configure_logging, get_logger, log_with_context


MCP_PATH = "/mcp"

logger = get_logger("Server")


def initialize_server() -> ServerConfig:
    """
    Configure logging and load the server configuration.

    Returns:
        Validated ServerConfig

    Raises:
        SystemExit: If the configuration is invalid
    """
    try:
        config = ServerConfig.from_environment()
    except ValueError as e:
        configure_logging()
        logger.error(
            "Failed to initialize server",
            exc_info=True,
            extra={"context": {"error": str(e)}}
        )
        sys.exit(1)

    configure_logging(config.log_level)
    log_with_context(
        logger,
        logging.INFO,
        "Configuration loaded",
        context={
            "host": config.host,
            "port": config.port,
            "upstream_base_url": config.upstream_base_url,
            "player_base_url": config.player_base_url,
        }
    )
    return config


def _base_url(request: Request) -> str:
    return str(request.base_url).rstrip("/")


async def health(request: Request) -> Response:
    return JSONResponse({
        "status": "ok",
        "message": "RadioFM MCP server running",
        "endpoint": MCP_PATH,
    })


async def mcp_stream(request: Request) -> Response:
    log_with_context(
        logger,
        logging.INFO,
        "Client attempted SSE connection",
        context={"path": request.url.path}
    )
    streaming: StreamingAdapter = request.app.state.streaming
    return await streaming.open_stream(request)


async def mcp_message(request: Request) -> Response:
    session_id = request.query_params.get(SESSION_ID_PARAM)
    if session_id is not None:
        streaming: StreamingAdapter = request.app.state.streaming
        return await streaming.post_message(request, session_id)

    request_response: RequestResponseAdapter = request.app.state.request_response
    return await request_response.handle(request)


# The .well-known documents below are placeholders: no authorization or token
# endpoint exists behind them.

async def openid_configuration(request: Request) -> Response:
    base = _base_url(request)
    return JSONResponse({
        "issuer": base,
        "authorization_endpoint": f"{base}/authorize",
        "token_endpoint": f"{base}/token",
        "mcp_endpoint": f"{base}{MCP_PATH}",
    })


async def mcp_discovery(request: Request) -> Response:
    return JSONResponse({
        "mcp_endpoint": f"{_base_url(request)}{MCP_PATH}",
        "capabilities": {"tools": True},
    })


def create_app(
    config: Optional[ServerConfig] = None,
    upstream_transport: Optional[httpx.AsyncBaseTransport] = None,
    registry: Optional[ConnectionRegistry] = None
) -> Starlette:
    """
    Build the ASGI application.

    Args:
        config: Server configuration (defaults to ServerConfig())
        upstream_transport: Optional httpx transport for the RadioFM client
        registry: Optional registry of streaming connections

    Returns:
        Starlette application serving the MCP endpoints
    """
    config = config or ServerConfig()
    registry = registry if registry is not None else ConnectionRegistry()

    client = RadioFMClient(config.upstream_base_url, transport=upstream_transport)
    bridge = ProtocolBridge(client, config.player_base_url)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        logger.info(f"RadioFM MCP server running at http://{config.host}:{config.port}{MCP_PATH}")
        yield
        registry.close_all()
        logger.info("RadioFM MCP server stopped")

    app = Starlette(
        routes=[
            Route("/", health, methods=["GET"]),
            Route(MCP_PATH, mcp_stream, methods=["GET"]),
            Route(MCP_PATH, mcp_message, methods=["POST"]),
            Route("/.well-known/openid-configuration", openid_configuration, methods=["GET"]),
            Route("/.well-known/oauth-authorization-server", openid_configuration, methods=["GET"]),
            Route("/.well-known/openid-configuration/mcp", mcp_discovery, methods=["GET"]),
        ],
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=["*"],
                allow_methods=["*"],
                allow_headers=["*"],
            ),
        ],
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.bridge = bridge
    app.state.registry = registry
    app.state.streaming = StreamingAdapter(bridge, registry, MCP_PATH)
    app.state.request_response = RequestResponseAdapter(bridge)
    return app


def run(app: Starlette, config: ServerConfig) -> None:
    """Serve the application with uvicorn until interrupted."""
    try:
        uvicorn.run(app, host=config.host, port=config.port, log_config=None)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(
            "Server failed to start",
            exc_info=True,
            extra={"context": {"error": str(e)}}
        )
        sys.exit(1)


def main() -> None:
    """Main entry point for the MCP server."""
    config = initialize_server()
    run(create_app(config), config)
