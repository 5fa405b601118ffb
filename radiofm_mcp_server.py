#!/usr/bin/env python3
"""
RadioFM MCP Server

A Model Context Protocol server that searches RadioFM radio stations and
podcasts. Serves MCP over Server-Sent Events (GET /mcp) and over plain
JSON-RPC POST requests (POST /mcp).

Run directly, or with any ASGI server: `uvicorn radiofm_mcp_server:app`.
"""

from radiofm_mcp.server import create_app, initialize_server, run

# Initialize application at module level for ASGI servers
config = initialize_server()
app = create_app(config)


def main():
    """Main entry point for the MCP server."""
    run(app, config)


if __name__ == "__main__":
    main()
