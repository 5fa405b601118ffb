"""RadioFM MCP Server: station and podcast search over the Model Context Protocol."""

__version__ = "1.3.0"
