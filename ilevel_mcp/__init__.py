"""MCP server exposing the S&P Global iLevel API as tools."""

__version__ = "0.1.0"

SERVER_NAME = "ilevel-mcp-server"
