"""ProxyBase MCP server: exposes the ProxyBase proxy marketplace as MCP tools."""

__version__ = "0.1.0"
