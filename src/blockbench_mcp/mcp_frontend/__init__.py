"""MCP Frontend - expose the tool registry as an MCP server."""

from .server import MCPFrontend
from .types import MCPServerConfig

__all__ = [
    "MCPFrontend",
    "MCPServerConfig",
]
