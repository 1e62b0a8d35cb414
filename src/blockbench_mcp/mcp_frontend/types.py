"""MCP frontend type definitions."""

from dataclasses import dataclass

from blockbench_mcp import __version__

PROTOCOL_VERSION = "2024-11-05"

# JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


@dataclass
class MCPServerConfig:
    """MCP server identity reported on initialize."""

    name: str = "blockbench-mcp"
    version: str = __version__
