"""Shared enumerations for blockbench-mcp."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class MCPTransport(str, Enum):
    """MCP frontend transport type."""

    STDIO = "stdio"


class HostType(str, Enum):
    """Which host service implementation to wire up."""

    MEMORY = "memory"
    BRIDGE = "bridge"


class ToolStatus(str, Enum):
    """Stability tag attached to every registered tool."""

    STABLE = "stable"
    EXPERIMENTAL = "experimental"
    DEPRECATED = "deprecated"
