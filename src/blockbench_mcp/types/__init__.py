"""Shared types for blockbench-mcp.

Import from here rather than submodules:
    from blockbench_mcp.types import LogLevel, ToolStatus, ValidationIssue
"""

from .enums import HostType, LogFormat, LogLevel, MCPTransport, ToolStatus
from .validation import ValidationIssue, ValidationResult

__all__ = [
    # Enums
    "LogLevel",
    "LogFormat",
    "MCPTransport",
    "HostType",
    "ToolStatus",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
