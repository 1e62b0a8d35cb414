"""Tool Registry - registration, validation and invocation of tools."""

from .formatters import format_tool_detail, format_tool_list
from .registry import DEFAULT_ENABLED_STATUSES, ToolRegistry
from .types import NoArguments, ToolAnnotations, ToolArguments, ToolDescriptor, ToolHandler

__all__ = [
    "ToolRegistry",
    "DEFAULT_ENABLED_STATUSES",
    "ToolDescriptor",
    "ToolAnnotations",
    "ToolArguments",
    "NoArguments",
    "ToolHandler",
    "format_tool_list",
    "format_tool_detail",
]
