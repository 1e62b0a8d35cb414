"""Logging - colored or JSON component logs for tool traffic."""

from .logger import BBLogger, LogConfig, ToolLogger

__all__ = [
    "BBLogger",
    "ToolLogger",
    "LogConfig",
]
