"""Component logger - colored or JSON log lines for tool traffic.

Logs go to stderr by default because stdout carries the MCP protocol.
"""

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, TextIO

from blockbench_mcp.types import LogFormat, LogLevel

# ANSI 256-colour palette
RESET = "\033[0m"
GREEN = "\033[38;5;82m"
RED = "\033[38;5;196m"
YELLOW = "\033[38;5;226m"
ORANGE = "\033[38;5;208m"
LIGHT_BLUE = "\033[38;5;153m"
CYAN = "\033[38;5;51m"
MAGENTA = "\033[38;5;201m"

LEVEL_COLORS = {
    LogLevel.DEBUG: LIGHT_BLUE,
    LogLevel.INFO: CYAN,
    LogLevel.WARN: YELLOW,
    LogLevel.ERROR: RED,
}

COMPONENT_COLORS = {
    "registry": MAGENTA,
    "tool": GREEN,
    "resolver": ORANGE,
    "host": CYAN,
    "frontend": LIGHT_BLUE,
}

DEFAULT_COMPONENTS = ("registry", "tool", "resolver", "host", "frontend")


@dataclass
class LogConfig:
    """Logger configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    show_params: bool = True
    show_results: bool = True
    truncate_at: int = 200
    components: dict[str, bool] = field(default_factory=dict)
    output: TextIO = field(default=sys.stderr)

    def __post_init__(self) -> None:
        """Initialize default components if not provided."""
        if not self.components:
            self.components = {name: True for name in DEFAULT_COMPONENTS}


class BBLogger:
    """Main logger facade. Creates component-specific loggers."""

    def __init__(self, config: LogConfig | None = None):
        """Initialize logger with configuration.

        Args:
            config: Logger configuration (defaults to LogConfig())
        """
        self.config = config or LogConfig()
        self._level_order = {
            LogLevel.DEBUG: 0,
            LogLevel.INFO: 1,
            LogLevel.WARN: 2,
            LogLevel.ERROR: 3,
        }

    def tool(self, tool_name: str) -> "ToolLogger":
        """Get a logger scoped to one tool invocation.

        Args:
            tool_name: Tool being invoked

        Returns:
            ToolLogger instance
        """
        return ToolLogger(self, tool_name)

    def configure(self, config: LogConfig) -> None:
        """Update configuration.

        Args:
            config: New logger configuration
        """
        self.config = config

    def debug(self, component: str, message: str, **context: Any) -> None:
        self._log(LogLevel.DEBUG, component, message, context or None)

    def info(self, component: str, message: str, **context: Any) -> None:
        self._log(LogLevel.INFO, component, message, context or None)

    def warning(self, component: str, message: str, **context: Any) -> None:
        self._log(LogLevel.WARN, component, message, context or None)

    def error(self, component: str, message: str, **context: Any) -> None:
        self._log(LogLevel.ERROR, component, message, context or None)

    def _should_log(self, level: LogLevel) -> bool:
        return self._level_order.get(level, 0) >= self._level_order.get(self.config.level, 1)

    def _truncate(self, text: str) -> str:
        if len(text) > self.config.truncate_at:
            return text[: self.config.truncate_at] + "..."
        return text

    def _log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Internal logging method.

        Args:
            level: Log level
            component: Component name (registry, tool, resolver, host, frontend)
            message: Log message
            context: Additional context data
        """
        if not self._should_log(level):
            return

        if not self.config.components.get(component, True):
            return

        if self.config.format == LogFormat.JSON:
            self._log_json(level, component, message, context)
        else:
            self._log_colored(level, component, message, context)

    def _log_json(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": level.value,
            "component": component,
            "message": message,
        }
        if context:
            log_entry.update(context)

        print(json.dumps(log_entry, default=str), file=self.config.output)

    def _log_colored(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        color = LEVEL_COLORS.get(level, RESET)
        component_color = COMPONENT_COLORS.get(component, RESET)

        # Format: [COMPONENT] message {context}
        output = f"{component_color}[{component.upper()}]{RESET} {color}{message}{RESET}"

        if context and self.config.show_params:
            output += f" {LIGHT_BLUE}{self._truncate(str(context))}{RESET}"

        print(output, file=self.config.output)


class ToolLogger:
    """Logger for one tool invocation."""

    def __init__(self, parent: BBLogger, tool_name: str):
        self.parent = parent
        self.tool_name = tool_name

    def calling(self, params: dict[str, Any] | None = None) -> None:
        """Log tool call start.

        Args:
            params: Validated tool parameters
        """
        context: dict[str, Any] = {"event": "tool_calling", "tool_name": self.tool_name}
        if params:
            context["params"] = params

        self.parent._log(LogLevel.INFO, "tool", f"Calling tool '{self.tool_name}'", context)

    def result(self, result: str, duration_ms: int) -> None:
        """Log tool call result.

        Args:
            result: Tool output string
            duration_ms: Execution duration in milliseconds
        """
        context: dict[str, Any] = {
            "event": "tool_result",
            "tool_name": self.tool_name,
            "duration_ms": duration_ms,
        }
        if self.parent.config.show_results:
            context["result"] = self.parent._truncate(result)

        message = f"Tool '{self.tool_name}' completed ({duration_ms / 1000:.2f}s) ✓"
        self.parent._log(LogLevel.INFO, "tool", message, context)

    def warning(self, message_text: str) -> None:
        """Log a non-fatal problem the tool worked around."""
        context = {"event": "tool_warning", "tool_name": self.tool_name}
        self.parent._log(
            LogLevel.WARN, "tool", f"Tool '{self.tool_name}': {message_text}", context
        )

    def error(self, error: Exception, duration_ms: int) -> None:
        """Log tool call failure.

        Args:
            error: Error raised by the tool
            duration_ms: Execution duration in milliseconds
        """
        context = {
            "event": "tool_error",
            "tool_name": self.tool_name,
            "duration_ms": duration_ms,
            "error": str(error),
            "error_type": type(error).__name__,
        }
        message = f"Tool '{self.tool_name}' failed ({duration_ms / 1000:.2f}s): {error}"
        self.parent._log(LogLevel.ERROR, "tool", message, context)
