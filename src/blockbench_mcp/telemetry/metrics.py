"""blockbench-mcp metrics schema - OpenTelemetry conventions.

Metrics:
- bbmcp_tool_invocations_total: counter, labelled by tool and status
- bbmcp_tool_invocation_duration_seconds: histogram, same labels
- bbmcp_registered_tools: gauge of tools currently in the registry

Labels:
- tool_name: Registered tool name
- status: success | error
- error_code: Structured error code when status=error
"""

from typing import Any

from opentelemetry import metrics
from opentelemetry.metrics import Counter, Histogram, UpDownCounter

METRIC_PREFIX = "bbmcp"


class MetricLabels:
    """Standard metric labels/attributes."""

    TOOL_NAME = "tool_name"
    STATUS = "status"
    ERROR_CODE = "error_code"

    STATUS_SUCCESS = "success"
    STATUS_ERROR = "error"


class BlockbenchMetrics:
    """Tool invocation metrics."""

    def __init__(self, meter: metrics.Meter):
        """Initialize metrics.

        Args:
            meter: OpenTelemetry Meter instance
        """
        self._meter = meter

        self.tool_invocations_total: Counter = meter.create_counter(
            name=f"{METRIC_PREFIX}_tool_invocations_total",
            description="Total number of tool invocations",
            unit="1",
        )
        self.tool_invocation_duration_seconds: Histogram = meter.create_histogram(
            name=f"{METRIC_PREFIX}_tool_invocation_duration_seconds",
            description="Tool invocation duration in seconds",
            unit="s",
        )
        # UpDownCounter used as a gauge, fed with deltas
        self.registered_tools: UpDownCounter = meter.create_up_down_counter(
            name=f"{METRIC_PREFIX}_registered_tools",
            description="Number of registered tools",
            unit="1",
        )
        self._current_registered_tools = 0

    def record_tool_invocation(
        self,
        tool_name: str,
        duration_seconds: float,
        status: str,
        error_code: str | None = None,
    ) -> None:
        """Record tool invocation.

        Args:
            tool_name: Tool name
            duration_seconds: Invocation duration
            status: Execution status
            error_code: Error code if status is error
        """
        labels: dict[str, Any] = {
            MetricLabels.TOOL_NAME: tool_name,
            MetricLabels.STATUS: status,
        }
        if error_code:
            labels[MetricLabels.ERROR_CODE] = error_code

        self.tool_invocations_total.add(1, labels)
        self.tool_invocation_duration_seconds.record(duration_seconds, labels)

    def update_registered_tools(self, count: int) -> None:
        """Set the registered tool gauge to ``count``."""
        delta = count - self._current_registered_tools
        if delta != 0:
            self.registered_tools.add(delta)
        self._current_registered_tools = count
