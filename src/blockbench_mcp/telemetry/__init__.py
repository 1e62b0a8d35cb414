"""Telemetry - OpenTelemetry-based observability."""

from .instrumentation import instrument_tool_call, record_registered_tools, record_tool_result
from .metrics import BlockbenchMetrics, MetricLabels
from .setup import get_telemetry, reset_telemetry, setup_telemetry

__all__ = [
    # Metrics
    "BlockbenchMetrics",
    "MetricLabels",
    # Setup
    "setup_telemetry",
    "get_telemetry",
    "reset_telemetry",
    # Instrumentation
    "instrument_tool_call",
    "record_tool_result",
    "record_registered_tools",
]
