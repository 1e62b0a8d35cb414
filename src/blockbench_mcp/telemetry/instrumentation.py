"""Telemetry instrumentation helpers for tool invocations."""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from opentelemetry.trace import Status, StatusCode

from .metrics import MetricLabels
from .setup import get_telemetry


@asynccontextmanager
async def instrument_tool_call(tool_name: str) -> AsyncIterator[dict[str, Any]]:
    """Context manager for instrumenting tool invocations.

    Records:
    - Tool invocation counter
    - Tool duration histogram
    - Trace span ``tool:<name>``

    Args:
        tool_name: Registered tool name

    Yields:
        Dictionary to store execution status
    """
    telemetry = get_telemetry()
    start_time = time.perf_counter()
    result: dict[str, Any] = {"status": MetricLabels.STATUS_SUCCESS, "error_code": None}

    tracer = telemetry["tracer"] if telemetry else None
    bb_metrics = telemetry["metrics"] if telemetry else None

    span = None
    if tracer:
        span = tracer.start_span(f"tool:{tool_name}")
        span.set_attribute("tool.name", tool_name)

    try:
        yield result
    except Exception as e:
        result["status"] = MetricLabels.STATUS_ERROR
        result["error_code"] = result.get("error_code") or getattr(e, "code", type(e).__name__)
        if span:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
        raise
    finally:
        duration = time.perf_counter() - start_time

        if bb_metrics:
            bb_metrics.record_tool_invocation(
                tool_name=tool_name,
                duration_seconds=duration,
                status=result["status"],
                error_code=result.get("error_code"),
            )

        if span:
            if result["status"] == MetricLabels.STATUS_SUCCESS:
                span.set_status(Status(StatusCode.OK))
            span.end()


def record_tool_result(
    result: dict[str, Any], success: bool, error_code: str | None = None
) -> None:
    """Update result dictionary with execution status.

    Args:
        result: Result dictionary from context manager
        success: Whether execution succeeded
        error_code: Error code if failed
    """
    if success:
        result["status"] = MetricLabels.STATUS_SUCCESS
    else:
        result["status"] = MetricLabels.STATUS_ERROR
        result["error_code"] = error_code


def record_registered_tools(count: int) -> None:
    """Update the registered tools gauge. No-op without telemetry."""
    telemetry = get_telemetry()
    if telemetry and telemetry["metrics"]:
        telemetry["metrics"].update_registered_tools(count)
