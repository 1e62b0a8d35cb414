"""Telemetry setup - OpenTelemetry initialization.

Configures the OpenTelemetry SDK with:
- MeterProvider with PrometheusMetricReader (or a caller-supplied reader)
- TracerProvider for per-tool spans
"""

from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider

from blockbench_mcp import __version__
from blockbench_mcp.config import TelemetryConfig

from .metrics import BlockbenchMetrics

# Global telemetry state
_telemetry: dict[str, Any] | None = None


def setup_telemetry(
    config: TelemetryConfig | None = None,
    metric_reader: MetricReader | None = None,
) -> dict[str, Any]:
    """Set up OpenTelemetry instrumentation.

    Idempotent: the first call wins until ``reset_telemetry()``.

    Args:
        config: Telemetry configuration (uses defaults if None)
        metric_reader: Reader to attach instead of the Prometheus reader

    Returns:
        Dictionary with meter, tracer, metrics and config entries
    """
    global _telemetry  # noqa: PLW0603

    if _telemetry is not None:
        return _telemetry

    config = config or TelemetryConfig()

    if not config.enabled:
        _telemetry = {"meter": None, "tracer": None, "metrics": None, "config": config}
        return _telemetry

    resource = Resource.create(
        {
            SERVICE_NAME: config.service_name,
            SERVICE_VERSION: __version__,
        }
    )

    meter = None
    bb_metrics = None
    meter_provider = None
    if config.metrics_enabled:
        meter_provider = MeterProvider(
            metric_readers=[metric_reader or PrometheusMetricReader()],
            resource=resource,
        )
        metrics.set_meter_provider(meter_provider)
        # Take the meter from our provider, the global one can only be set once
        meter = meter_provider.get_meter(config.service_name, __version__)
        bb_metrics = BlockbenchMetrics(meter)

    tracer = None
    tracer_provider = None
    if config.traces_enabled:
        tracer_provider = TracerProvider(resource=resource)
        trace.set_tracer_provider(tracer_provider)
        tracer = tracer_provider.get_tracer(config.service_name, __version__)

    _telemetry = {
        "meter": meter,
        "tracer": tracer,
        "metrics": bb_metrics,
        "config": config,
        "meter_provider": meter_provider,
        "tracer_provider": tracer_provider,
    }
    return _telemetry


def get_telemetry() -> dict[str, Any] | None:
    """Get the current telemetry state, None if not initialized."""
    return _telemetry


def reset_telemetry() -> None:
    """Reset telemetry state (for testing)."""
    global _telemetry  # noqa: PLW0603
    _telemetry = None
