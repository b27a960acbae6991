"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from adminpanel.shared.telemetry.logging import get_logger, setup_logging
from adminpanel.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from adminpanel.shared.telemetry.tracing import (
    add_span_attributes,
    get_trace_id,
    set_span_error,
    traced,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
    "set_span_error",
    "get_trace_id",
]
