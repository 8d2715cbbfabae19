"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from objectstore.shared.telemetry.logging import get_logger, setup_logging
from objectstore.shared.telemetry.telemetry import (
    TelemetryConfig,
    setup_telemetry_from_settings,
)
from objectstore.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "TelemetryConfig",
    "setup_telemetry_from_settings",
    "traced",
    "add_span_attributes",
    "add_span_event",
]
