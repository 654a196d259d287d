"""Logging, telemetry and front-end notification boundaries."""

from .hooks import GameObserver, NullObserver, TelemetryObserver
from .logging import LoggingTelemetry, Telemetry, configure_logging

__all__ = [
    "GameObserver",
    "LoggingTelemetry",
    "NullObserver",
    "Telemetry",
    "TelemetryObserver",
    "configure_logging",
]
