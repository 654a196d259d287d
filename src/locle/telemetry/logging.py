"""Contract for runtime telemetry plus the stdlib logging setup used by the CLI."""

from __future__ import annotations

import logging
from typing import Protocol


class Telemetry(Protocol):
    """Reports gameplay events to a configured sink."""

    def emit(self, event_name: str, payload: dict) -> None:
        """Publish telemetry event to the configured sink."""


class LoggingTelemetry:
    """Telemetry sink that writes each event as a structured log record."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("locle.telemetry")

    def emit(self, event_name: str, payload: dict) -> None:
        self._logger.info(event_name, extra={"payload": payload})


def configure_logging(level: str | int = "WARNING") -> None:
    """Install a single stderr handler on the ``locle`` logger hierarchy."""
    root = logging.getLogger("locle")
    root.setLevel(level if isinstance(level, int) else level.upper())
    if not any(getattr(handler, "_locle_handler", False) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handler._locle_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
