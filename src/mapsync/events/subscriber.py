"""Log subscriber for sync exception events."""

from __future__ import annotations

import structlog

from src.mapsync.events.schemas import LogLevel, SyncExceptionEvent

logger = structlog.get_logger(__name__)

# structlog's stdlib wrapper has no emergency/alert/notice methods.
_LEVEL_METHODS: dict[LogLevel, str] = {
    LogLevel.EMERGENCY: "critical",
    LogLevel.ALERT: "critical",
    LogLevel.CRITICAL: "critical",
    LogLevel.ERROR: "error",
    LogLevel.WARNING: "warning",
    LogLevel.NOTICE: "info",
    LogLevel.INFO: "info",
    LogLevel.DEBUG: "debug",
}


class ExceptionEventLogger:
    """Writes SyncExceptionEvents to the structured log.

    Args:
        log: Optional bound logger. Defaults to this module's logger.
    """

    def __init__(self, log=None) -> None:
        self._log = log or logger

    def handle(self, event: SyncExceptionEvent) -> None:
        """Log the event at its mapped level, with exc_info when present."""
        method = getattr(self._log, _LEVEL_METHODS[event.get_level()])
        fields = dict(event.get_context())
        fields["severity"] = event.get_level().value
        exception = event.get_exception()
        if exception is not None:
            fields["error"] = event.get_exception_message()
            fields["exc_info"] = exception
        method(event.get_message() or "sync.exception", **fields)
