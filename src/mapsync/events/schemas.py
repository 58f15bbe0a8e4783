"""Exception event schema for sync logging.

A SyncExceptionEvent bundles what a log subscriber needs to report a sync
failure: the exception (if any), a severity, a message and its context.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LogLevel(str, Enum):
    """PSR-3 severity levels."""

    EMERGENCY = "emergency"
    ALERT = "alert"
    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    NOTICE = "notice"
    INFO = "info"
    DEBUG = "debug"


class SyncExceptionEvent(BaseModel):
    """Event raised when a sync operation fails, primarily for logging.

    Attributes:
        exception: The exception, or None if the event was raised without one.
        level: Severity of the event.
        message: Formatted event message. Empty string if none was given;
            use get_exception_message() for the exception's own message.
        context: Structured arguments for the message, passed to the logger.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    exception: BaseException | None = None
    level: LogLevel = LogLevel.ERROR
    message: str = ""
    context: dict[str, Any] = Field(default_factory=dict)

    def get_exception(self) -> BaseException | None:
        return self.exception

    def get_level(self) -> LogLevel:
        return self.level

    def get_message(self) -> str:
        return self.message

    def get_context(self) -> dict[str, Any]:
        return self.context

    def get_exception_message(self) -> str:
        """Message of the attached exception, or an empty string."""
        return str(self.exception) if self.exception is not None else ""
