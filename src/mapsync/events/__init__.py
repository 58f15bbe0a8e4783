"""Sync exception events and their log subscriber.

Exports:
    LogLevel: PSR-3 severity levels.
    SyncExceptionEvent: Exception/level/message/context bundle for logging.
    ExceptionEventLogger: Writes events to structlog.
"""

from __future__ import annotations

from src.mapsync.events.schemas import LogLevel, SyncExceptionEvent
from src.mapsync.events.subscriber import ExceptionEventLogger

__all__ = [
    "ExceptionEventLogger",
    "LogLevel",
    "SyncExceptionEvent",
]
