"""Sync dispatch -- resolve mappings, then hand each one to a sync handler.

Resolution errors are fail-fast and propagate to the caller. Handler
failures are per-mapping: the failing mapping is recorded, reported as a
SyncExceptionEvent, and dispatch moves on to the next mapping.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog
from pydantic import BaseModel, Field

from src.mapsync.events import ExceptionEventLogger, LogLevel, SyncExceptionEvent
from src.mapsync.mappings.resolver import MappingResolver
from src.mapsync.mappings.schemas import MappingDefinition, SyncDirection

logger = structlog.get_logger(__name__)

SyncHandler = Callable[[MappingDefinition, SyncDirection], None]


class DispatchResult(BaseModel):
    """Summary of a dispatch run."""

    direction: SyncDirection
    dispatched: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def log_only_handler(mapping: MappingDefinition, direction: SyncDirection) -> None:
    """Record the hand-off of a mapping without syncing any records."""
    logger.info(
        "sync.mapping_dispatched",
        mapping=mapping.name,
        direction=direction.value,
        local_entity_type=mapping.local_entity_type,
        remote_object_type=mapping.remote_object_type,
    )


class SyncDispatcher:
    """Dispatches resolved mappings to a sync handler in store order.

    Args:
        resolver: Resolves selectors into mappings.
        handler: Called once per mapping with the run direction.
        event_logger: Receives a SyncExceptionEvent for each handler failure.
    """

    def __init__(
        self,
        resolver: MappingResolver,
        handler: SyncHandler = log_only_handler,
        event_logger: ExceptionEventLogger | None = None,
    ) -> None:
        self._resolver = resolver
        self._handler = handler
        self._events = event_logger or ExceptionEventLogger()

    def dispatch(
        self, selector: str, direction: SyncDirection | str | None
    ) -> DispatchResult:
        """Resolve ``selector`` and run the handler for each mapping.

        Raises:
            MappingResolutionError: The selector could not be resolved.
        """
        direction = SyncDirection.coerce(direction)
        mappings = self._resolver.resolve(selector, direction)
        result = DispatchResult(direction=direction)

        for mapping in mappings:
            try:
                self._handler(mapping, direction)
            except Exception as exc:
                result.failed.append(mapping.name)
                result.errors.append(
                    f"{direction.value.capitalize()} failed for mapping {mapping.name}: {exc}"
                )
                self._events.handle(
                    SyncExceptionEvent(
                        exception=exc,
                        level=LogLevel.ERROR,
                        message="sync.mapping_failed",
                        context={"mapping": mapping.name, "direction": direction.value},
                    )
                )
                continue
            result.dispatched.append(mapping.name)

        logger.info(
            "sync.dispatch_complete",
            direction=direction.value,
            dispatched=len(result.dispatched),
            errors=len(result.errors),
        )
        return result

    def push(self, selector: str) -> DispatchResult:
        return self.dispatch(selector, SyncDirection.PUSH)

    def pull(self, selector: str) -> DispatchResult:
        return self.dispatch(selector, SyncDirection.PULL)
