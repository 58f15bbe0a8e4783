"""Error taxonomy for mapping resolution and storage.

All errors are local, caller-recoverable conditions. The resolver never
recovers from them itself; the command layer decides whether to re-prompt,
skip, or exit with a diagnostic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.mapsync.mappings.schemas import SyncDirection


class MapSyncError(Exception):
    """Root of all mapsync errors."""


class MappingStoreError(MapSyncError):
    """Mapping definitions could not be loaded or registered."""


class UserAbortError(MapSyncError):
    """The user cancelled an interactive prompt.

    Kept separate from MappingResolutionError so callers can tell a
    cancellation apart from a bad selector.
    """

    def __init__(self, message: str = "Cancelled.") -> None:
        super().__init__(message)


class MappingResolutionError(MapSyncError):
    """Base for failures translating a selector + direction into mappings.

    Attributes:
        selector: The selector as given by the caller.
        direction: The requested direction.
    """

    def __init__(self, message: str, selector: str, direction: SyncDirection) -> None:
        super().__init__(message)
        self.selector = selector
        self.direction = direction


class MappingNotFoundError(MappingResolutionError):
    """A concrete mapping name is not present in the store."""

    def __init__(self, selector: str, direction: SyncDirection) -> None:
        super().__init__(f"Mapping {selector} does not exist.", selector, direction)


class DirectionMismatchError(MappingResolutionError):
    """A concrete mapping exists but does not support the requested direction."""

    def __init__(self, selector: str, direction: SyncDirection) -> None:
        super().__init__(
            f"Mapping {selector} does not {direction.value}.", selector, direction
        )


class EmptyResultError(MappingResolutionError):
    """No mappings matched the selector and direction."""

    def __init__(self, selector: str, direction: SyncDirection) -> None:
        qualifier = "" if direction.value == "none" else f"{direction.value} "
        super().__init__(
            f"No {qualifier}mappings matched selector {selector}.", selector, direction
        )
