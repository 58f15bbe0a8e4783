"""Mapping resolver -- turns a (selector, direction) pair into mappings.

Selector is a concrete mapping name or the ALL sentinel (case-insensitive).
Direction narrows the result to push- or pull-capable mappings.

The two selector kinds treat an unsupported direction differently:
- ALL silently filters out mappings that do not support the direction
- a concrete name raises DirectionMismatchError

The resolver is a pure query over the store: no writes, no logging.
Callers decide how to report failures.
"""

from __future__ import annotations

from src.mapsync.mappings.exceptions import (
    DirectionMismatchError,
    EmptyResultError,
    MappingNotFoundError,
)
from src.mapsync.mappings.schemas import (
    ALL_SELECTOR,
    MappingDefinition,
    SyncDirection,
    is_all_selector,
)
from src.mapsync.mappings.storage import MappingStore


class MappingResolver:
    """Resolves which mapping definitions a sync run applies to.

    Holds no state beyond the store reference; safe to reuse across calls.

    Args:
        store: Source of mapping definitions.
    """

    def __init__(self, store: MappingStore) -> None:
        self._store = store

    def resolve(
        self,
        selector: str,
        direction: SyncDirection | str | None = SyncDirection.NONE,
    ) -> list[MappingDefinition]:
        """Resolve a selector and direction into a non-empty list of mappings.

        Args:
            selector: Mapping name, or "ALL" in any case.
            direction: NONE (or None), PUSH or PULL.

        Returns:
            Mappings in store order.

        Raises:
            MappingNotFoundError: Named mapping is not in the store.
            DirectionMismatchError: Named mapping does not support direction.
            EmptyResultError: Nothing matched.
        """
        direction = SyncDirection.coerce(direction)

        if is_all_selector(selector):
            selector = ALL_SELECTOR
            if direction == SyncDirection.PULL:
                mappings = self._store.load_pull_mappings()
            elif direction == SyncDirection.PUSH:
                mappings = self._store.load_push_mappings()
            else:
                mappings = self._store.load_multiple()
        else:
            mapping = self._store.load(selector)
            if mapping is None:
                raise MappingNotFoundError(selector, direction)
            if not mapping.supports(direction):
                raise DirectionMismatchError(selector, direction)
            mappings = [mapping]

        # Stores may hand back holes for stale references.
        resolved = [m for m in mappings if m is not None]
        if not resolved:
            raise EmptyResultError(selector, direction)
        return resolved

    def resolve_push(self, selector: str) -> list[MappingDefinition]:
        """Resolve mappings for an outbound (push) run."""
        return self.resolve(selector, SyncDirection.PUSH)

    def resolve_pull(self, selector: str) -> list[MappingDefinition]:
        """Resolve mappings for an inbound (pull) run."""
        return self.resolve(selector, SyncDirection.PULL)
