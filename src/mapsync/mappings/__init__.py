"""Mapping definitions, storage and resolution.

Provides:
- MappingDefinition / SyncDirection: the mapping data model
- MappingStore: abstract storage, with in-memory and JSON file stores
- MappingResolver: selector + direction -> mappings, with the
  MappingResolutionError taxonomy
"""

from __future__ import annotations

from src.mapsync.mappings.exceptions import (
    DirectionMismatchError,
    EmptyResultError,
    MappingNotFoundError,
    MappingResolutionError,
    MappingStoreError,
    MapSyncError,
    UserAbortError,
)
from src.mapsync.mappings.resolver import MappingResolver
from src.mapsync.mappings.schemas import (
    ALL_SELECTOR,
    MappingDefinition,
    SyncDirection,
    is_all_selector,
    normalize_selector,
)
from src.mapsync.mappings.storage import (
    InMemoryMappingStore,
    JsonFileMappingStore,
    MappingStore,
)

__all__ = [
    "ALL_SELECTOR",
    "DirectionMismatchError",
    "EmptyResultError",
    "InMemoryMappingStore",
    "JsonFileMappingStore",
    "MapSyncError",
    "MappingDefinition",
    "MappingNotFoundError",
    "MappingResolutionError",
    "MappingResolver",
    "MappingStore",
    "MappingStoreError",
    "SyncDirection",
    "UserAbortError",
    "is_all_selector",
    "normalize_selector",
]
