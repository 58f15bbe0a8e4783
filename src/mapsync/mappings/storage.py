"""Mapping storage -- where mapping definitions are loaded from.

Provides the abstract MappingStore interface consumed by the resolver and
two concrete stores:
- InMemoryMappingStore: insertion-ordered, used directly in tests and as
  the backing store for file-based loading
- JsonFileMappingStore: reads a JSON document of mapping definitions once

All loads are synchronous and return mappings in definition order.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from src.mapsync.mappings.exceptions import MappingStoreError
from src.mapsync.mappings.schemas import MappingDefinition

logger = structlog.get_logger(__name__)


class MappingStore(ABC):
    """Abstract interface for loading mapping definitions.

    Methods:
        load: Fetch one mapping by name, or None.
        load_multiple: Fetch every mapping.
        load_push_mappings: Fetch mappings configured for push.
        load_pull_mappings: Fetch mappings configured for pull.
    """

    @abstractmethod
    def load(self, name: str) -> MappingDefinition | None:
        """Fetch a mapping by name."""
        ...

    @abstractmethod
    def load_multiple(self) -> list[MappingDefinition | None]:
        """Fetch all mappings in definition order."""
        ...

    @abstractmethod
    def load_push_mappings(self) -> list[MappingDefinition | None]:
        """Fetch all mappings with supports_push set."""
        ...

    @abstractmethod
    def load_pull_mappings(self) -> list[MappingDefinition | None]:
        """Fetch all mappings with supports_pull set."""
        ...


class InMemoryMappingStore(MappingStore):
    """Mapping store backed by an insertion-ordered dict.

    Args:
        mappings: Initial mapping definitions. Names must be unique.
    """

    def __init__(self, mappings: Iterable[MappingDefinition] = ()) -> None:
        self._mappings: dict[str, MappingDefinition] = {}
        for mapping in mappings:
            self.add(mapping)

    def add(self, mapping: MappingDefinition) -> None:
        """Register a mapping. Raises MappingStoreError on a duplicate name."""
        if mapping.name in self._mappings:
            raise MappingStoreError(f"Duplicate mapping name: {mapping.name}")
        self._mappings[mapping.name] = mapping

    def __len__(self) -> int:
        return len(self._mappings)

    def load(self, name: str) -> MappingDefinition | None:
        return self._mappings.get(name)

    def load_multiple(self) -> list[MappingDefinition | None]:
        return list(self._mappings.values())

    def load_push_mappings(self) -> list[MappingDefinition | None]:
        return [m for m in self._mappings.values() if m.does_push()]

    def load_pull_mappings(self) -> list[MappingDefinition | None]:
        return [m for m in self._mappings.values() if m.does_pull()]


class JsonFileMappingStore(InMemoryMappingStore):
    """Mapping store loaded from a JSON file.

    The document is either ``{"mappings": [...]}`` or a bare list of
    mapping objects. The file is read once, at construction.

    Args:
        path: Path to the JSON document.

    Raises:
        MappingStoreError: File missing or unreadable, not UTF-8, not valid
            JSON, or an entry fails validation.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(self._read(self.path))
        logger.debug("mapping_store.loaded", path=str(self.path), count=len(self))

    @staticmethod
    def _read(path: Path) -> list[MappingDefinition]:
        try:
            raw: Any = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise MappingStoreError(f"Mappings file not found: {path}") from exc
        except OSError as exc:
            raise MappingStoreError(f"Mappings file {path} could not be read: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise MappingStoreError(f"Mappings file {path} is not valid UTF-8: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise MappingStoreError(f"Mappings file {path} is not valid JSON: {exc}") from exc

        entries = raw.get("mappings") if isinstance(raw, dict) else raw
        if not isinstance(entries, list):
            raise MappingStoreError(
                f"Mappings file {path} must contain a list or a 'mappings' list"
            )

        mappings: list[MappingDefinition] = []
        for index, entry in enumerate(entries):
            try:
                mappings.append(MappingDefinition.model_validate(entry))
            except ValidationError as exc:
                raise MappingStoreError(
                    f"Invalid mapping at index {index} in {path}: {exc}"
                ) from exc
        return mappings
