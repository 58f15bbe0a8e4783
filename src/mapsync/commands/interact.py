"""Interactive collection of mapping and remote object names.

Fills in a missing or unusable command argument by prompting, then hands
the chosen value back to the caller, which passes it to the resolver.
Validation here mirrors the resolver's rules but only logs: an invalid
name leads to a prompt instead of an error.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

import structlog

from src.mapsync.commands.prompter import InteractivePrompter
from src.mapsync.mappings.exceptions import UserAbortError
from src.mapsync.mappings.schemas import (
    ALL_SELECTOR,
    MappingDefinition,
    SyncDirection,
    is_all_selector,
)
from src.mapsync.mappings.storage import MappingStore

logger = structlog.get_logger(__name__)


class RemoteObjectCatalog(Protocol):
    """Anything that can list remote object type names."""

    def objects(self) -> Mapping[str, Any]: ...


class MappedObjectCatalog:
    """Remote object catalog derived from the stored mappings.

    Lists each distinct remote_object_type once, in store order, with the
    names of the mappings that target it.
    """

    def __init__(self, store: MappingStore) -> None:
        self._store = store

    def objects(self) -> dict[str, list[str]]:
        catalog: dict[str, list[str]] = {}
        for mapping in self._store.load_multiple():
            if mapping is None or not mapping.remote_object_type:
                continue
            catalog.setdefault(mapping.remote_object_type, []).append(mapping.name)
        return catalog


class MappingInteraction:
    """Prompts for mapping and object names a command needs.

    Args:
        store: Mapping store used to validate names and build choices.
        prompter: Prompter used when a value is missing or unusable.
    """

    def __init__(self, store: MappingStore, prompter: InteractivePrompter) -> None:
        self._store = store
        self._prompter = prompter

    def interact_mapping(
        self,
        name: str | None,
        message: str = "Choose a mapping",
        all_option: str | None = None,
        direction: SyncDirection | str | None = SyncDirection.NONE,
    ) -> str:
        """Return a usable mapping name, prompting if needed.

        Args:
            name: Name given on the command line, if any.
            message: Prompt message.
            all_option: Label for an extra "ALL" choice. None hides it.
            direction: Restrict choices to push- or pull-capable mappings.

        Returns:
            A mapping name, or "ALL".

        Raises:
            UserAbortError: The user cancelled the prompt.
        """
        direction = SyncDirection.coerce(direction)

        if name:
            if is_all_selector(name):
                return ALL_SELECTOR
            mapping = self._store.load(name)
            if mapping is None:
                logger.error("mapping.interact_not_found", mapping=name)
            elif not mapping.supports(direction):
                logger.error(
                    "mapping.interact_direction_mismatch",
                    mapping=name,
                    direction=direction.value,
                )
            else:
                return name

        options = self._options_for(direction)
        return self._choose_mapping_name(
            [m.name for m in options], message, all_option
        )

    def interact_push_mappings(
        self,
        name: str | None,
        message: str = "Choose a mapping",
        all_option: str | None = None,
    ) -> str:
        return self.interact_mapping(name, message, all_option, SyncDirection.PUSH)

    def interact_pull_mappings(
        self,
        name: str | None,
        message: str = "Choose a mapping",
        all_option: str | None = None,
    ) -> str:
        return self.interact_mapping(name, message, all_option, SyncDirection.PULL)

    def interact_object(
        self,
        object_name: str | None,
        catalog: RemoteObjectCatalog,
        message: str = "Choose a remote object name",
    ) -> str:
        """Return a remote object name, prompting from the catalog if missing.

        No validation is done against the remote API.

        Raises:
            UserAbortError: The user cancelled the prompt.
        """
        if object_name:
            return object_name
        names = list(catalog.objects())
        answer = self._prompter.choose(message, dict(zip(names, names)))
        if not answer:
            raise UserAbortError()
        return answer

    def _options_for(self, direction: SyncDirection) -> list[MappingDefinition]:
        if direction == SyncDirection.PULL:
            loaded = self._store.load_pull_mappings()
        elif direction == SyncDirection.PUSH:
            loaded = self._store.load_push_mappings()
        else:
            loaded = self._store.load_multiple()
        return [m for m in loaded if m is not None]

    def _choose_mapping_name(
        self, names: list[str], message: str, all_option: str | None
    ) -> str:
        options = dict(zip(names, names))
        if all_option:
            options[ALL_SELECTOR] = all_option
        answer = self._prompter.choose(message, options)
        if not answer:
            raise UserAbortError()
        return answer
