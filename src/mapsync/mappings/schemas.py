"""Pydantic schemas for sync mapping definitions.

Defines:
- SyncDirection: none / push / pull constraint for a sync run
- MappingDefinition: a named link between a local entity type and a remote
  CRM object type, with independent push and pull capability flags
- ALL_SELECTOR / normalize_selector: the "every mapping" sentinel
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

ALL_SELECTOR = "ALL"


class SyncDirection(str, Enum):
    """Direction of a sync run.

    NONE means no directional constraint: every mapping qualifies.
    """

    NONE = "none"
    PUSH = "push"  # local -> remote
    PULL = "pull"  # remote -> local

    @classmethod
    def coerce(cls, value: SyncDirection | str | None) -> SyncDirection:
        """Accept None, a member, or its string value."""
        if value is None:
            return cls.NONE
        return cls(value)


class MappingDefinition(BaseModel):
    """A named sync mapping, immutable once loaded.

    Attributes:
        name: Unique identifier, the key in the mapping store.
        label: Human-readable label. Defaults to name.
        local_entity_type: Local entity type (e.g. "node", "user").
        local_bundle: Optional bundle of the local entity type.
        remote_object_type: Remote CRM object type (e.g. "Contact").
        supports_push: Configured for outbound (local -> remote) sync.
        supports_pull: Configured for inbound (remote -> local) sync.
        field_mappings: Local field name -> remote field name (read-only).
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    label: str = ""
    local_entity_type: str = ""
    local_bundle: str | None = None
    remote_object_type: str = ""
    supports_push: bool = False
    supports_pull: bool = False
    field_mappings: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    @field_validator("field_mappings", mode="after")
    @classmethod
    def _freeze_field_mappings(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("field_mappings")
    def _serialize_field_mappings(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    @model_validator(mode="before")
    @classmethod
    def _default_label(cls, data):
        if isinstance(data, dict) and not data.get("label") and data.get("name"):
            data = {**data, "label": data["name"]}
        return data

    def does_push(self) -> bool:
        return self.supports_push

    def does_pull(self) -> bool:
        return self.supports_pull

    def supports(self, direction: SyncDirection) -> bool:
        """True if this mapping can run in the given direction."""
        if direction == SyncDirection.PUSH:
            return self.supports_push
        if direction == SyncDirection.PULL:
            return self.supports_pull
        return True


def is_all_selector(selector: str) -> bool:
    """Case-insensitive check for the ALL sentinel."""
    return selector.upper() == ALL_SELECTOR


def normalize_selector(selector: str) -> str:
    """Upper-case the ALL sentinel; any other name is returned unchanged."""
    return ALL_SELECTOR if is_all_selector(selector) else selector
