"""Shared fixtures for mapsync tests.

Provides:
- make_mapping: MappingDefinition factory with sensible defaults
- The two-mapping store from the push/pull scenario (A pushes, B pulls)
- A richer store with mixed capabilities and a shared remote object type
"""

from __future__ import annotations

import pytest
import structlog

from src.mapsync.mappings.schemas import MappingDefinition
from src.mapsync.mappings.storage import InMemoryMappingStore


def _make_mapping(name: str, **overrides) -> MappingDefinition:
    """Create a MappingDefinition with sensible defaults."""
    defaults = {
        "name": name,
        "local_entity_type": "node",
        "remote_object_type": "Contact",
        "supports_push": False,
        "supports_pull": False,
    }
    defaults.update(overrides)
    return MappingDefinition(**defaults)


@pytest.fixture
def make_mapping():
    """Factory for MappingDefinitions with no capabilities unless overridden."""
    return _make_mapping


@pytest.fixture
def scenario_store() -> InMemoryMappingStore:
    """A pushes only, B pulls only."""
    return InMemoryMappingStore(
        [
            _make_mapping("A", supports_push=True),
            _make_mapping("B", supports_pull=True),
        ]
    )


@pytest.fixture
def mixed_store() -> InMemoryMappingStore:
    """Four mappings covering every push/pull combination."""
    return InMemoryMappingStore(
        [
            _make_mapping("contact", remote_object_type="Contact", supports_push=True, supports_pull=True),
            _make_mapping("account", remote_object_type="Account", local_entity_type="group", supports_push=True),
            _make_mapping("lead", remote_object_type="Contact", local_entity_type="user", supports_pull=True),
            _make_mapping("archive", remote_object_type="Archive"),
        ]
    )


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Restore structlog's default configuration after each test."""
    yield
    structlog.reset_defaults()
