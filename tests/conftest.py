"""Pytest configuration and fixtures."""

import pytest

from adaptive_ux.core.errors import StorageFailure
from adaptive_ux.domain.models import WidgetPosition
from adaptive_ux.domain.services import InteractionTracker, LayoutStore, RuleEngine
from adaptive_ux.infrastructure.kv_store import InMemoryKeyValueStore, KeyValueStore
from adaptive_ux.infrastructure.storage import KeyValueStorageBackend


class FailingKeyValueStore(KeyValueStore):
    """Substrate whose every operation fails, for best-effort persistence tests."""

    async def get(self, key: str) -> str | None:
        raise StorageFailure(f"get {key} failed")

    async def set(self, key: str, value: str) -> bool:
        raise StorageFailure(f"set {key} failed")

    async def delete(self, key: str) -> int:
        raise StorageFailure(f"delete {key} failed")


@pytest.fixture
def kv_store():
    """Create an empty in-memory key/value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def storage(kv_store):
    """Create a storage backend over the in-memory store."""
    return KeyValueStorageBackend(kv_store)


@pytest.fixture
def failing_storage():
    """Create a storage backend that fails every call."""
    return KeyValueStorageBackend(FailingKeyValueStore())


@pytest.fixture
def tracker(storage):
    """Create an interaction tracker."""
    return InteractionTracker(storage)


@pytest.fixture
def layout_store(storage):
    """Create a layout store."""
    return LayoutStore(storage)


@pytest.fixture
async def rule_engine(tracker, layout_store):
    """Create a rule engine with the default pipeline."""
    engine = RuleEngine(tracker=tracker, layout_store=layout_store)
    yield engine
    engine.stop_auto_adjustments()
    await engine.drain()


def make_positions(*widget_ids: str) -> list[WidgetPosition]:
    """Build positions with order equal to argument index."""
    return [WidgetPosition(widget_id=w, order=i) for i, w in enumerate(widget_ids)]


@pytest.fixture
async def card_layout(layout_store):
    """Create and activate a layout with four cards."""
    layout = await layout_store.create_layout(
        "Cards", make_positions("card1", "card2", "card3", "card4")
    )
    await layout_store.set_current_layout(layout.id)
    return layout
