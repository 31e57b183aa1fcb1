"""Storage backend over a flat namespaced key/value substrate.

The substrate cannot enumerate keys, so two index keys record which layout
configs and which widget event logs exist:

    layout_config_<id>                  serialized LayoutConfig
    all_layout_config_ids               JSON list of layout ids
    interaction_event_<widgetId>        JSON list of serialized events
    interaction_event_all_widget_ids    JSON list of widget ids
    current_layout_id                   id of the active layout
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from adaptive_ux.core.errors import StorageFailure
from adaptive_ux.domain.models import InteractionEvent, LayoutConfig
from adaptive_ux.infrastructure.kv_store import InMemoryKeyValueStore, KeyValueStore
from adaptive_ux.infrastructure.storage.base import StorageBackend

logger = logging.getLogger(__name__)

LAYOUT_CONFIG_PREFIX = "layout_config_"
INTERACTION_EVENT_PREFIX = "interaction_event_"
ALL_CONFIG_IDS_KEY = "all_layout_config_ids"
ALL_WIDGET_IDS_KEY = f"{INTERACTION_EVENT_PREFIX}all_widget_ids"
CURRENT_LAYOUT_KEY = "current_layout_id"


class KeyValueStorageBackend(StorageBackend):
    """Reference ``StorageBackend`` implementation.

    Not synchronized: callers must not overlap mutating calls on one key.
    """

    def __init__(self, store: KeyValueStore | None = None, key_prefix: str = "") -> None:
        """Initialize the backend.

        Args:
            store: Key/value substrate; defaults to a fresh in-memory store
            key_prefix: Namespace prepended to every key
        """
        self.store = store if store is not None else InMemoryKeyValueStore()
        self.key_prefix = key_prefix

    def _key(self, name: str) -> str:
        return f"{self.key_prefix}{name}"

    async def connect(self) -> None:
        await self.store.connect()

    async def disconnect(self) -> None:
        await self.store.disconnect()

    # Index helpers

    async def _load_json(self, key: str) -> Any:
        raw = await self.store.get(self._key(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageFailure(f"Corrupt record at {key}: {e}") from e

    async def _read_index(self, key: str) -> list[str]:
        ids = await self._load_json(key)
        if ids is None:
            return []
        if not isinstance(ids, list):
            raise StorageFailure(f"Index {key} is not a list")
        return [str(i) for i in ids]

    async def _read_event_records(self, widget_id: str) -> list[Any]:
        records = await self._load_json(f"{INTERACTION_EVENT_PREFIX}{widget_id}")
        if records is None:
            return []
        if not isinstance(records, list):
            raise StorageFailure(f"Event log for {widget_id} is not a list")
        return records

    async def _write_index(self, key: str, ids: list[str]) -> None:
        await self.store.set(self._key(key), json.dumps(ids))

    async def _add_to_index(self, key: str, item: str) -> None:
        ids = await self._read_index(key)
        if item not in ids:
            ids.append(item)
            await self._write_index(key, ids)

    # Layout configs

    async def save_layout_config(self, config: LayoutConfig) -> bool:
        result = await self.store.set(
            self._key(f"{LAYOUT_CONFIG_PREFIX}{config.id}"), config.to_json()
        )
        await self._add_to_index(ALL_CONFIG_IDS_KEY, config.id)
        return result

    async def get_layout_config(self, layout_id: str) -> LayoutConfig | None:
        raw = await self.store.get(self._key(f"{LAYOUT_CONFIG_PREFIX}{layout_id}"))
        if raw is None:
            return None
        try:
            return LayoutConfig.from_json(raw)
        except ValidationError as e:
            raise StorageFailure(f"Corrupt layout config {layout_id}: {e}") from e

    async def get_all_layout_configs(self) -> list[LayoutConfig]:
        configs = []
        for layout_id in await self._read_index(ALL_CONFIG_IDS_KEY):
            config = await self.get_layout_config(layout_id)
            if config is not None:
                configs.append(config)
        return configs

    async def delete_layout_config(self, layout_id: str) -> bool:
        removed = await self.store.delete(self._key(f"{LAYOUT_CONFIG_PREFIX}{layout_id}"))
        ids = await self._read_index(ALL_CONFIG_IDS_KEY)
        if layout_id in ids:
            ids.remove(layout_id)
            await self._write_index(ALL_CONFIG_IDS_KEY, ids)
        return removed > 0

    # Interaction events

    async def log_interaction_event(self, event: InteractionEvent) -> bool:
        key = self._key(f"{INTERACTION_EVENT_PREFIX}{event.widget_id}")
        records = await self._read_event_records(event.widget_id)
        records.append(event.model_dump(mode="json", by_alias=True))
        result = await self.store.set(key, json.dumps(records))
        await self._add_to_index(ALL_WIDGET_IDS_KEY, event.widget_id)
        return result

    async def get_interaction_events(self, widget_id: str) -> list[InteractionEvent]:
        records = await self._read_event_records(widget_id)
        try:
            return [InteractionEvent.model_validate(record) for record in records]
        except ValidationError as e:
            raise StorageFailure(f"Corrupt event log for {widget_id}: {e}") from e

    async def get_all_interaction_events(self) -> list[InteractionEvent]:
        events: list[InteractionEvent] = []
        for widget_id in await self._read_index(ALL_WIDGET_IDS_KEY):
            events.extend(await self.get_interaction_events(widget_id))
        # Stable: equal timestamps keep index order
        events.sort(key=lambda e: e.timestamp)
        return events

    async def clear_interaction_events(self) -> bool:
        for widget_id in await self._read_index(ALL_WIDGET_IDS_KEY):
            await self.store.delete(self._key(f"{INTERACTION_EVENT_PREFIX}{widget_id}"))
        await self.store.delete(self._key(ALL_WIDGET_IDS_KEY))
        return True

    # Current layout pointer

    async def save_current_layout_id(self, layout_id: str | None) -> bool:
        if layout_id is None:
            await self.store.delete(self._key(CURRENT_LAYOUT_KEY))
            return True
        return await self.store.set(self._key(CURRENT_LAYOUT_KEY), layout_id)

    async def get_current_layout_id(self) -> str | None:
        return await self.store.get(self._key(CURRENT_LAYOUT_KEY))
