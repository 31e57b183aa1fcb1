"""Layout store: owns named layout configurations and the current layout."""

import logging
from typing import Callable

from adaptive_ux.core.broadcast import Broadcaster
from adaptive_ux.core.errors import LayoutNotFoundError, NoCurrentLayoutError, StorageFailure
from adaptive_ux.domain.models import LayoutConfig, WidgetPosition
from adaptive_ux.infrastructure.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class LayoutStore:
    """Manages layout configurations for adaptive layouts.

    The in-memory cache is the source of truth for the session; storage
    writes are best effort. Two notification surfaces exist:

    - ``add_listener`` callbacks take no arguments and fire on every
      save and activation, and when the current layout is deleted.
    - ``on_layout_change`` emits the full current ``LayoutConfig`` whenever
      the current layout is activated or mutated while active.
    """

    def __init__(self, storage: StorageBackend) -> None:
        """Initialize store with a storage backend.

        Args:
            storage: Backend that persists layout configurations
        """
        self.storage = storage
        self._config_cache: dict[str, LayoutConfig] = {}
        self._current_layout_id: str | None = None
        self._listeners: Broadcaster[None] = Broadcaster("layout store listener")
        self.on_layout_change: Broadcaster[LayoutConfig] = Broadcaster("layout change stream")

    @property
    def current_layout_id(self) -> str | None:
        return self._current_layout_id

    @property
    def current_layout(self) -> LayoutConfig | None:
        """Current active layout configuration."""
        if self._current_layout_id is None:
            return None
        return self._config_cache.get(self._current_layout_id)

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Add a no-argument callback fired on every structural change."""
        self._listeners.subscribe(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.unsubscribe(callback)

    async def load(self) -> None:
        """Load stored layouts into the cache and restore the current layout.

        Falls back to the first stored layout when no pointer was persisted.
        """
        await self._load_configs_from_storage()

        if self._current_layout_id is not None:
            return

        try:
            stored_id = await self.storage.get_current_layout_id()
        except StorageFailure as e:
            logger.warning(f"Failed to load current layout pointer: {e}")
            stored_id = None

        if stored_id is not None and stored_id in self._config_cache:
            self._current_layout_id = stored_id
        elif self._config_cache:
            self._current_layout_id = next(iter(self._config_cache))

        if self._current_layout_id is not None:
            logger.info("Restored current layout", extra={"layout_id": self._current_layout_id})

    async def _load_configs_from_storage(self) -> None:
        try:
            configs = await self.storage.get_all_layout_configs()
        except StorageFailure as e:
            logger.warning(f"Failed to load configurations: {e}")
            return
        for config in configs:
            self._config_cache[config.id] = config

    async def create_layout(
        self,
        name: str,
        initial_positions: list[WidgetPosition] | None = None,
    ) -> LayoutConfig:
        """Create and persist a new layout configuration.

        The new layout is not activated; call ``set_current_layout``.

        Args:
            name: Display name
            initial_positions: Starting widget positions

        Returns:
            The created layout
        """
        config = LayoutConfig(
            name=name,
            positions=[p.model_copy(deep=True) for p in initial_positions or []],
        )
        await self._save_config(config)
        logger.info(f"Created layout '{name}'", extra={"layout_id": config.id})
        return config

    async def get_layout(self, layout_id: str) -> LayoutConfig | None:
        """Get a layout configuration by id, from cache or storage."""
        if layout_id in self._config_cache:
            return self._config_cache[layout_id]

        try:
            config = await self.storage.get_layout_config(layout_id)
        except StorageFailure as e:
            logger.warning(f"Failed to load layout: {e}", extra={"layout_id": layout_id})
            return None

        if config is not None:
            self._config_cache[layout_id] = config
        return config

    async def get_all_layouts(self) -> list[LayoutConfig]:
        """Reload all layouts from storage and return every cached layout."""
        await self._load_configs_from_storage()
        return list(self._config_cache.values())

    async def set_current_layout(self, layout_id: str) -> None:
        """Set the current active layout.

        Raises:
            LayoutNotFoundError: If the layout is in neither cache nor storage
        """
        if await self.get_layout(layout_id) is None:
            raise LayoutNotFoundError(layout_id)

        self._current_layout_id = layout_id
        await self._persist_current_pointer()

        self._listeners.emit()
        self._notify_layout_change()

    def _require_current(self, operation: str) -> LayoutConfig:
        layout = self.current_layout
        if layout is None:
            raise NoCurrentLayoutError(operation)
        return layout

    async def update_widget_position(self, position: WidgetPosition) -> None:
        """Insert or replace a widget position in the current layout.

        Raises:
            NoCurrentLayoutError: If no layout is active
        """
        layout = self._require_current("update_widget_position")
        position = position.model_copy(deep=True)

        for index, existing in enumerate(layout.positions):
            if existing.widget_id == position.widget_id:
                layout.positions[index] = position
                break
        else:
            layout.positions.append(position)

        layout.touch()
        await self._save_config(layout)

    async def remove_widget_position(self, widget_id: str) -> None:
        """Remove every position for ``widget_id`` from the current layout.

        Raises:
            NoCurrentLayoutError: If no layout is active
        """
        layout = self._require_current("remove_widget_position")

        layout.positions[:] = [p for p in layout.positions if p.widget_id != widget_id]
        layout.touch()
        await self._save_config(layout)

    async def reorder_widgets(self, widget_ids: list[str]) -> None:
        """Reorder the current layout to follow ``widget_ids``.

        Each listed id gets ``order`` equal to its index; ids without a
        position get a new visible one. Positions not listed are kept and
        renumbered after the listed ones, in their previous relative order.
        Positions are then sorted by ``order``.

        Raises:
            NoCurrentLayoutError: If no layout is active
        """
        layout = self._require_current("reorder_widgets")

        for index, widget_id in enumerate(widget_ids):
            position = layout.find_position(widget_id)
            if position is None:
                layout.positions.append(WidgetPosition(widget_id=widget_id, order=index))
            else:
                position.order = index

        listed = set(widget_ids)
        unlisted = sorted(
            (p for p in layout.positions if p.widget_id not in listed),
            key=lambda p: p.order,
        )
        for offset, position in enumerate(unlisted):
            position.order = len(widget_ids) + offset

        layout.positions.sort(key=lambda p: p.order)
        layout.touch()
        await self._save_config(layout)

    async def delete_layout(self, layout_id: str) -> None:
        """Delete a layout configuration from cache and storage.

        If it was current, the first remaining cached layout becomes current.
        """
        self._config_cache.pop(layout_id, None)

        try:
            await self.storage.delete_layout_config(layout_id)
        except StorageFailure as e:
            logger.warning(f"Failed to delete layout: {e}", extra={"layout_id": layout_id})

        if self._current_layout_id != layout_id:
            return

        self._current_layout_id = next(iter(self._config_cache), None)
        await self._persist_current_pointer()
        self._listeners.emit()

        if self._current_layout_id is not None:
            self._notify_layout_change()

    async def _save_config(self, config: LayoutConfig) -> None:
        """Cache, persist and announce a layout configuration."""
        self._config_cache[config.id] = config

        try:
            await self.storage.save_layout_config(config)
        except StorageFailure as e:
            logger.warning(f"Failed to save layout: {e}", extra={"layout_id": config.id})

        self._listeners.emit()

        if config.id == self._current_layout_id:
            self._notify_layout_change()

    async def _persist_current_pointer(self) -> None:
        try:
            await self.storage.save_current_layout_id(self._current_layout_id)
        except StorageFailure as e:
            logger.warning(f"Failed to persist current layout pointer: {e}")

    def _notify_layout_change(self) -> None:
        layout = self.current_layout
        if layout is not None:
            self.on_layout_change.emit(layout)
