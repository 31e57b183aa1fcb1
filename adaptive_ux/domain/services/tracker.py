"""Interaction tracker: records, persists and fans out widget interactions."""

import logging
from typing import Callable

from adaptive_ux.core.broadcast import Broadcaster
from adaptive_ux.core.errors import StorageFailure
from adaptive_ux.domain.models import InteractionEvent, InteractionType, InteractionValue
from adaptive_ux.infrastructure.storage.base import StorageBackend

logger = logging.getLogger(__name__)

InteractionCallback = Callable[[InteractionEvent], None]


class InteractionTracker:
    """Tracks and logs user interactions with adaptive widgets.

    Two notification channels fire after every tracked interaction, in this
    order: the callbacks registered with ``add_listener`` and then the
    ``on_interaction`` stream. Persistence is best effort and never blocks
    notification.
    """

    def __init__(self, storage: StorageBackend) -> None:
        """Initialize tracker with a storage backend.

        Args:
            storage: Backend that persists interaction events
        """
        self.storage = storage
        self._callbacks: Broadcaster[InteractionEvent] = Broadcaster("interaction callback")
        self.on_interaction: Broadcaster[InteractionEvent] = Broadcaster("interaction stream")

    async def track_interaction(
        self,
        widget_id: str,
        type: InteractionType,
        value: InteractionValue = None,
    ) -> InteractionEvent:
        """Track a user interaction.

        Args:
            widget_id: Id of the widget interacted with
            type: Kind of interaction
            value: Optional payload (scroll offset, focus state, ...)

        Returns:
            The recorded event
        """
        event = InteractionEvent(widget_id=widget_id, type=type, value=value)

        try:
            await self.storage.log_interaction_event(event)
        except StorageFailure as e:
            logger.warning(
                f"Failed to log interaction: {e}",
                extra={"widget_id": widget_id},
            )

        self._callbacks.emit(event)
        self.on_interaction.emit(event)
        return event

    def add_listener(self, callback: InteractionCallback) -> None:
        """Add a callback to be called when interactions occur."""
        self._callbacks.subscribe(callback)

    def remove_listener(self, callback: InteractionCallback) -> None:
        """Remove a previously added callback. Unknown callbacks are ignored."""
        self._callbacks.unsubscribe(callback)

    @property
    def listener_count(self) -> int:
        return len(self._callbacks)

    async def get_events_for_widget(self, widget_id: str) -> list[InteractionEvent]:
        """Get all interaction events for a widget."""
        try:
            return await self.storage.get_interaction_events(widget_id)
        except StorageFailure as e:
            logger.warning(f"Failed to load interactions: {e}", extra={"widget_id": widget_id})
            return []

    async def get_all_events(self) -> list[InteractionEvent]:
        """Get all interaction events, oldest first."""
        try:
            return await self.storage.get_all_interaction_events()
        except StorageFailure as e:
            logger.warning(f"Failed to load interactions: {e}")
            return []

    async def clear_all_events(self) -> None:
        """Clear all stored interaction events."""
        try:
            await self.storage.clear_interaction_events()
        except StorageFailure as e:
            logger.warning(f"Failed to clear interactions: {e}")
