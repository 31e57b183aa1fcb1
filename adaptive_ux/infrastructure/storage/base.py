"""Storage backend interface for layouts and interaction events."""

from abc import ABC, abstractmethod

from adaptive_ux.domain.models import InteractionEvent, LayoutConfig


class StorageBackend(ABC):
    """Durable persistence contract used by the tracker and layout store.

    Every operation may raise ``StorageFailure``; callers treat it as
    non-fatal.
    """

    async def connect(self) -> None:
        """Prepare the backend for use. No-op by default."""

    async def disconnect(self) -> None:
        """Release backend resources. No-op by default."""

    @abstractmethod
    async def save_layout_config(self, config: LayoutConfig) -> bool:
        """Upsert a layout configuration by id.

        Args:
            config: Layout to persist

        Returns:
            True if the record was written
        """

    @abstractmethod
    async def get_layout_config(self, layout_id: str) -> LayoutConfig | None:
        """Get a layout configuration by id, or None if absent."""

    @abstractmethod
    async def get_all_layout_configs(self) -> list[LayoutConfig]:
        """Get every stored layout configuration."""

    @abstractmethod
    async def delete_layout_config(self, layout_id: str) -> bool:
        """Delete a layout configuration.

        Returns:
            True if a record was removed
        """

    @abstractmethod
    async def log_interaction_event(self, event: InteractionEvent) -> bool:
        """Append an event to its widget's log."""

    @abstractmethod
    async def get_interaction_events(self, widget_id: str) -> list[InteractionEvent]:
        """Get all events logged for one widget, in logging order."""

    @abstractmethod
    async def get_all_interaction_events(self) -> list[InteractionEvent]:
        """Get every logged event sorted by timestamp ascending."""

    @abstractmethod
    async def clear_interaction_events(self) -> bool:
        """Remove every event log."""

    @abstractmethod
    async def save_current_layout_id(self, layout_id: str | None) -> bool:
        """Persist the current-layout pointer; None clears it."""

    @abstractmethod
    async def get_current_layout_id(self) -> str | None:
        """Get the persisted current-layout pointer."""
