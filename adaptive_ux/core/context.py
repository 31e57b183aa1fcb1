"""Application context wiring storage, tracker, layout store and rule engine.

Hosts build one ``AdaptiveContext`` at their root and hand it to every
consumer. ``get_default_context`` lazily provides a process-wide instance for
code that has no context passed in; ``set_default_context`` replaces it for
callers that look it up afterwards. Subscribers attached to a replaced
context stay attached to that old context.
"""

import logging

from adaptive_ux.core.broadcast import Subscription
from adaptive_ux.core.errors import StorageFailure
from adaptive_ux.domain.models import InteractionEvent, LayoutConfig
from adaptive_ux.domain.services import InteractionTracker, LayoutStore, RuleEngine
from adaptive_ux.infrastructure.storage import StorageBackend, create_storage_backend
from adaptive_ux.settings import AdaptiveSettings, settings as default_settings

logger = logging.getLogger(__name__)


class AdaptiveContext:
    """Owns one adaptation pipeline."""

    def __init__(
        self,
        settings: AdaptiveSettings,
        storage: StorageBackend,
        tracker: InteractionTracker,
        layout_store: LayoutStore,
        rule_engine: RuleEngine,
    ) -> None:
        self.settings = settings
        self.storage = storage
        self.tracker = tracker
        self.layout_store = layout_store
        self.rule_engine = rule_engine
        self.initialized = False
        self._debug_subscriptions: list[Subscription] = []

    @classmethod
    def create(
        cls,
        settings: AdaptiveSettings | None = None,
        storage: StorageBackend | None = None,
    ) -> "AdaptiveContext":
        """Build a context from settings.

        Args:
            settings: Configuration; defaults to the module-level settings
            storage: Backend override; defaults to the one settings select
        """
        config = settings or default_settings
        backend = storage if storage is not None else create_storage_backend(config)
        tracker = InteractionTracker(backend)
        layout_store = LayoutStore(backend)
        rule_engine = RuleEngine(
            tracker=tracker,
            layout_store=layout_store,
            min_interactions=config.threshold,
        )
        return cls(config, backend, tracker, layout_store, rule_engine)

    async def init(self) -> None:
        """Load layouts and start the configured background behavior."""
        if self.initialized:
            logger.info("Adaptive context already initialized")
            return

        try:
            await self.storage.connect()
        except StorageFailure as e:
            logger.warning(f"Storage unavailable, continuing with in-memory state: {e}")

        await self.layout_store.load()

        if self.settings.enable_auto_adjust:
            self.rule_engine.start_auto_adjustments(
                interval=self.settings.auto_adjust_interval_seconds
            )

        if self.settings.enable_debug_logging:
            self._enable_debug_logging()

        self.initialized = True
        logger.info(
            "Adaptive context initialized",
            extra={
                "layout_mode": self.settings.layout_mode.value,
                "auto_adjust": self.settings.enable_auto_adjust,
            },
        )

    def _enable_debug_logging(self) -> None:
        def log_interaction(event: InteractionEvent) -> None:
            logger.debug(
                f"Interaction - {event.type.value} on {event.widget_id}",
                extra={"widget_id": event.widget_id},
            )

        def log_layout_change(layout: LayoutConfig) -> None:
            logger.debug(f"Layout changed - {layout.id}", extra={"layout_id": layout.id})

        self._debug_subscriptions = [
            self.tracker.on_interaction.subscribe(log_interaction),
            self.layout_store.on_layout_change.subscribe(log_layout_change),
        ]

    async def reset(self) -> None:
        """Clear interaction data and stop auto adjustments."""
        if not self.initialized:
            logger.info("Adaptive context not initialized")
            return

        await self.tracker.clear_all_events()
        self.rule_engine.stop_auto_adjustments()
        for subscription in self._debug_subscriptions:
            subscription.cancel()
        self._debug_subscriptions = []
        self.initialized = False
        logger.info("Adaptive context reset")

    async def close(self) -> None:
        """Stop background work and release the storage connection."""
        self.rule_engine.stop_auto_adjustments()
        await self.rule_engine.drain()
        await self.storage.disconnect()
        self.initialized = False


_default_context: AdaptiveContext | None = None


def get_default_context() -> AdaptiveContext:
    """Get the process-wide context, creating it on first access."""
    global _default_context
    if _default_context is None:
        _default_context = AdaptiveContext.create()
    return _default_context


def set_default_context(context: AdaptiveContext | None) -> None:
    """Replace the process-wide context (None drops it)."""
    global _default_context
    _default_context = context
