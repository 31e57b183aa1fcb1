"""Usage-driven layout adaptation for component-based front ends."""

from adaptive_ux.core.context import AdaptiveContext, get_default_context, set_default_context
from adaptive_ux.core.errors import (
    AdaptiveUXError,
    CallbackFailure,
    LayoutNotFoundError,
    NoCurrentLayoutError,
    StorageFailure,
)
from adaptive_ux.domain.models import (
    InteractionEvent,
    InteractionType,
    LayoutConfig,
    WidgetConstraints,
    WidgetPosition,
)
from adaptive_ux.domain.services import (
    AdaptiveContainer,
    HighlightOutliers,
    InteractionTracker,
    LayoutRule,
    LayoutStore,
    LeastUsedFirst,
    MostUsedFirst,
    PreserveOrder,
    RuleEngine,
)
from adaptive_ux.infrastructure.storage import KeyValueStorageBackend, StorageBackend
from adaptive_ux.settings import AdaptiveSettings, LayoutMode

__version__ = "0.1.0"

__all__ = [
    "AdaptiveContext",
    "get_default_context",
    "set_default_context",
    "AdaptiveUXError",
    "CallbackFailure",
    "LayoutNotFoundError",
    "NoCurrentLayoutError",
    "StorageFailure",
    "InteractionEvent",
    "InteractionType",
    "LayoutConfig",
    "WidgetConstraints",
    "WidgetPosition",
    "AdaptiveContainer",
    "InteractionTracker",
    "LayoutStore",
    "RuleEngine",
    "LayoutRule",
    "MostUsedFirst",
    "LeastUsedFirst",
    "HighlightOutliers",
    "PreserveOrder",
    "KeyValueStorageBackend",
    "StorageBackend",
    "AdaptiveSettings",
    "LayoutMode",
]
