"""Event model: interaction records and layout configurations."""

from adaptive_ux.domain.models.interaction_event import (
    InteractionEvent,
    InteractionType,
    InteractionValue,
)
from adaptive_ux.domain.models.layout_config import (
    LayoutConfig,
    WidgetConstraints,
    WidgetPosition,
    check_unique_widget_ids,
    new_layout_id,
)

__all__ = [
    "InteractionEvent",
    "InteractionType",
    "InteractionValue",
    "LayoutConfig",
    "WidgetConstraints",
    "WidgetPosition",
    "new_layout_id",
    "check_unique_widget_ids",
]
