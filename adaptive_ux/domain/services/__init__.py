"""Domain services."""

from adaptive_ux.domain.services.adaptive_container import AdaptiveContainer, arrange_children
from adaptive_ux.domain.services.layout_store import LayoutStore
from adaptive_ux.domain.services.rule_engine import RuleEngine, count_interactions
from adaptive_ux.domain.services.rules import (
    HighlightOutliers,
    LayoutRule,
    LeastUsedFirst,
    MostUsedFirst,
    PreserveOrder,
)
from adaptive_ux.domain.services.tracker import InteractionTracker

__all__ = [
    "AdaptiveContainer",
    "arrange_children",
    "InteractionTracker",
    "LayoutStore",
    "RuleEngine",
    "count_interactions",
    "LayoutRule",
    "MostUsedFirst",
    "LeastUsedFirst",
    "HighlightOutliers",
    "PreserveOrder",
]
