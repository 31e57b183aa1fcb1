"""Layout rules: turn per-widget interaction counts into a widget order.

Rules are pure. Ties always keep the encounter order of the counts mapping,
since every rule relies on Python's stable sort.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence


class LayoutRule(ABC):
    """A rule for ordering widgets by usage."""

    @abstractmethod
    def apply(self, interaction_counts: Mapping[str, int]) -> list[str]:
        """Return widget ids in their recommended order.

        Args:
            interaction_counts: Interaction count per widget id

        Returns:
            Widget ids, first to last
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class MostUsedFirst(LayoutRule):
    """Sort widgets by interaction count, most used first."""

    def apply(self, interaction_counts: Mapping[str, int]) -> list[str]:
        return sorted(interaction_counts, key=lambda w: interaction_counts[w], reverse=True)


class LeastUsedFirst(LayoutRule):
    """Sort widgets by interaction count, least used first."""

    def apply(self, interaction_counts: Mapping[str, int]) -> list[str]:
        return sorted(interaction_counts, key=lambda w: interaction_counts[w])


class HighlightOutliers(LayoutRule):
    """Move widgets with anomalously high usage to the front.

    A widget is an outlier when its count exceeds ``mean * threshold``.
    Outliers and the rest each keep their encounter order.
    """

    def __init__(self, threshold: float = 2.0) -> None:
        self.threshold = threshold

    def apply(self, interaction_counts: Mapping[str, int]) -> list[str]:
        if not interaction_counts:
            return []

        mean = sum(interaction_counts.values()) / len(interaction_counts)
        cutoff = mean * self.threshold

        outliers = [w for w, count in interaction_counts.items() if count > cutoff]
        rest = [w for w, count in interaction_counts.items() if count <= cutoff]
        return outliers + rest

    def __repr__(self) -> str:
        return f"HighlightOutliers(threshold={self.threshold})"


class PreserveOrder(LayoutRule):
    """Pin some widgets to the front in a fixed order.

    Pinned widgets absent from the counts are skipped. The remaining widgets
    follow, most used first.
    """

    def __init__(self, fixed_order_widgets: Sequence[str]) -> None:
        # dict.fromkeys drops duplicates but keeps first-seen order
        self.fixed_order_widgets = list(dict.fromkeys(fixed_order_widgets))

    def apply(self, interaction_counts: Mapping[str, int]) -> list[str]:
        pinned = set(self.fixed_order_widgets)
        fixed = [w for w in self.fixed_order_widgets if w in interaction_counts]
        others = [w for w in interaction_counts if w not in pinned]
        others.sort(key=lambda w: interaction_counts[w], reverse=True)
        return fixed + others

    def __repr__(self) -> str:
        return f"PreserveOrder({self.fixed_order_widgets!r})"
