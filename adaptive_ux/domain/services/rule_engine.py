"""Rule engine: aggregates interactions and reorders the current layout."""

import asyncio
import logging
from collections import Counter
from collections.abc import Iterable

from adaptive_ux.domain.models import InteractionEvent, LayoutConfig
from adaptive_ux.domain.services.layout_store import LayoutStore
from adaptive_ux.domain.services.rules import LayoutRule, MostUsedFirst
from adaptive_ux.domain.services.tracker import InteractionTracker

logger = logging.getLogger(__name__)

DEFAULT_MIN_INTERACTIONS = 5
DEFAULT_INTERVAL_SECONDS = 30.0


def count_interactions(
    events: Iterable[InteractionEvent],
    layout: LayoutConfig | None = None,
) -> dict[str, int]:
    """Count events per widget id; every interaction type weighs the same.

    Key order decides how rules break ties: widgets already positioned in
    ``layout`` come first in their current order, then the remaining widgets
    in order of first interaction.
    """
    tallies = Counter(event.widget_id for event in events)
    if not tallies or layout is None:
        return dict(tallies)

    counts: dict[str, int] = {}
    for position in sorted(layout.positions, key=lambda p: p.order):
        if position.widget_id in tallies:
            counts[position.widget_id] = tallies[position.widget_id]
    for widget_id, count in tallies.items():
        counts.setdefault(widget_id, count)
    return counts


class RuleEngine:
    """Analyzes widget usage and applies the resulting order to the layout.

    Auto-adjustment runs two independent triggers that share one evaluation
    routine: a periodic timer and an interaction counter that fires every
    ``min_interactions`` tracked interactions. Evaluations are not mutually
    exclusive; each recomputes from the full event log.
    """

    def __init__(
        self,
        tracker: InteractionTracker,
        layout_store: LayoutStore,
        rules: list[LayoutRule] | None = None,
        min_interactions: int = DEFAULT_MIN_INTERACTIONS,
    ) -> None:
        """Initialize the rule engine.

        Args:
            tracker: Source of interaction events
            layout_store: Store whose current layout gets reordered
            rules: Rule pipeline; defaults to ``[MostUsedFirst()]``
            min_interactions: Interactions between count-triggered evaluations
        """
        self.tracker = tracker
        self.layout_store = layout_store
        self._rules: list[LayoutRule] = list(rules) if rules is not None else [MostUsedFirst()]
        self.min_interactions = min_interactions

        self._auto_adjust_enabled = False
        self._timer_task: asyncio.Task | None = None
        self._interaction_count = 0
        self._pending: set[asyncio.Task] = set()

    @property
    def rules(self) -> list[LayoutRule]:
        return list(self._rules)

    @property
    def is_running(self) -> bool:
        return self._auto_adjust_enabled

    @property
    def interaction_count(self) -> int:
        """Interactions seen since the last count-triggered evaluation."""
        return self._interaction_count

    def add_rule(self, rule: LayoutRule) -> None:
        self._rules.append(rule)

    def remove_rule(self, rule: LayoutRule) -> None:
        if rule in self._rules:
            self._rules.remove(rule)

    def clear_rules(self) -> None:
        self._rules.clear()

    def set_rules(self, rules: list[LayoutRule]) -> None:
        self._rules = list(rules)

    def start_auto_adjustments(self, interval: float = DEFAULT_INTERVAL_SECONDS) -> None:
        """Start automatic layout adjustments. No-op if already running.

        Must be called from a running event loop.

        Args:
            interval: Seconds between timer-triggered evaluations
        """
        if self._auto_adjust_enabled:
            return

        loop = asyncio.get_running_loop()
        self._auto_adjust_enabled = True
        self._timer_task = loop.create_task(self._run_periodic(interval))
        self.tracker.add_listener(self._on_interaction)
        logger.info(
            "Auto adjustments started",
            extra={"interval_seconds": interval, "min_interactions": self.min_interactions},
        )

    def stop_auto_adjustments(self) -> None:
        """Stop automatic layout adjustments. Safe to call when not running."""
        was_running = self._auto_adjust_enabled
        self._auto_adjust_enabled = False
        self._interaction_count = 0
        if self._timer_task is not None:
            # drain() awaits the cancelled timer
            self._timer_task.cancel()
            self._track_pending(self._timer_task)
            self._timer_task = None
        self.tracker.remove_listener(self._on_interaction)
        if was_running:
            logger.info("Auto adjustments stopped")

    async def drain(self) -> None:
        """Wait for scheduled evaluations and for a stopped timer to wind down."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _run_periodic(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            await self._evaluate_safely("timer")

    def _on_interaction(self, event: InteractionEvent) -> None:
        self._interaction_count += 1

        if self._auto_adjust_enabled and self._interaction_count >= self.min_interactions:
            self._interaction_count = 0
            task = asyncio.get_running_loop().create_task(
                self._evaluate_safely("interaction threshold")
            )
            self._track_pending(task)

    def _track_pending(self, task: asyncio.Task) -> None:
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _evaluate_safely(self, trigger: str) -> bool:
        try:
            return await self.evaluate_and_apply_rules()
        except Exception as e:
            logger.error(f"Layout evaluation failed ({trigger}): {e}", exc_info=True)
            return False

    def run_rules(self, counts: dict[str, int]) -> list[str]:
        """Feed counts through the rule pipeline.

        Each rule after the first only sees the widgets kept by the previous
        rule, paired with their original counts.
        """
        order: list[str] | None = None
        for rule in self._rules:
            if order is None:
                order = rule.apply(counts)
            else:
                order = rule.apply({widget_id: counts.get(widget_id, 0) for widget_id in order})
        return order or []

    async def evaluate_and_apply_rules(self) -> bool:
        """Evaluate rules and apply the result to the current layout.

        Returns:
            True if the current layout was reordered
        """
        layout = self.layout_store.current_layout
        if layout is None:
            return False

        events = await self.tracker.get_all_events()
        counts = count_interactions(events, layout)
        if not counts:
            return False

        order = self.run_rules(counts)
        if not order:
            return False

        await self.layout_store.reorder_widgets(order)
        logger.info(
            f"Applied {len(self._rules)} layout rule(s) to {len(order)} widget(s)",
            extra={"layout_id": layout.id},
        )
        return True
