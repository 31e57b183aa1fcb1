"""Headless adaptive container: the rendering layer's side of the pipeline.

Holds a list of child widget ids, forwards their interactions to the
tracker, and recomputes the render order whenever the current layout
changes. Drawing is left to the host UI.
"""

import logging
import uuid
from collections.abc import Sequence
from typing import Callable

from adaptive_ux.core.broadcast import Subscription
from adaptive_ux.domain.models import (
    InteractionEvent,
    InteractionType,
    InteractionValue,
    LayoutConfig,
    WidgetPosition,
)
from adaptive_ux.domain.services.layout_store import LayoutStore
from adaptive_ux.domain.services.tracker import InteractionTracker

logger = logging.getLogger(__name__)

RenderCallback = Callable[[list[str], LayoutConfig], None]


def arrange_children(layout: LayoutConfig | None, child_ids: Sequence[str]) -> list[str]:
    """Order child ids by a layout.

    Positioned children come first in stored position order, hidden ones
    are dropped, and children without a position follow in their original
    order.
    """
    if layout is None:
        return list(child_ids)

    remaining = dict.fromkeys(child_ids)
    arranged: list[str] = []
    for position in layout.positions:
        if position.widget_id in remaining:
            del remaining[position.widget_id]
            if position.visible:
                arranged.append(position.widget_id)
    arranged.extend(remaining)
    return arranged


class AdaptiveContainer:
    """Arranges child widgets by usage."""

    def __init__(
        self,
        tracker: InteractionTracker,
        layout_store: LayoutStore,
        child_ids: Sequence[str],
        on_render: RenderCallback | None = None,
    ) -> None:
        self.tracker = tracker
        self.layout_store = layout_store
        self.child_ids = list(child_ids)
        self.on_render = on_render
        self.layout: LayoutConfig | None = None
        self.rendered: list[str] = list(self.child_ids)
        self._subscription: Subscription | None = None

    @property
    def mounted(self) -> bool:
        return self._subscription is not None

    async def mount(self, layout_id: str | None = None) -> LayoutConfig:
        """Subscribe to layout changes and resolve the layout to render.

        Uses ``layout_id`` when it exists; otherwise creates a layout with one
        position per child, in child order, and activates it.
        """
        if self._subscription is None:
            self._subscription = self.layout_store.on_layout_change.subscribe(self._handle_layout_change)

        layout = await self.layout_store.get_layout(layout_id) if layout_id else None
        if layout is None:
            positions = [
                WidgetPosition(widget_id=child_id, order=index)
                for index, child_id in enumerate(self.child_ids)
            ]
            layout = await self.layout_store.create_layout(
                name=f"Layout {uuid.uuid4().hex[:8]}",
                initial_positions=positions,
            )
            await self.layout_store.set_current_layout(layout.id)
        else:
            self._render(layout)
        return layout

    def unmount(self) -> None:
        """Stop following layout changes."""
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    async def interact(
        self,
        widget_id: str,
        type: InteractionType = InteractionType.TAP,
        value: InteractionValue = None,
    ) -> InteractionEvent:
        """Forward an interaction on one of the children to the tracker."""
        return await self.tracker.track_interaction(widget_id, type, value=value)

    def _handle_layout_change(self, layout: LayoutConfig) -> None:
        self._render(layout)

    def _render(self, layout: LayoutConfig) -> None:
        self.layout = layout
        self.rendered = arrange_children(layout, self.child_ids)
        logger.debug("Container re-rendered", extra={"layout_id": layout.id})
        if self.on_render is not None:
            self.on_render(list(self.rendered), layout)
