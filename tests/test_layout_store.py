"""Tests for the layout store."""

import logging

import pytest
from pydantic import ValidationError

from adaptive_ux.core.errors import LayoutNotFoundError, NoCurrentLayoutError
from adaptive_ux.domain.models import LayoutConfig, WidgetConstraints, WidgetPosition
from adaptive_ux.domain.services import LayoutStore


def positions(*widget_ids):
    return [WidgetPosition(widget_id=w, order=i) for i, w in enumerate(widget_ids)]


def order_of(layout):
    return [(p.widget_id, p.order) for p in layout.positions]


class TestCreateAndGet:
    """Tests for creating and loading layouts."""

    @pytest.mark.asyncio
    async def test_create_persists_without_activating(self, layout_store, storage):
        """Test new layouts are stored but not made current."""
        changes = []
        layout_store.on_layout_change.subscribe(changes.append)

        layout = await layout_store.create_layout("Main", positions("a", "b"))

        assert layout.name == "Main"
        assert await storage.get_layout_config(layout.id) == layout
        assert layout_store.current_layout is None
        assert changes == []

    @pytest.mark.asyncio
    async def test_create_without_positions(self, layout_store):
        """Test layouts can start empty."""
        layout = await layout_store.create_layout("Empty")

        assert layout.positions == []

    @pytest.mark.asyncio
    async def test_layouts_built_from_one_list_stay_independent(self, layout_store, storage):
        """Test reordering one layout leaves a sibling built from the same positions alone."""
        shared = positions("a", "b", "c")
        first = await layout_store.create_layout("First", shared)
        second = await layout_store.create_layout("Second", shared)
        await layout_store.set_current_layout(first.id)

        await layout_store.reorder_widgets(["c", "b", "a"])

        assert order_of(second) == [("a", 0), ("b", 1), ("c", 2)]
        assert order_of(await storage.get_layout_config(second.id)) == order_of(second)
        assert [p.order for p in shared] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_create_rejects_duplicate_widget_ids(self, layout_store):
        """Test a widget can only be positioned once per layout."""
        with pytest.raises(ValidationError):
            await layout_store.create_layout("Dupes", positions("a", "a", "b"))

        assert await layout_store.get_all_layouts() == []

    @pytest.mark.asyncio
    async def test_get_layout_from_cache(self, layout_store):
        """Test cached layouts are returned by identity."""
        layout = await layout_store.create_layout("Main")

        assert await layout_store.get_layout(layout.id) is layout

    @pytest.mark.asyncio
    async def test_get_layout_from_storage_populates_cache(self, storage):
        """Test cache misses fall through to storage."""
        stored = LayoutConfig(name="Stored")
        await storage.save_layout_config(stored)
        store = LayoutStore(storage)

        first = await store.get_layout(stored.id)
        second = await store.get_layout(stored.id)

        assert first == stored
        assert second is first

    @pytest.mark.asyncio
    async def test_get_missing_layout(self, layout_store):
        """Test unknown ids return None."""
        assert await layout_store.get_layout("missing") is None

    @pytest.mark.asyncio
    async def test_get_all_layouts_keeps_unstored_cache_entries(self, layout_store, storage):
        """Test reload merges storage into the cache without evicting."""
        kept = await layout_store.create_layout("Kept")
        await storage.delete_layout_config(kept.id)
        extra = LayoutConfig(name="Extra")
        await storage.save_layout_config(extra)

        layouts = await layout_store.get_all_layouts()

        assert {l.id for l in layouts} == {kept.id, extra.id}


class TestCurrentLayout:
    """Tests for activating layouts."""

    @pytest.mark.asyncio
    async def test_set_current_layout_notifies(self, layout_store):
        """Test activation fires both notification surfaces."""
        layout = await layout_store.create_layout("Main")
        changes = []
        structural = []
        layout_store.on_layout_change.subscribe(changes.append)
        layout_store.add_listener(lambda: structural.append(True))

        await layout_store.set_current_layout(layout.id)

        assert layout_store.current_layout is layout
        assert layout_store.current_layout_id == layout.id
        assert changes == [layout]
        assert structural == [True]

    @pytest.mark.asyncio
    async def test_set_current_layout_not_found(self, layout_store):
        """Test unknown ids raise LayoutNotFoundError."""
        with pytest.raises(LayoutNotFoundError) as exc_info:
            await layout_store.set_current_layout("missing")

        assert exc_info.value.layout_id == "missing"
        assert layout_store.current_layout is None

    @pytest.mark.asyncio
    async def test_set_current_layout_from_storage(self, storage):
        """Test layouts only in storage can be activated."""
        stored = LayoutConfig(name="Stored")
        await storage.save_layout_config(stored)
        store = LayoutStore(storage)

        await store.set_current_layout(stored.id)

        assert store.current_layout == stored

    @pytest.mark.asyncio
    async def test_pointer_is_persisted(self, layout_store, storage):
        """Test activation writes the current pointer."""
        layout = await layout_store.create_layout("Main")

        await layout_store.set_current_layout(layout.id)

        assert await storage.get_current_layout_id() == layout.id

    @pytest.mark.asyncio
    async def test_removed_listener_not_called(self, layout_store):
        """Test structural listeners can be removed."""
        calls = []

        def listener():
            calls.append(True)

        layout_store.add_listener(listener)
        layout_store.remove_listener(listener)
        await layout_store.create_layout("Main")

        assert calls == []


class TestLoad:
    """Tests for restoring state from storage."""

    @pytest.mark.asyncio
    async def test_load_restores_persisted_pointer(self, storage):
        """Test a restart resumes the previously current layout."""
        first = LayoutStore(storage)
        await first.create_layout("One")
        two = await first.create_layout("Two")
        await first.set_current_layout(two.id)

        restarted = LayoutStore(storage)
        await restarted.load()

        assert restarted.current_layout_id == two.id

    @pytest.mark.asyncio
    async def test_load_falls_back_to_first_layout(self, storage):
        """Test the first stored layout becomes current without a pointer."""
        one = LayoutConfig(name="One")
        await storage.save_layout_config(one)
        await storage.save_layout_config(LayoutConfig(name="Two"))

        store = LayoutStore(storage)
        await store.load()

        assert store.current_layout_id == one.id

    @pytest.mark.asyncio
    async def test_load_ignores_dangling_pointer(self, storage):
        """Test a pointer to a deleted layout is not restored."""
        one = LayoutConfig(name="One")
        await storage.save_layout_config(one)
        await storage.save_current_layout_id("deleted")

        store = LayoutStore(storage)
        await store.load()

        assert store.current_layout_id == one.id

    @pytest.mark.asyncio
    async def test_load_empty_storage(self, layout_store):
        """Test loading nothing leaves no current layout."""
        await layout_store.load()

        assert layout_store.current_layout is None


class TestMutations:
    """Tests for position updates on the current layout."""

    @pytest.mark.asyncio
    async def test_mutations_require_current_layout(self, layout_store):
        """Test every mutation raises NoCurrentLayoutError without a layout."""
        with pytest.raises(NoCurrentLayoutError):
            await layout_store.update_widget_position(WidgetPosition(widget_id="a", order=0))
        with pytest.raises(NoCurrentLayoutError):
            await layout_store.remove_widget_position("a")
        with pytest.raises(NoCurrentLayoutError):
            await layout_store.reorder_widgets(["a"])

    @pytest.mark.asyncio
    async def test_update_replaces_existing_position(self, layout_store, card_layout):
        """Test updating a known widget replaces it in place."""
        changes = []
        layout_store.on_layout_change.subscribe(changes.append)
        replacement = WidgetPosition(
            widget_id="card2",
            order=9,
            constraints=WidgetConstraints(min_width=100),
        )

        await layout_store.update_widget_position(replacement)

        layout = layout_store.current_layout
        assert layout.positions[1] == replacement
        assert layout.positions[1] is not replacement
        assert len(layout.positions) == 4
        assert changes == [layout]

    @pytest.mark.asyncio
    async def test_later_edits_to_caller_position_are_not_stored(self, layout_store, card_layout):
        """Test the store keeps its own copy of an upserted position."""
        position = WidgetPosition(widget_id="card2", order=1)
        await layout_store.update_widget_position(position)

        position.visible = False
        await layout_store.reorder_widgets(["card4"])

        assert layout_store.current_layout.find_position("card2").visible is True
        assert position.order == 1

    @pytest.mark.asyncio
    async def test_update_appends_new_position_without_sorting(self, layout_store, card_layout):
        """Test unknown widgets are appended and order is not re-sorted."""
        await layout_store.update_widget_position(WidgetPosition(widget_id="new", order=-1))

        assert layout_store.current_layout.widget_ids() == [
            "card1", "card2", "card3", "card4", "new"
        ]

    @pytest.mark.asyncio
    async def test_update_stamps_and_persists(self, layout_store, card_layout, storage):
        """Test mutations refresh last_modified and reach storage."""
        before = card_layout.last_modified

        await layout_store.update_widget_position(
            WidgetPosition(widget_id="card1", order=0, visible=False)
        )

        stored = await storage.get_layout_config(card_layout.id)
        assert stored.positions[0].visible is False
        assert stored.last_modified >= before

    @pytest.mark.asyncio
    async def test_remove_widget_position(self, layout_store, card_layout):
        """Test removal drops every matching entry."""
        await layout_store.remove_widget_position("card3")

        assert layout_store.current_layout.widget_ids() == ["card1", "card2", "card4"]

    @pytest.mark.asyncio
    async def test_storage_failure_keeps_memory_state(self, failing_storage, caplog):
        """Test failed saves are logged and the cache stays authoritative."""
        store = LayoutStore(failing_storage)

        with caplog.at_level(logging.WARNING):
            layout = await store.create_layout("Main", positions("a"))
            await store.set_current_layout(layout.id)
            await store.reorder_widgets(["b", "a"])

        assert store.current_layout.widget_ids() == ["b", "a"]
        assert "Failed to save layout" in caplog.text


class TestReorderWidgets:
    """Tests for the reorder reconciliation algorithm."""

    @pytest.mark.asyncio
    async def test_full_reorder(self, layout_store, card_layout):
        """Test listed ids take their index as order."""
        await layout_store.reorder_widgets(["card4", "card3", "card2", "card1"])

        assert order_of(layout_store.current_layout) == [
            ("card4", 0), ("card3", 1), ("card2", 2), ("card1", 3)
        ]

    @pytest.mark.asyncio
    async def test_reorder_is_idempotent(self, layout_store, card_layout):
        """Test reordering twice with the same ids gives the same result."""
        await layout_store.reorder_widgets(["card3", "card1"])
        first = order_of(layout_store.current_layout)

        await layout_store.reorder_widgets(["card3", "card1"])

        assert order_of(layout_store.current_layout) == first

    @pytest.mark.asyncio
    async def test_subset_keeps_every_position(self, layout_store, card_layout):
        """Test listed widgets lead and unlisted ones follow in prior order."""
        await layout_store.reorder_widgets(["card4", "card3"])

        layout = layout_store.current_layout
        assert set(layout.widget_ids()) == {"card1", "card2", "card3", "card4"}
        assert order_of(layout) == [
            ("card4", 0), ("card3", 1), ("card1", 2), ("card2", 3)
        ]

    @pytest.mark.asyncio
    async def test_subset_is_idempotent(self, layout_store, card_layout):
        """Test repeating a partial reorder does not shuffle the tail."""
        await layout_store.reorder_widgets(["card3"])
        first = order_of(layout_store.current_layout)

        await layout_store.reorder_widgets(["card3"])

        assert order_of(layout_store.current_layout) == first
        assert first[0] == ("card3", 0)

    @pytest.mark.asyncio
    async def test_positions_sorted_by_order(self, layout_store, card_layout):
        """Test positions end up sorted by order after any reorder."""
        await layout_store.update_widget_position(WidgetPosition(widget_id="late", order=-5))

        await layout_store.reorder_widgets(["card2"])

        orders = [p.order for p in layout_store.current_layout.positions]
        assert orders == sorted(orders)
        assert layout_store.current_layout.widget_ids() == [
            "card2", "late", "card1", "card3", "card4"
        ]

    @pytest.mark.asyncio
    async def test_unknown_ids_are_synthesized(self, layout_store, card_layout):
        """Test ids without a position get a visible one."""
        await layout_store.reorder_widgets(["fresh", "card1"])

        fresh = layout_store.current_layout.find_position("fresh")
        assert fresh.order == 0
        assert fresh.visible is True

    @pytest.mark.asyncio
    async def test_reorder_notifies_and_persists(self, layout_store, card_layout, storage):
        """Test reorders are broadcast and stored."""
        changes = []
        layout_store.on_layout_change.subscribe(changes.append)

        await layout_store.reorder_widgets(["card2"])

        stored = await storage.get_layout_config(card_layout.id)
        assert stored.widget_ids() == layout_store.current_layout.widget_ids()
        assert len(changes) == 1


class TestDeleteLayout:
    """Tests for deleting layouts."""

    @pytest.mark.asyncio
    async def test_delete_non_current(self, layout_store, card_layout, storage):
        """Test deleting another layout leaves the current one alone."""
        other = await layout_store.create_layout("Other")
        changes = []
        layout_store.on_layout_change.subscribe(changes.append)

        await layout_store.delete_layout(other.id)

        assert await layout_store.get_layout(other.id) is None
        assert await storage.get_layout_config(other.id) is None
        assert layout_store.current_layout is card_layout
        assert changes == []

    @pytest.mark.asyncio
    async def test_delete_current_falls_back(self, layout_store, card_layout):
        """Test the pointer moves to a remaining layout and is broadcast."""
        other = await layout_store.create_layout("Other")
        changes = []
        layout_store.on_layout_change.subscribe(changes.append)

        await layout_store.delete_layout(card_layout.id)

        assert layout_store.current_layout_id == other.id
        assert changes == [other]

    @pytest.mark.asyncio
    async def test_delete_last_layout_clears_pointer(self, layout_store, card_layout, storage):
        """Test deleting the only layout unsets current without broadcasting."""
        changes = []
        structural = []
        layout_store.on_layout_change.subscribe(changes.append)
        layout_store.add_listener(lambda: structural.append(True))

        await layout_store.delete_layout(card_layout.id)

        assert layout_store.current_layout is None
        assert await storage.get_current_layout_id() is None
        assert changes == []
        assert structural == [True]
