"""Layout management endpoints."""

from fastapi import APIRouter, HTTPException, status

from adaptive_ux.api.deps import ContextDep
from adaptive_ux.api.schemas import (
    AdjustmentResponse,
    CurrentLayoutUpdate,
    LayoutCreate,
    ReorderRequest,
)
from adaptive_ux.core.errors import LayoutNotFoundError, NoCurrentLayoutError
from adaptive_ux.domain.models import LayoutConfig, WidgetPosition

router = APIRouter()


def _no_current_layout(e: NoCurrentLayoutError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("", response_model=list[LayoutConfig])
async def list_layouts(context: ContextDep) -> list[LayoutConfig]:
    """List all layouts."""
    return await context.layout_store.get_all_layouts()


@router.post("", response_model=LayoutConfig, status_code=status.HTTP_201_CREATED)
async def create_layout(request: LayoutCreate, context: ContextDep) -> LayoutConfig:
    """Create a layout, optionally activating it."""
    layout = await context.layout_store.create_layout(request.name, request.positions)
    if request.activate:
        await context.layout_store.set_current_layout(layout.id)
    return layout


@router.get("/current", response_model=LayoutConfig)
async def get_current_layout(context: ContextDep) -> LayoutConfig:
    """Get the current layout."""
    layout = context.layout_store.current_layout
    if layout is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No current layout selected",
        )
    return layout


@router.put("/current", response_model=LayoutConfig)
async def set_current_layout(request: CurrentLayoutUpdate, context: ContextDep) -> LayoutConfig:
    """Switch the current layout."""
    try:
        await context.layout_store.set_current_layout(request.layout_id)
    except LayoutNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return context.layout_store.current_layout


@router.put("/current/positions", response_model=LayoutConfig)
async def update_widget_position(position: WidgetPosition, context: ContextDep) -> LayoutConfig:
    """Insert or replace a widget position in the current layout."""
    try:
        await context.layout_store.update_widget_position(position)
    except NoCurrentLayoutError as e:
        raise _no_current_layout(e)
    return context.layout_store.current_layout


@router.delete("/current/positions/{widget_id}", response_model=LayoutConfig)
async def remove_widget_position(widget_id: str, context: ContextDep) -> LayoutConfig:
    """Remove a widget from the current layout."""
    try:
        await context.layout_store.remove_widget_position(widget_id)
    except NoCurrentLayoutError as e:
        raise _no_current_layout(e)
    return context.layout_store.current_layout


@router.post("/current/reorder", response_model=LayoutConfig)
async def reorder_widgets(request: ReorderRequest, context: ContextDep) -> LayoutConfig:
    """Apply an explicit widget order to the current layout."""
    try:
        await context.layout_store.reorder_widgets(request.widget_ids)
    except NoCurrentLayoutError as e:
        raise _no_current_layout(e)
    return context.layout_store.current_layout


@router.get("/{layout_id}", response_model=LayoutConfig)
async def get_layout(layout_id: str, context: ContextDep) -> LayoutConfig:
    """Get a layout by id."""
    layout = await context.layout_store.get_layout(layout_id)
    if layout is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Layout configuration not found: {layout_id}",
        )
    return layout


@router.delete("/{layout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_layout(layout_id: str, context: ContextDep) -> None:
    """Delete a layout."""
    await context.layout_store.delete_layout(layout_id)


adjustments_router = APIRouter()


@adjustments_router.post("", response_model=AdjustmentResponse)
async def run_adjustment(context: ContextDep) -> AdjustmentResponse:
    """Evaluate the rule pipeline now and apply it to the current layout."""
    applied = await context.rule_engine.evaluate_and_apply_rules()
    return AdjustmentResponse(applied=applied)
