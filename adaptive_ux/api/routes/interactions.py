"""Interaction ingestion endpoints."""

from fastapi import APIRouter, Body, Query, status

from adaptive_ux.api.deps import ContextDep
from adaptive_ux.api.schemas import InteractionIn, TrackResponse
from adaptive_ux.domain.models import InteractionEvent

router = APIRouter()


@router.post("", response_model=TrackResponse)
async def track_interactions(
    context: ContextDep,
    payload: InteractionIn | list[InteractionIn] = Body(...),
) -> TrackResponse:
    """Accept either a single interaction or a batch, tracked in order."""
    interactions = payload if isinstance(payload, list) else [payload]
    for interaction in interactions:
        await context.tracker.track_interaction(
            interaction.widget_id,
            interaction.type,
            value=interaction.value,
        )
    return TrackResponse(status="tracked", count=len(interactions))


@router.get("", response_model=list[InteractionEvent])
async def list_interactions(
    context: ContextDep,
    widget_id: str | None = Query(None, description="only events for this widget"),
) -> list[InteractionEvent]:
    """List logged interactions, oldest first."""
    if widget_id is not None:
        return await context.tracker.get_events_for_widget(widget_id)
    return await context.tracker.get_all_events()


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_interactions(context: ContextDep) -> None:
    """Delete every logged interaction."""
    await context.tracker.clear_all_events()
