"""API request and response schemas."""

from adaptive_ux.api.schemas.adaptation import (
    AdjustmentResponse,
    CurrentLayoutUpdate,
    InteractionIn,
    LayoutCreate,
    ReorderRequest,
    TrackResponse,
)

__all__ = [
    "AdjustmentResponse",
    "CurrentLayoutUpdate",
    "InteractionIn",
    "LayoutCreate",
    "ReorderRequest",
    "TrackResponse",
]
