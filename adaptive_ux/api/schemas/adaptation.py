"""Schemas for interaction ingestion and layout management."""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from adaptive_ux.domain.models import (
    InteractionType,
    InteractionValue,
    WidgetPosition,
    check_unique_widget_ids,
)


class _CamelModel(BaseModel):
    """Accepts camelCase (browser clients) or snake_case field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InteractionIn(_CamelModel):
    """Interaction reported by a front end."""

    widget_id: str = Field(..., min_length=1)
    type: InteractionType = InteractionType.TAP
    value: InteractionValue = None


class TrackResponse(BaseModel):
    """Result of an interaction ingest."""

    status: str
    count: int


class LayoutCreate(_CamelModel):
    """Layout creation request."""

    name: str
    positions: list[WidgetPosition] = Field(default_factory=list)
    activate: bool = False

    @model_validator(mode="after")
    def _unique_widget_ids(self) -> "LayoutCreate":
        check_unique_widget_ids(self.positions)
        return self


class CurrentLayoutUpdate(_CamelModel):
    """Switch the current layout."""

    layout_id: str


class ReorderRequest(_CamelModel):
    """New widget order for the current layout."""

    widget_ids: list[str]


class AdjustmentResponse(BaseModel):
    """Result of a manual rule evaluation."""

    applied: bool
