"""Layout configuration models: widget positions and named layouts."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from adaptive_ux.domain.models.interaction_event import utc_now

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def new_layout_id() -> str:
    """Generate a fresh opaque layout id."""
    return str(uuid.uuid4())


def check_unique_widget_ids(positions: list["WidgetPosition"]) -> None:
    """Raise ValueError if a widget id appears more than once."""
    seen: set[str] = set()
    for position in positions:
        if position.widget_id in seen:
            raise ValueError(f"Duplicate widget id in layout: {position.widget_id}")
        seen.add(position.widget_id)


class WidgetConstraints(BaseModel):
    """Size constraints for a widget. ``None`` maximums mean unbounded."""

    model_config = _CAMEL

    min_width: float = 0.0
    max_width: float | None = None
    min_height: float = 0.0
    max_height: float | None = None


class WidgetPosition(BaseModel):
    """Position and display options of one widget within a layout."""

    model_config = _CAMEL

    widget_id: str = Field(frozen=True)
    order: int  # lower comes first
    constraints: WidgetConstraints | None = None
    visible: bool = True


class LayoutConfig(BaseModel):
    """A named, ordered arrangement of widgets."""

    model_config = _CAMEL

    id: str = Field(default_factory=new_layout_id, frozen=True)
    name: str
    positions: list[WidgetPosition] = Field(default_factory=list)
    last_modified: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def _unique_widget_ids(self) -> "LayoutConfig":
        check_unique_widget_ids(self.positions)
        return self

    def find_position(self, widget_id: str) -> WidgetPosition | None:
        """Return the position for ``widget_id`` or None."""
        for position in self.positions:
            if position.widget_id == widget_id:
                return position
        return None

    def widget_ids(self) -> list[str]:
        """Widget ids in stored position order."""
        return [p.widget_id for p in self.positions]

    def touch(self) -> None:
        """Refresh ``last_modified``."""
        self.last_modified = utc_now()

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> "LayoutConfig":
        return cls.model_validate_json(data)
