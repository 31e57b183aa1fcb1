"""Interaction event model for tracking widget usage."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Opaque payload attached to an interaction (scroll offset, hover state, ...)
InteractionValue = bool | int | float | str | None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InteractionType(str, Enum):
    """Kind of interaction a user had with a widget."""

    TAP = "tap"
    LONG_PRESS = "longPress"
    HOVER = "hover"
    FOCUS = "focus"
    SCROLL = "scroll"
    SWIPE = "swipe"
    CUSTOM = "custom"


class InteractionEvent(BaseModel):
    """A single user interaction with an adaptive widget. Immutable."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    widget_id: str
    type: InteractionType
    value: InteractionValue = None
    timestamp: datetime = Field(default_factory=utc_now)

    @field_validator("type", mode="before")
    @classmethod
    def _fallback_to_custom(cls, value: Any) -> Any:
        """Unrecognized tags from storage decode as ``custom``."""
        if isinstance(value, InteractionType):
            return value
        try:
            return InteractionType(value)
        except ValueError:
            return InteractionType.CUSTOM

    def to_json(self) -> str:
        """Serialize with camelCase field names."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> "InteractionEvent":
        return cls.model_validate_json(data)
