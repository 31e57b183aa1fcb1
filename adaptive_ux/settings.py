"""Application settings using Pydantic BaseSettings."""

from enum import Enum
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LayoutMode(str, Enum):
    """Arrangement hint for the rendering layer. Not consumed by the core."""

    STACKED = "stacked"
    GRID = "grid"
    FREE = "free"


class AdaptiveSettings(BaseSettings):
    """Adaptive UX settings loaded from environment variables."""

    # Adaptation
    threshold: int = Field(default=10, ge=1)  # interactions before a count-triggered adjustment
    layout_mode: LayoutMode = LayoutMode.STACKED
    enable_auto_adjust: bool = True
    enable_debug_logging: bool = False
    auto_adjust_interval_seconds: float = Field(default=30.0, gt=0)

    # Storage
    storage_backend: Literal["memory", "redis"] = "memory"
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = ""  # namespace for every storage key, e.g. "myapp:"

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    api_v1_prefix: str = "/api/v1"

    model_config = SettingsConfigDict(
        env_prefix="ADAPTIVE_UX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = AdaptiveSettings()
