"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="LEADHUNTER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Lead Hunter Planner API"
    api_prefix: str = "/api"
    permits_file: Path = Field(
        default=Path("data/permits.csv"),
        description="CSV export of permits used when Supabase is not configured.",
    )
    permits_table: str = Field(default="permits", description="Supabase table holding permit records.")

    # Hot-zone clustering
    cluster_radius_degrees: float = Field(
        default=0.01,
        gt=0.0,
        description="Neighbor search radius in degrees (~1 km in New England).",
    )
    min_cluster_size: int = Field(default=2, ge=2)

    # Scoring policy
    high_priority_threshold: int = Field(default=70, ge=0, le=100)
    medium_priority_threshold: int = Field(default=40, ge=0, le=100)
    status_weight_scale: float = Field(default=1.0, ge=0.0)
    cluster_weight: float = Field(default=20.0, ge=0.0)
    cluster_size_cap: int = Field(default=5, ge=2)
    recency_weight: float = Field(default=20.0, ge=0.0)
    recency_half_life_days: float = Field(default=14.0, gt=0.0)
    builder_repeat_weight: float = Field(default=5.0, ge=0.0)
    builder_repeat_cap: int = Field(default=3, ge=0)
    commercial_multiplier: float = Field(default=0.9, gt=0.0)
    max_recommendations: Optional[int] = Field(
        default=None,
        ge=1,
        description="Upper bound on returned recommendations; the summary always covers every scored permit.",
    )

    # Route planning
    route_dwell_minutes: float = Field(default=15.0, ge=0.0)
    route_average_speed_mph: float = Field(default=30.0, gt=0.0)
    route_time_budget_minutes: float = Field(default=240.0, gt=0.0)
    default_start_address: str = Field(
        default="Wilmington, MA 01887",
        description="Business address used when the caller's location is unavailable.",
    )
    default_start_latitude: Optional[float] = Field(default=42.5465, ge=-90.0, le=90.0)
    default_start_longitude: Optional[float] = Field(default=-71.1737, ge=-180.0, le=180.0)
    default_state: str = "MA"

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("permits_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @model_validator(mode="after")
    def _check_thresholds(self) -> "Settings":
        if self.medium_priority_threshold >= self.high_priority_threshold:
            raise ValueError("medium_priority_threshold must be lower than high_priority_threshold")
        return self


settings = Settings()
