"""Route planning request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .permits import PermitModel


class StartPointModel(BaseModel):
    policy: Literal["current", "first", "custom"] = Field(
        default="current",
        description="'current' uses the supplied coordinates, 'first' the first selected permit, 'custom' an address.",
    )
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    address: Optional[str] = None


class EndPointModel(BaseModel):
    policy: Literal["last", "start", "custom"] = Field(
        default="start",
        description="'last' ends at the last stop, 'start' returns to the start, 'custom' ends at an address.",
    )
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    address: Optional[str] = None


class RoutePlanRequest(BaseModel):
    permits: List[PermitModel] = Field(..., description="Selected permits in visiting order.")
    start: StartPointModel = Field(default_factory=StartPointModel)
    end: EndPointModel = Field(default_factory=EndPointModel)
    dwell_minutes: Optional[float] = Field(default=None, ge=0.0)
    average_speed_mph: Optional[float] = Field(default=None, gt=0.0)
    time_budget_minutes: Optional[float] = Field(default=None, gt=0.0)


class RoutePointModel(BaseModel):
    label: str
    source: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class RouteStopModel(BaseModel):
    sequence: int
    permit: PermitModel
    distance_from_prev_miles: float
    travel_minutes: float
    arrival_min: float


class RoutePlanResponse(BaseModel):
    stops: List[RouteStopModel]
    start_location: RoutePointModel
    end_location: RoutePointModel
    total_distance_miles: float
    travel_minutes: float
    dwell_minutes: float
    estimated_duration_minutes: float
    time_budget_minutes: float
    within_budget: bool
    overage_minutes: float
    directions_url: str
    skipped_duplicates: List[str]
    warnings: List[str]
