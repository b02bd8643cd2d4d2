"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

from ...models.domain import Permit

StartPolicy = Literal["current", "first", "custom"]
EndPolicy = Literal["last", "start", "custom"]


@dataclass(slots=True)
class StartPoint:
    """Where the route begins: the caller's position, the first stop, or an address."""

    policy: StartPolicy = "current"
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None


@dataclass(slots=True)
class EndPoint:
    """Where the route ends: the last stop, back at the start, or an address."""

    policy: EndPolicy = "start"
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(slots=True)
class RoutePoint:
    label: str
    source: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(slots=True)
class RouteStop:
    permit: Permit
    sequence: int
    distance_from_prev_miles: float
    travel_minutes: float
    arrival_min: float


@dataclass(slots=True)
class RoutePlan:
    stops: List[RouteStop]
    start_location: RoutePoint
    end_location: RoutePoint
    total_distance_miles: float
    travel_minutes: float
    dwell_minutes: float
    estimated_duration_minutes: float
    time_budget_minutes: float
    within_budget: bool
    skipped_duplicates: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def overage_minutes(self) -> float:
        return max(self.estimated_duration_minutes - self.time_budget_minutes, 0.0)
