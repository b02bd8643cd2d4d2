"""Route planning for selected permits."""

from .directions import directions_url
from .models import EndPoint, RoutePlan, RoutePoint, RouteStop, StartPoint
from .sequencer import plan_route

__all__ = [
    "directions_url",
    "EndPoint",
    "plan_route",
    "RoutePlan",
    "RoutePoint",
    "RouteStop",
    "StartPoint",
]
