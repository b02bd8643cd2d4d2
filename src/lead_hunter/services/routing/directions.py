"""Google Maps directions links for planned routes."""

from __future__ import annotations

from urllib.parse import quote

from ...config import settings
from .models import RoutePlan

MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/"


def directions_url(plan: RoutePlan) -> str:
    """Build a /maps/dir/ link: start, every stop in order, then the end point."""

    waypoints = [plan.start_location.label]
    waypoints.extend(stop.permit.full_address(settings.default_state) for stop in plan.stops)
    waypoints.append(plan.end_location.label)
    return MAPS_DIRECTIONS_URL + "/".join(quote(point.strip(), safe=",") for point in waypoints)
