"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import MultiPoint, Polygon

EARTH_RADIUS_KM = 6371.0
KM_PER_MILE = 1.609344


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    return haversine_km(lat1, lon1, lat2, lon2) / KM_PER_MILE


def degree_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Euclidean distance in degree space.

    Only meaningful over a few kilometres, where one degree of latitude and
    one of longitude are close enough to treat as the same unit.
    """
    return math.hypot(lat2 - lat1, lon2 - lon1)


def centroid(points: Sequence[tuple[float, float]]) -> tuple[float, float]:
    """Arithmetic mean of (lat, lon) points."""

    if not points:
        raise ValueError("centroid requires at least one point")
    center = MultiPoint([(lon, lat) for lat, lon in points]).centroid
    return center.y, center.x


def zone_outline(points: Sequence[tuple[float, float]], padding_degrees: float) -> Polygon:
    """Padded convex hull around (lat, lon) points, in (lon, lat) order for GeoJSON."""

    hull = MultiPoint([(lon, lat) for lat, lon in points]).convex_hull
    return hull.buffer(padding_degrees)
