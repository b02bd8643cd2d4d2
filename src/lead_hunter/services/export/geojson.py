"""GeoJSON export for hot-zone and route map overlays."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from shapely.geometry import LineString, Point, mapping

from ...config import settings
from ...models.domain import Permit
from ..geospatial import zone_outline
from ..recommendations.models import Cluster
from ..routing.models import RoutePlan


def generate_zone_color(index: int) -> str:
    """Generate distinct colors for zones."""
    colors = [
        "#e0003e", "#e0af00", "#e000a2", "#611cc7", "#02d8e0",
        "#38e000", "#0000c1", "#e0e005", "#13aae0", "#a4d819",
    ]
    return colors[index % len(colors)]


def clusters_to_geojson(
    clusters: Sequence[Cluster],
    permits: Sequence[Permit],
    *,
    padding_degrees: float | None = None,
) -> Dict[str, Any]:
    """Convert hot zones to a FeatureCollection.

    Each cluster yields a centroid point and an outline polygon padded by
    half the clustering radius so two-member zones still render as areas.
    """

    padding = settings.cluster_radius_degrees / 2 if padding_degrees is None else padding_degrees
    by_id = {permit.permit_id: permit for permit in permits}
    features: List[Dict[str, Any]] = []
    for idx, cluster in enumerate(clusters):
        members = [by_id[pid] for pid in cluster.member_ids if pid in by_id]
        properties = {
            "clusterId": cluster.cluster_id,
            "count": cluster.count,
            "memberIds": list(cluster.member_ids),
            "color": generate_zone_color(idx),
        }
        features.append(
            {
                "type": "Feature",
                "geometry": mapping(Point(cluster.longitude, cluster.latitude)),
                "properties": {**properties, "kind": "center"},
            }
        )
        if members:
            outline = zone_outline([(member.latitude, member.longitude) for member in members], padding)
            features.append(
                {
                    "type": "Feature",
                    "geometry": mapping(outline),
                    "properties": {**properties, "kind": "outline"},
                }
            )
    return {"type": "FeatureCollection", "features": features}


def route_to_geojson(plan: RoutePlan) -> Dict[str, Any]:
    """Route line from start through every stop to the end, plus one point per stop."""

    coordinates: List[tuple[float, float]] = []
    if plan.start_location.has_coordinates:
        coordinates.append((plan.start_location.longitude, plan.start_location.latitude))
    coordinates.extend((stop.permit.longitude, stop.permit.latitude) for stop in plan.stops)
    if plan.end_location.has_coordinates:
        coordinates.append((plan.end_location.longitude, plan.end_location.latitude))

    features: List[Dict[str, Any]] = [
        {
            "type": "Feature",
            "geometry": mapping(LineString(coordinates)),
            "properties": {
                "kind": "route",
                "totalDistanceMiles": round(plan.total_distance_miles, 2),
                "estimatedDurationMinutes": round(plan.estimated_duration_minutes, 1),
                "withinBudget": plan.within_budget,
            },
        }
    ]
    for stop in plan.stops:
        features.append(
            {
                "type": "Feature",
                "geometry": mapping(Point(stop.permit.longitude, stop.permit.latitude)),
                "properties": {
                    "kind": "stop",
                    "sequence": stop.sequence,
                    "permitId": stop.permit.permit_id,
                    "address": stop.permit.full_address(settings.default_state),
                },
            }
        )
    return {"type": "FeatureCollection", "features": features}
