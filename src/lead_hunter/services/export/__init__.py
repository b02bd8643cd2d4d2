"""Export services."""

from .geojson import clusters_to_geojson, route_to_geojson

__all__ = [
    "clusters_to_geojson",
    "route_to_geojson",
]
