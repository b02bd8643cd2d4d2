"""Permit recommendation, hot-zone and stats endpoints."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status

from ...data.permits_repository import get_permits
from ...schemas.permits import PermitStatsResponse
from ...schemas.recommendations import (
    ClusterRequest,
    ClustersResponse,
    RecommendationRequest,
    RecommendationsResponse,
)
from ...services.export.geojson import clusters_to_geojson
from ...services.permits.stats import compute_permit_stats
from ...services.recommendations.service import (
    cluster_to_model,
    clusters_for_permits,
    recommend_for_payload,
    recommend_from_source,
)

router = APIRouter(prefix="/permits", tags=["permits"])


def _split_cities(cities: str | None) -> list[str]:
    if not cities:
        return []
    return [city.strip() for city in cities.split(",") if city.strip()]


@router.get("/recommendations", response_model=RecommendationsResponse, status_code=status.HTTP_200_OK)
def get_recommendations(
    cities: str | None = Query(default=None, description="Comma-separated city names"),
    county: str | None = Query(default=None, description="County name; ignored when cities are given"),
    state: str | None = Query(default=None, description="Two-letter state code"),
    limit: int | None = Query(default=None, ge=1),
) -> RecommendationsResponse:
    try:
        return recommend_from_source(_split_cities(cities), county, state, limit=limit)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error generating recommendations: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate visit recommendations: {str(exc)}",
        ) from exc


@router.post("/recommendations", response_model=RecommendationsResponse, status_code=status.HTTP_200_OK)
def post_recommendations(payload: RecommendationRequest) -> RecommendationsResponse:
    try:
        return recommend_for_payload(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error generating recommendations: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate visit recommendations: {str(exc)}",
        ) from exc


@router.post("/clusters", status_code=status.HTTP_200_OK)
def post_clusters(
    payload: ClusterRequest,
    format: Literal["json", "geojson"] = Query(default="json"),
) -> dict:
    """Hot zones for map overlays."""
    try:
        permits = [permit.to_domain() for permit in payload.permits]
        clusters = clusters_for_permits(permits, radius=payload.radius_degrees, min_size=payload.min_size)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if format == "geojson":
        return clusters_to_geojson(clusters, permits)
    return ClustersResponse(clusters=[cluster_to_model(cluster) for cluster in clusters]).model_dump()


@router.get("/clusters", status_code=status.HTTP_200_OK)
def get_clusters(
    cities: str | None = Query(default=None, description="Comma-separated city names"),
    format: Literal["json", "geojson"] = Query(default="json"),
) -> dict:
    try:
        permits = get_permits(_split_cities(cities) or None)
        clusters = clusters_for_permits(permits)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if format == "geojson":
        return clusters_to_geojson(clusters, permits)
    return ClustersResponse(clusters=[cluster_to_model(cluster) for cluster in clusters]).model_dump()


@router.get("/stats", response_model=PermitStatsResponse, status_code=status.HTTP_200_OK)
def get_stats(top_n: int = Query(default=5, ge=1, le=50)) -> PermitStatsResponse:
    try:
        return PermitStatsResponse(**compute_permit_stats(get_permits(), top_n=top_n))
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
