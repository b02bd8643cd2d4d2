"""Recommendation orchestration for the API layer."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from ...data.permits_repository import get_permits
from ...models.domain import Permit
from ...schemas.permits import PermitModel
from ...schemas.recommendations import (
    CenterModel,
    ClusterModel,
    RecommendationModel,
    RecommendationRequest,
    RecommendationsResponse,
    SummaryModel,
)
from .clustering import cluster_hot_permits
from .filters import LocationFilter
from .models import Cluster, RecommendationResult
from .ranker import generate_recommendations

logger = logging.getLogger(__name__)


def cluster_to_model(cluster: Cluster) -> ClusterModel:
    return ClusterModel(
        clusterId=cluster.cluster_id,
        center=CenterModel(lat=cluster.latitude, lng=cluster.longitude),
        members=list(cluster.member_ids),
        count=cluster.count,
    )


def result_to_response(result: RecommendationResult) -> RecommendationsResponse:
    summary = result.summary
    return RecommendationsResponse(
        recommendations=[
            RecommendationModel(
                permitId=rec.permit_id,
                permit=PermitModel.from_domain(rec.permit),
                priority=rec.priority,
                score=rec.score,
                reasons=rec.reasons,
                recommendedAction=rec.recommended_action,
                timeOfDay=rec.time_of_day,
                clusterId=rec.cluster_id,
            )
            for rec in result.recommendations
        ],
        summary=SummaryModel(
            totalAnalyzed=summary.total_analyzed,
            highPriority=summary.high_priority,
            mediumPriority=summary.medium_priority,
            lowPriority=summary.low_priority,
            dailyGoal=summary.daily_goal,
        ),
        clusters=[cluster_to_model(cluster) for cluster in result.clusters],
        generatedAt=result.generated_at,
    )


def recommend_for_payload(payload: RecommendationRequest) -> RecommendationsResponse:
    permits = [permit.to_domain() for permit in payload.permits]
    location_filter = LocationFilter.build(payload.cities, payload.county, payload.state)
    result = generate_recommendations(permits, location_filter, now=payload.now, limit=payload.limit)
    return result_to_response(result)


def recommend_from_source(
    cities: Sequence[str] | None = None,
    county: str | None = None,
    state: str | None = None,
    *,
    limit: int | None = None,
    now: datetime | None = None,
) -> RecommendationsResponse:
    location_filter = LocationFilter.build(cities, county, state)
    # Push the city list down to the query; county expansion happens in the filter.
    permits = get_permits(location_filter.cities or None)
    logger.info(f"Generating recommendations for {len(permits)} permits ({location_filter})")
    result = generate_recommendations(permits, location_filter, now=now, limit=limit)
    return result_to_response(result)


def clusters_for_permits(
    permits: Sequence[Permit],
    *,
    radius: float | None = None,
    min_size: int | None = None,
) -> list[Cluster]:
    return cluster_hot_permits(permits, radius=radius, min_size=min_size)
