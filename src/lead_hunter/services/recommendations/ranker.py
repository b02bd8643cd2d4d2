"""Recommendation orchestration: filter, cluster, score, sort, summarise."""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Sequence

from ...config import settings
from ...models.domain import Permit
from .clustering import cluster_hot_permits, largest_cluster_by_permit
from .filters import LocationFilter, eligible_permits
from .models import Cluster, Recommendation, RecommendationResult, RecommendationSummary
from .scoring import PermitScorer, ScoringWeights, as_utc, builder_open_counts

logger = logging.getLogger(__name__)

EMPTY_DAILY_GOAL = "No permits to analyze yet - add or import permits to get visit recommendations."


def _sort_key(recommendation: Recommendation) -> tuple:
    return (
        -recommendation.score,
        as_utc(recommendation.permit.created_at),
        recommendation.permit_id,
    )


def _cluster_area(clusters: Sequence[Cluster], permits_by_id: dict[str, Permit]) -> str | None:
    cities: Counter[str] = Counter()
    for cluster in clusters:
        for permit_id in cluster.member_ids:
            permit = permits_by_id.get(permit_id)
            if permit is not None and permit.city and permit.city.strip():
                cities[permit.city.strip()] += 1
    if not cities:
        return None
    # Most members first, then alphabetical so the narrative is stable.
    return sorted(cities.items(), key=lambda item: (-item[1], item[0]))[0][0]


def daily_goal(
    recommendations: Sequence[Recommendation],
    clusters: Sequence[Cluster],
    permits_by_id: dict[str, Permit],
) -> str:
    if not recommendations:
        return EMPTY_DAILY_GOAL

    high = sum(1 for rec in recommendations if rec.priority == "high")
    medium = sum(1 for rec in recommendations if rec.priority == "medium")
    if clusters:
        area = _cluster_area(clusters, permits_by_id)
        clustered = len({pid for cluster in clusters for pid in cluster.member_ids})
        location = f" in {area}" if area else ""
        return (
            f"Focus on the {len(clusters)} hot-zone cluster(s){location}: "
            f"{clustered} hot permits can be covered in one trip."
        )
    if high:
        return f"Focus on {high} high-priority permit(s) today, starting with {recommendations[0].permit.full_address()}."
    if medium:
        return f"No high-priority permits today - work through the {medium} medium-priority permit(s) closest to your route."
    return f"Only low-priority permits remain ({len(recommendations)}) - use today to add new permits."


def generate_recommendations(
    permits: Sequence[Permit],
    location_filter: LocationFilter | None = None,
    *,
    now: datetime | None = None,
    weights: ScoringWeights | None = None,
    limit: int | None = None,
) -> RecommendationResult:
    """Rank permits into a prioritised visit list.

    The result depends only on the inputs and ``now``: equal scores fall back
    to the oldest permit first, then the permit id.
    """

    now = now or datetime.now(timezone.utc)
    limit = limit if limit is not None else settings.max_recommendations

    located = (location_filter or LocationFilter()).apply(permits)
    candidates = eligible_permits(located)
    clusters = cluster_hot_permits(candidates)
    membership = largest_cluster_by_permit(clusters)

    scorer = PermitScorer(weights)
    builder_counts = builder_open_counts(permits)
    recommendations: list[Recommendation] = []
    for permit in candidates:
        cluster = membership.get(permit.permit_id)
        result = scorer.score(permit, cluster=cluster, now=now, builder_counts=builder_counts)
        recommendations.append(
            Recommendation(
                permit_id=permit.permit_id,
                permit=permit,
                priority=result.priority,
                score=result.score,
                reasons=result.reasons,
                recommended_action=result.recommended_action,
                time_of_day=result.time_of_day,
                cluster_id=cluster.cluster_id if cluster else None,
            )
        )
    recommendations.sort(key=_sort_key)

    permits_by_id = {permit.permit_id: permit for permit in candidates}
    summary = RecommendationSummary(
        total_analyzed=len(recommendations),
        high_priority=sum(1 for rec in recommendations if rec.priority == "high"),
        medium_priority=sum(1 for rec in recommendations if rec.priority == "medium"),
        low_priority=sum(1 for rec in recommendations if rec.priority == "low"),
        daily_goal=daily_goal(recommendations, clusters, permits_by_id),
    )
    logger.info(
        f"Scored {summary.total_analyzed} of {len(permits)} permits: "
        f"{summary.high_priority} high, {summary.medium_priority} medium, {summary.low_priority} low"
    )

    if limit is not None:
        recommendations = recommendations[:limit]
    return RecommendationResult(
        recommendations=recommendations,
        summary=summary,
        generated_at=now,
        clusters=clusters,
    )
