"""Per-permit visit priority scoring."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping, Sequence

from ...config import Settings, settings as default_settings
from ...models.domain import Permit
from .models import Cluster, PermitScore, ScoreReason

BASE_SCORE = 30.0

DEFAULT_STATUS_POINTS: Mapping[str, float] = MappingProxyType({
    "hot": 30.0,
    "new": 20.0,
    "not_visited": 10.0,
    "contacted": 5.0,
    "visited": -10.0,
    "cold": -25.0,
    "rejected": -40.0,
    "converted_to_lead": -40.0,
})

STATUS_REASONS: Mapping[str, str] = {
    "hot": "Hot lead with active interest",
    "new": "New permit, not yet worked",
    "not_visited": "Not visited yet",
    "contacted": "Already contacted, follow-up pending",
    "visited": "Visited before",
    "cold": "Cold lead",
    "rejected": "Rejected lead",
    "converted_to_lead": "Already converted to a lead",
}

# Residential owners are home after work; commercial sites run business hours.
TIME_OF_DAY_BY_TYPE: Mapping[str, str] = {
    "residential": "evening",
    "commercial": "morning",
}

PHONE_POINTS = 5.0
NOTES_POINTS = 3.0
NOTES_MIN_LENGTH = 10


def _default(name: str):
    """Default weight as declared on Settings."""
    return Settings.model_fields[name].default


@dataclass(frozen=True)
class ScoringWeights:
    """Tunable scoring policy.

    Status points dominate; cluster, recency and builder bonuses are each
    capped below the hot status weight.
    """

    status_points: Mapping[str, float] = field(default_factory=lambda: DEFAULT_STATUS_POINTS)
    cluster_weight: float = _default("cluster_weight")
    cluster_size_cap: int = _default("cluster_size_cap")
    recency_weight: float = _default("recency_weight")
    recency_half_life_days: float = _default("recency_half_life_days")
    builder_repeat_weight: float = _default("builder_repeat_weight")
    builder_repeat_cap: int = _default("builder_repeat_cap")
    commercial_multiplier: float = _default("commercial_multiplier")
    high_threshold: int = _default("high_priority_threshold")
    medium_threshold: int = _default("medium_priority_threshold")

    def __post_init__(self) -> None:
        # Read-only copy; callers may pass a plain dict.
        object.__setattr__(self, "status_points", MappingProxyType(dict(self.status_points)))

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "ScoringWeights":
        config = config or default_settings
        scale = config.status_weight_scale
        return cls(
            status_points={status: points * scale for status, points in DEFAULT_STATUS_POINTS.items()},
            cluster_weight=config.cluster_weight,
            cluster_size_cap=config.cluster_size_cap,
            recency_weight=config.recency_weight,
            recency_half_life_days=config.recency_half_life_days,
            builder_repeat_weight=config.builder_repeat_weight,
            builder_repeat_cap=config.builder_repeat_cap,
            commercial_multiplier=config.commercial_multiplier,
            high_threshold=config.high_priority_threshold,
            medium_threshold=config.medium_priority_threshold,
        )

    def priority_for(self, score: int) -> str:
        if score >= self.high_threshold:
            return "high"
        if score >= self.medium_threshold:
            return "medium"
        return "low"


def _normalize_builder(name: str | None) -> str:
    return " ".join((name or "").lower().split())


def builder_open_counts(permits: Sequence[Permit]) -> Counter[str]:
    """Count open permits per builder across the whole permit set."""

    counts: Counter[str] = Counter()
    for permit in permits:
        builder = _normalize_builder(permit.builder_name)
        if builder and permit.is_open:
            counts[builder] += 1
    return counts


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def age_in_days(created_at: datetime, now: datetime) -> float:
    delta = as_utc(now) - as_utc(created_at)
    return max(delta.total_seconds() / 86400.0, 0.0)


class PermitScorer:
    """Score one permit at a time against the permit set it belongs to."""

    def __init__(self, weights: ScoringWeights | None = None) -> None:
        self.weights = weights or ScoringWeights.from_settings()

    def score(
        self,
        permit: Permit,
        *,
        cluster: Cluster | None = None,
        permits: Sequence[Permit] = (),
        now: datetime | None = None,
        builder_counts: Mapping[str, int] | None = None,
    ) -> PermitScore:
        now = now or datetime.now(timezone.utc)
        if builder_counts is None:
            builder_counts = builder_open_counts(permits)

        reasons = self._reasons(permit, cluster=cluster, now=now, builder_counts=builder_counts)
        raw = BASE_SCORE + sum(reason.points for reason in reasons)

        multiplier = self.weights.commercial_multiplier if permit.permit_type == "commercial" else 1.0
        if permit.permit_type == "commercial":
            adjustment = raw * multiplier - raw
            reasons.append(ScoreReason(f"Commercial permit ({_signed(adjustment)})", adjustment))
        else:
            reasons.append(ScoreReason("Residential permit", 0.0))
        raw *= multiplier

        score = int(round(min(max(raw, 0.0), 100.0)))
        ordered = sorted(reasons, key=lambda reason: abs(reason.points), reverse=True)
        return PermitScore(
            score=score,
            priority=self.weights.priority_for(score),
            reasons=[reason.text for reason in ordered],
            recommended_action=recommended_action(permit, cluster),
            time_of_day=time_of_day_for(permit.permit_type),
        )

    def _reasons(
        self,
        permit: Permit,
        *,
        cluster: Cluster | None,
        now: datetime,
        builder_counts: Mapping[str, int],
    ) -> list[ScoreReason]:
        weights = self.weights
        reasons: list[ScoreReason] = []

        status_points = weights.status_points.get(permit.status, 0.0)
        status_text = STATUS_REASONS.get(permit.status, f"Status: {permit.status}")
        reasons.append(ScoreReason(f"{status_text} ({_signed(status_points)})", status_points))

        if cluster is not None:
            size = min(cluster.count, weights.cluster_size_cap)
            points = weights.cluster_weight * size / weights.cluster_size_cap
            reasons.append(
                ScoreReason(
                    f"In hot zone {cluster.cluster_id} with {cluster.count - 1} other hot permit(s) nearby ({_signed(points)})",
                    points,
                )
            )
        elif permit.status == "hot":
            reasons.append(ScoreReason("Isolated hot permit, no hot zone nearby", 0.0))

        age = age_in_days(permit.created_at, now)
        recency = weights.recency_weight * 0.5 ** (age / weights.recency_half_life_days)
        reasons.append(ScoreReason(f"Permit is {int(age)} day(s) old ({_signed(recency)})", recency))

        builder = _normalize_builder(permit.builder_name)
        others = builder_counts.get(builder, 0) - (1 if permit.is_open else 0) if builder else 0
        if others > 0:
            points = weights.builder_repeat_weight * min(others, weights.builder_repeat_cap)
            reasons.append(
                ScoreReason(
                    f"Builder {permit.builder_name} has {others} other open permit(s) ({_signed(points)})",
                    points,
                )
            )

        if permit.builder_phone and permit.builder_phone.strip():
            reasons.append(ScoreReason(f"Builder phone number available ({_signed(PHONE_POINTS)})", PHONE_POINTS))
        if permit.notes and len(permit.notes.strip()) > NOTES_MIN_LENGTH:
            reasons.append(ScoreReason(f"Has field notes ({_signed(NOTES_POINTS)})", NOTES_POINTS))

        return reasons


def time_of_day_for(permit_type: str) -> str:
    return TIME_OF_DAY_BY_TYPE.get(permit_type, "afternoon")


def recommended_action(permit: Permit, cluster: Cluster | None) -> str:
    if cluster is not None:
        return f"Visit together with the {cluster.count - 1} other hot permit(s) in hot zone {cluster.cluster_id}"
    if permit.status == "hot":
        return "Visit today - hot lead"
    if permit.status == "new":
        return "Visit immediately - new opportunity"
    if permit.status in ("contacted", "not_visited"):
        if permit.builder_phone:
            return "Call the builder ahead, then schedule a follow-up visit"
        return "Schedule follow-up visit"
    if permit.status == "visited":
        return "Check in if passing nearby"
    return "Low priority - only stop if already in the area"


def _signed(points: float) -> str:
    return f"{points:+.0f}"
