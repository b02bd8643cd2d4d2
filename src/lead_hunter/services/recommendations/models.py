"""Recommendation domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from ...models.domain import Permit


@dataclass(frozen=True, slots=True)
class Cluster:
    """A hot zone: two or more hot permits within the clustering radius."""

    cluster_id: str
    latitude: float
    longitude: float
    member_ids: tuple[str, ...]

    @property
    def count(self) -> int:
        return len(self.member_ids)


@dataclass(frozen=True, slots=True)
class ScoreReason:
    text: str
    points: float


@dataclass(slots=True)
class PermitScore:
    score: int
    priority: str
    reasons: List[str]
    recommended_action: str
    time_of_day: str


@dataclass(slots=True)
class Recommendation:
    permit_id: str
    permit: Permit
    priority: str
    score: int
    reasons: List[str]
    recommended_action: str
    time_of_day: str
    cluster_id: str | None = None


@dataclass(slots=True)
class RecommendationSummary:
    total_analyzed: int
    high_priority: int
    medium_priority: int
    low_priority: int
    daily_goal: str


@dataclass(slots=True)
class RecommendationResult:
    recommendations: List[Recommendation]
    summary: RecommendationSummary
    generated_at: datetime
    clusters: List[Cluster] = field(default_factory=list)
