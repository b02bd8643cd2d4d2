"""Recommendation and hot-zone request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .permits import PermitModel


class RecommendationRequest(BaseModel):
    permits: List[PermitModel]
    cities: Optional[List[str]] = Field(default=None, description="Only consider permits in these cities.")
    county: Optional[str] = Field(default=None, description="Only consider permits in this county's towns.")
    state: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1)
    now: Optional[datetime] = Field(
        default=None,
        description="Reference time for permit age; defaults to the current time.",
    )


class CenterModel(BaseModel):
    lat: float
    lng: float


class ClusterModel(BaseModel):
    clusterId: str
    center: CenterModel
    members: List[str]
    count: int


class RecommendationModel(BaseModel):
    permitId: str
    permit: PermitModel
    priority: Literal["high", "medium", "low"]
    score: int = Field(..., ge=0, le=100)
    reasons: List[str]
    recommendedAction: str
    timeOfDay: Literal["morning", "afternoon", "evening"]
    clusterId: Optional[str] = None


class SummaryModel(BaseModel):
    totalAnalyzed: int
    highPriority: int
    mediumPriority: int
    lowPriority: int
    dailyGoal: str


class RecommendationsResponse(BaseModel):
    success: bool = True
    recommendations: List[RecommendationModel]
    summary: SummaryModel
    clusters: List[ClusterModel]
    generatedAt: datetime


class ClusterRequest(BaseModel):
    permits: List[PermitModel]
    radius_degrees: Optional[float] = Field(default=None, gt=0.0)
    min_size: Optional[int] = Field(default=None, ge=2)


class ClustersResponse(BaseModel):
    clusters: List[ClusterModel]
