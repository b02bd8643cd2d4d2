"""Permit visit recommendations."""

from .clustering import cluster_hot_permits
from .filters import LocationFilter
from .ranker import generate_recommendations
from .scoring import PermitScorer, ScoringWeights

__all__ = [
    "cluster_hot_permits",
    "generate_recommendations",
    "LocationFilter",
    "PermitScorer",
    "ScoringWeights",
]
