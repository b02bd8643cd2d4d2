"""Permit service helpers."""

from .stats import compute_permit_stats, list_permit_cities

__all__ = [
    "compute_permit_stats",
    "list_permit_cities",
]
