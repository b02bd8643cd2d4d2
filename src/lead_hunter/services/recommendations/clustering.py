"""Hot-zone detection over hot permits."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from sklearn.neighbors import NearestNeighbors

from ...config import settings
from ...errors import ValidationError
from ...models.domain import Permit
from ..geospatial import centroid, degree_distance
from .models import Cluster

logger = logging.getLogger(__name__)


def _hot_candidates(permits: Sequence[Permit]) -> list[Permit]:
    candidates = []
    for permit in permits:
        if permit.status != "hot":
            continue
        if not permit.has_valid_coordinates():
            raise ValidationError(f"Permit '{permit.permit_id}' has non-numeric or out-of-range coordinates.")
        if permit.is_placed:
            candidates.append(permit)
    # Greedy dedup depends on discovery order; a stable key keeps it reproducible.
    return sorted(candidates, key=lambda permit: permit.permit_id)


def cluster_hot_permits(
    permits: Sequence[Permit],
    *,
    radius: float | None = None,
    min_size: int | None = None,
) -> list[Cluster]:
    """Detect concentrations of hot permits.

    Every hot permit seeds a candidate made of all hot permits within
    ``radius`` degrees of it (itself included). Candidates with at least
    ``min_size`` members become clusters centred on their members' mean
    position. A candidate whose centre lies within ``radius / 2`` of an
    already accepted cluster is discarded, so the first one found wins.

    Permits that are not ``hot`` or are unplaced are ignored, so the full
    permit list can be passed in directly.
    """

    radius = settings.cluster_radius_degrees if radius is None else radius
    min_size = settings.min_cluster_size if min_size is None else min_size
    if radius <= 0:
        raise ValidationError("Cluster radius must be positive.")
    if min_size < 2:
        raise ValidationError("Minimum cluster size must be at least 2.")

    hot = _hot_candidates(permits)
    if len(hot) < min_size:
        return []

    coordinates = np.array([[permit.latitude, permit.longitude] for permit in hot], dtype=float)
    index = NearestNeighbors(radius=radius).fit(coordinates)
    neighborhoods = index.radius_neighbors(coordinates, return_distance=False)

    accepted: list[Cluster] = []
    for neighbors in neighborhoods:
        if len(neighbors) < min_size:
            continue
        members = [hot[i] for i in sorted(int(i) for i in neighbors)]
        center_lat, center_lon = centroid([(member.latitude, member.longitude) for member in members])
        duplicate = any(
            degree_distance(center_lat, center_lon, cluster.latitude, cluster.longitude) < radius / 2
            for cluster in accepted
        )
        if duplicate:
            continue
        accepted.append(
            Cluster(
                cluster_id=f"HZ{len(accepted) + 1:02d}",
                latitude=center_lat,
                longitude=center_lon,
                member_ids=tuple(sorted(member.permit_id for member in members)),
            )
        )

    logger.info(f"Found {len(accepted)} hot zone(s) among {len(hot)} hot permits")
    return accepted


def largest_cluster_by_permit(clusters: Sequence[Cluster]) -> dict[str, Cluster]:
    """Map each clustered permit id to the biggest cluster it belongs to."""

    membership: dict[str, Cluster] = {}
    for cluster in clusters:
        for permit_id in cluster.member_ids:
            current = membership.get(permit_id)
            if current is None or cluster.count > current.count:
                membership[permit_id] = cluster
    return membership
