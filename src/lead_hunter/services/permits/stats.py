"""Permit dashboard counters."""

from __future__ import annotations

from collections import Counter
from typing import Optional, Sequence

from ...models.domain import PERMIT_STATUSES, PERMIT_TYPES, Permit


def compute_permit_stats(permits: Sequence[Permit], top_n: int = 5) -> dict:
    """Counts by status, type and city, the numbers the Lead Hunter header shows."""

    status_counts: Counter[str] = Counter(permit.status for permit in permits)
    type_counts: Counter[str] = Counter(permit.permit_type for permit in permits)
    placed = sum(1 for permit in permits if permit.is_placed)

    return {
        "total": len(permits),
        "placed": placed,
        "unplaced": len(permits) - placed,
        "byStatus": {status: status_counts.get(status, 0) for status in PERMIT_STATUSES},
        "byType": {permit_type: type_counts.get(permit_type, 0) for permit_type in PERMIT_TYPES},
        "topCities": list_permit_cities(permits, limit=top_n),
    }


def list_permit_cities(permits: Sequence[Permit], limit: Optional[int] = None) -> list[dict]:
    """Return cities present in the permit set, busiest first."""

    counts: Counter[str] = Counter()
    for permit in permits:
        label = (permit.city or "").strip()
        if label:
            counts[label] += 1

    ranked = sorted(
        counts.items(),
        key=lambda item: (-item[1], item[0].lower()),
    )
    items = [{"name": city, "permits": count} for city, count in ranked]
    if limit is not None:
        return items[: max(limit, 0)]
    return items
