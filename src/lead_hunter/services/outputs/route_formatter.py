"""Serializers for route plan outputs."""

from __future__ import annotations

import csv
import io

from ...config import settings
from ..routing.directions import directions_url
from ..routing.models import RoutePlan


def route_plan_to_json(plan: RoutePlan) -> dict:
    return {
        "start_location": plan.start_location.label,
        "end_location": plan.end_location.label,
        "total_distance_miles": round(plan.total_distance_miles, 2),
        "estimated_duration_minutes": round(plan.estimated_duration_minutes, 1),
        "time_budget_minutes": plan.time_budget_minutes,
        "within_budget": plan.within_budget,
        "overage_minutes": round(plan.overage_minutes, 1),
        "directions_url": directions_url(plan),
        "skipped_duplicates": list(plan.skipped_duplicates),
        "warnings": list(plan.warnings),
        "stops": [
            {
                "sequence": stop.sequence,
                "permit_id": stop.permit.permit_id,
                "address": stop.permit.full_address(settings.default_state),
                "builder_name": stop.permit.builder_name,
                "builder_phone": stop.permit.builder_phone,
                "distance_from_prev_miles": round(stop.distance_from_prev_miles, 2),
                "arrival_min": round(stop.arrival_min, 1),
            }
            for stop in plan.stops
        ],
    }


def route_plan_to_csv(plan: RoutePlan) -> str:
    """Checklist rows, one per stop, for printing or spreadsheet import."""

    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "permit_id",
        "address",
        "builder_name",
        "builder_phone",
        "permit_type",
        "status",
        "distance_from_prev_miles",
        "arrival_min",
        "visited",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for stop in plan.stops:
        writer.writerow(
            {
                "sequence": stop.sequence,
                "permit_id": stop.permit.permit_id,
                "address": stop.permit.full_address(settings.default_state),
                "builder_name": stop.permit.builder_name or "",
                "builder_phone": stop.permit.builder_phone or "",
                "permit_type": stop.permit.permit_type,
                "status": stop.permit.status,
                "distance_from_prev_miles": round(stop.distance_from_prev_miles, 2),
                "arrival_min": round(stop.arrival_min, 1),
                "visited": "",
            }
        )
    return buffer.getvalue()
