"""Route planning orchestration for the API layer."""

from __future__ import annotations

from ...schemas.permits import PermitModel
from ...schemas.routing import (
    RoutePlanRequest,
    RoutePlanResponse,
    RoutePointModel,
    RouteStopModel,
)
from .directions import directions_url
from .models import EndPoint, RoutePlan, RoutePoint, StartPoint
from .sequencer import plan_route


def _point_model(point: RoutePoint) -> RoutePointModel:
    return RoutePointModel(
        label=point.label,
        source=point.source,
        latitude=point.latitude,
        longitude=point.longitude,
    )


def plan_to_response(plan: RoutePlan) -> RoutePlanResponse:
    return RoutePlanResponse(
        stops=[
            RouteStopModel(
                sequence=stop.sequence,
                permit=PermitModel.from_domain(stop.permit),
                distance_from_prev_miles=round(stop.distance_from_prev_miles, 2),
                travel_minutes=round(stop.travel_minutes, 1),
                arrival_min=round(stop.arrival_min, 1),
            )
            for stop in plan.stops
        ],
        start_location=_point_model(plan.start_location),
        end_location=_point_model(plan.end_location),
        total_distance_miles=round(plan.total_distance_miles, 2),
        travel_minutes=round(plan.travel_minutes, 1),
        dwell_minutes=plan.dwell_minutes,
        estimated_duration_minutes=round(plan.estimated_duration_minutes, 1),
        time_budget_minutes=plan.time_budget_minutes,
        within_budget=plan.within_budget,
        overage_minutes=round(plan.overage_minutes, 1),
        directions_url=directions_url(plan),
        skipped_duplicates=plan.skipped_duplicates,
        warnings=plan.warnings,
    )


def plan_for_payload(payload: RoutePlanRequest) -> RoutePlan:
    return plan_route(
        [permit.to_domain() for permit in payload.permits],
        StartPoint(
            policy=payload.start.policy,
            latitude=payload.start.latitude,
            longitude=payload.start.longitude,
            address=payload.start.address,
        ),
        EndPoint(
            policy=payload.end.policy,
            address=payload.end.address,
            latitude=payload.end.latitude,
            longitude=payload.end.longitude,
        ),
        dwell_minutes=payload.dwell_minutes,
        average_speed_mph=payload.average_speed_mph,
        time_budget_minutes=payload.time_budget_minutes,
    )
