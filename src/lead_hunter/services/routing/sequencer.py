"""Visit route sequencing for a hand-picked set of permits.

Stops are visited in the order the caller selected them. This is a
checklist sequencer, not a tour optimiser: no reordering is attempted.

Travel times are an approximation. Legs use straight-line (haversine)
distance at a flat average speed plus a fixed dwell per stop; there is no
road network or traffic model behind the estimate. A start or end address
without coordinates is placed at the business address for estimating.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ...config import settings
from ...errors import ValidationError
from ...models.domain import Permit
from ..geospatial import haversine_miles
from .models import EndPoint, RoutePlan, RoutePoint, RouteStop, StartPoint

logger = logging.getLogger(__name__)

MIN_STOPS = 2


def _dedupe_key(permit: Permit) -> tuple[str, str]:
    address = " ".join(permit.address.lower().split())
    city = " ".join((permit.city or "").lower().split())
    return address, city


def dedupe_stops(selected: Sequence[Permit]) -> tuple[list[Permit], list[str]]:
    """Keep the first of any permits sharing an id or a street address."""

    seen_ids: set[str] = set()
    seen_addresses: set[tuple[str, str]] = set()
    unique: list[Permit] = []
    skipped: list[str] = []
    for permit in selected:
        key = _dedupe_key(permit)
        if permit.permit_id in seen_ids or (key[0] and key in seen_addresses):
            skipped.append(permit.permit_id)
            continue
        seen_ids.add(permit.permit_id)
        if key[0]:
            seen_addresses.add(key)
        unique.append(permit)
    return unique, skipped


def _validate_stops(selected: Sequence[Permit]) -> None:
    if len(selected) < MIN_STOPS:
        raise ValidationError("At least two stops are required to plan a route.")
    for permit in selected:
        if not permit.has_valid_coordinates():
            raise ValidationError(f"Permit '{permit.permit_id}' has non-numeric or out-of-range coordinates.")
        if not permit.is_placed:
            raise ValidationError(f"Permit '{permit.permit_id}' has not been placed on the map yet.")


def _custom_address(address: str | None, which: str) -> str:
    cleaned = (address or "").strip()
    if not cleaned:
        raise ValidationError(f"A custom {which} address is required when the {which} point is 'custom'.")
    return cleaned


def _business_default() -> RoutePoint:
    return RoutePoint(
        label=settings.default_start_address,
        source="business_default",
        latitude=settings.default_start_latitude,
        longitude=settings.default_start_longitude,
    )


def resolve_start(start: StartPoint, stops: Sequence[Permit], warnings: list[str]) -> RoutePoint:
    match start.policy:
        case "current":
            if start.latitude is not None and start.longitude is not None:
                return RoutePoint(
                    label=f"{start.latitude},{start.longitude}",
                    source="current_location",
                    latitude=start.latitude,
                    longitude=start.longitude,
                )
            logger.warning("Current location unavailable, starting from the business address")
            warnings.append(f"Current location unavailable; starting from {settings.default_start_address}.")
            return _business_default()
        case "first":
            first = stops[0]
            return RoutePoint(
                label=first.full_address(settings.default_state),
                source="first_permit",
                latitude=first.latitude,
                longitude=first.longitude,
            )
        case "custom":
            return RoutePoint(
                label=_custom_address(start.address, "start"),
                source="custom",
                latitude=start.latitude,
                longitude=start.longitude,
            )
        case _:
            raise ValidationError(f"Unknown start policy '{start.policy}'.")


def resolve_end(end: EndPoint, start: RoutePoint, stops: Sequence[Permit]) -> RoutePoint:
    match end.policy:
        case "start":
            return RoutePoint(
                label=start.label,
                source="round_trip",
                latitude=start.latitude,
                longitude=start.longitude,
            )
        case "last":
            last = stops[-1]
            return RoutePoint(
                label=last.full_address(settings.default_state),
                source="last_permit",
                latitude=last.latitude,
                longitude=last.longitude,
            )
        case "custom":
            return RoutePoint(
                label=_custom_address(end.address, "end"),
                source="custom",
                latitude=end.latitude,
                longitude=end.longitude,
            )
        case _:
            raise ValidationError(f"Unknown end policy '{end.policy}'.")


def _estimated_position(point: RoutePoint, warnings: list[str]) -> tuple[float | None, float | None]:
    """Coordinates of a start/end point, or the business address standing in for it."""
    if point.has_coordinates:
        return point.latitude, point.longitude
    fallback = (settings.default_start_latitude, settings.default_start_longitude)
    if None in fallback:
        warnings.append(f"Travel to and from '{point.label}' was not estimated: no coordinates.")
    else:
        logger.warning(f"No coordinates for '{point.label}', estimating from {settings.default_start_address}")
        warnings.append(
            f"No coordinates for '{point.label}'; travel estimated from {settings.default_start_address}."
        )
    return fallback


def _leg_miles(
    from_lat: float | None,
    from_lon: float | None,
    to_lat: float | None,
    to_lon: float | None,
) -> float | None:
    if None in (from_lat, from_lon, to_lat, to_lon):
        return None
    return haversine_miles(from_lat, from_lon, to_lat, to_lon)


def plan_route(
    selected: Sequence[Permit],
    start: StartPoint | None = None,
    end: EndPoint | None = None,
    *,
    dwell_minutes: float | None = None,
    average_speed_mph: float | None = None,
    time_budget_minutes: float | None = None,
) -> RoutePlan:
    """Turn selected permits into an ordered, time-boxed route.

    Raises ``ValidationError`` for fewer than two stops, a custom start or
    end without an address, or stops without usable coordinates.
    """

    start = start or StartPoint()
    end = end or EndPoint()
    dwell = settings.route_dwell_minutes if dwell_minutes is None else dwell_minutes
    speed = settings.route_average_speed_mph if average_speed_mph is None else average_speed_mph
    budget = settings.route_time_budget_minutes if time_budget_minutes is None else time_budget_minutes
    if speed <= 0:
        raise ValidationError("Average speed must be positive.")

    _validate_stops(selected)
    stops, skipped = dedupe_stops(selected)
    if skipped:
        logger.warning(f"Dropped {len(skipped)} duplicate stop(s): {skipped}")
    if len(stops) < MIN_STOPS:
        raise ValidationError("At least two distinct stops are required to plan a route.")

    warnings: list[str] = []
    start_point = resolve_start(start, stops, warnings)
    end_point = resolve_end(end, start_point, stops)

    route_stops: list[RouteStop] = []
    total_miles = 0.0
    travel_total = 0.0
    clock = 0.0
    start_lat, start_lon = _estimated_position(start_point, warnings)
    prev_lat, prev_lon = start_lat, start_lon
    for sequence, permit in enumerate(stops, start=1):
        miles = _leg_miles(prev_lat, prev_lon, permit.latitude, permit.longitude) or 0.0
        minutes = miles / speed * 60.0
        if sequence > 1:
            clock += dwell
        clock += minutes
        total_miles += miles
        travel_total += minutes
        route_stops.append(
            RouteStop(
                permit=permit,
                sequence=sequence,
                distance_from_prev_miles=miles,
                travel_minutes=minutes,
                arrival_min=clock,
            )
        )
        prev_lat, prev_lon = permit.latitude, permit.longitude

    if end_point.source == "round_trip":
        end_lat, end_lon = start_lat, start_lon
    else:
        end_lat, end_lon = _estimated_position(end_point, warnings)
    final_miles = _leg_miles(prev_lat, prev_lon, end_lat, end_lon) or 0.0
    total_miles += final_miles
    travel_total += final_miles / speed * 60.0

    dwell_total = dwell * len(route_stops)
    estimated = travel_total + dwell_total
    plan = RoutePlan(
        stops=route_stops,
        start_location=start_point,
        end_location=end_point,
        total_distance_miles=total_miles,
        travel_minutes=travel_total,
        dwell_minutes=dwell_total,
        estimated_duration_minutes=estimated,
        time_budget_minutes=budget,
        within_budget=estimated <= budget,
        skipped_duplicates=skipped,
        warnings=warnings,
    )
    logger.info(
        f"Planned route with {len(route_stops)} stops, {total_miles:.1f} mi, "
        f"{estimated:.0f} of {budget:.0f} min budget"
    )
    return plan
