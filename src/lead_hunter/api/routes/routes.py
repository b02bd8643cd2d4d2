"""Route planning endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from ...schemas.routing import RoutePlanRequest, RoutePlanResponse
from ...services.export.geojson import route_to_geojson
from ...services.outputs.route_formatter import route_plan_to_csv
from ...services.routing.service import plan_for_payload, plan_to_response

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/plan", response_model=RoutePlanResponse, status_code=status.HTTP_200_OK)
def plan(payload: RoutePlanRequest) -> RoutePlanResponse:
    try:
        return plan_to_response(plan_for_payload(payload))
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error planning route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to plan route: {str(exc)}",
        ) from exc


@router.post("/plan/checklist.csv", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
def plan_checklist_csv(payload: RoutePlanRequest) -> PlainTextResponse:
    """Same plan as /plan, as a printable stop checklist."""
    try:
        route_plan = plan_for_payload(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return PlainTextResponse(
        route_plan_to_csv(route_plan),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="route-checklist.csv"'},
    )


@router.post("/plan/geojson", status_code=status.HTTP_200_OK)
def plan_geojson(payload: RoutePlanRequest) -> dict:
    try:
        route_plan = plan_for_payload(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return route_to_geojson(route_plan)
