"""Service-area geography endpoints used by the location filter."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from ...data.geography import cities_for_county, counties_for_state, list_states

router = APIRouter(prefix="/geographical", tags=["geographical"])


@router.get("/counties", status_code=status.HTTP_200_OK)
def get_counties(state: str | None = Query(default=None, description="Two-letter state code")):
    if state:
        counties = counties_for_state(state)
        if counties is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"State '{state}' not found")
        return {"state": state.upper(), "counties": list(counties)}
    return list_states()


@router.get("/cities", status_code=status.HTTP_200_OK)
def get_cities(county: str = Query(..., description="County name")) -> dict:
    cities = cities_for_county(county)
    if cities is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"County '{county}' not found")
    return {"county": county, "cities": list(cities)}
