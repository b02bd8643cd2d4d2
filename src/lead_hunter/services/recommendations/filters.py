"""Location and eligibility filters applied before scoring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ...data.geography import cities_for_county
from ...errors import ValidationError
from ...models.domain import Permit


@dataclass(frozen=True)
class LocationFilter:
    """Restrict permits to a set of cities, or to the towns of a county.

    Explicit cities win over the county. ``state`` narrows either one.
    """

    cities: tuple[str, ...] = ()
    county: Optional[str] = None
    state: Optional[str] = None

    @classmethod
    def build(
        cls,
        cities: Iterable[str] | None = None,
        county: str | None = None,
        state: str | None = None,
    ) -> "LocationFilter":
        cleaned = tuple(city.strip() for city in (cities or ()) if city and city.strip())
        return cls(
            cities=cleaned,
            county=(county or "").strip() or None,
            state=(state or "").strip().upper() or None,
        )

    @property
    def is_empty(self) -> bool:
        return not self.cities and not self.county and not self.state

    def allowed_cities(self) -> Optional[frozenset[str]]:
        if self.cities:
            return frozenset(city.lower() for city in self.cities)
        if self.county:
            county_cities = cities_for_county(self.county)
            if county_cities is None:
                raise ValidationError(f"Unknown county '{self.county}'.")
            return frozenset(city.lower() for city in county_cities)
        return None

    def apply(self, permits: Sequence[Permit]) -> list[Permit]:
        if self.is_empty:
            return list(permits)
        allowed = self.allowed_cities()
        selected = []
        for permit in permits:
            city = (permit.city or "").strip().lower()
            if allowed is not None and city not in allowed:
                continue
            if self.state and (permit.state or "").strip().upper() != self.state:
                continue
            selected.append(permit)
        return selected


def eligible_permits(permits: Sequence[Permit]) -> list[Permit]:
    """Drop unplaced permits and those never worth revisiting."""

    eligible = []
    for permit in permits:
        if not permit.has_valid_coordinates():
            raise ValidationError(f"Permit '{permit.permit_id}' has non-numeric or out-of-range coordinates.")
        if permit.is_placed and permit.is_open:
            eligible.append(permit)
    return eligible
