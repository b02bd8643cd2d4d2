"""Domain models for permit records."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

PERMIT_STATUSES = (
    "new",
    "contacted",
    "converted_to_lead",
    "rejected",
    "hot",
    "cold",
    "visited",
    "not_visited",
)
PERMIT_TYPES = ("residential", "commercial")

# Not worth revisiting; never recommended.
EXCLUDED_STATUSES = frozenset({"rejected", "converted_to_lead"})


@dataclass(slots=True)
class Permit:
    """A geocoded building permit used as a prospecting lead source."""

    permit_id: str
    latitude: float
    longitude: float
    status: str
    permit_type: str
    created_at: datetime
    address: str = ""
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    builder_name: Optional[str] = None
    builder_phone: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_placed(self) -> bool:
        return not (self.latitude == 0 and self.longitude == 0)

    @property
    def is_open(self) -> bool:
        return self.status not in EXCLUDED_STATUSES

    def has_valid_coordinates(self) -> bool:
        for value in (self.latitude, self.longitude):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return False
            if math.isnan(value) or math.isinf(value):
                return False
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0

    def full_address(self, default_state: str = "MA") -> str:
        """Render the address the way the map links expect it."""
        state_zip = " ".join(part for part in (self.state or default_state, self.zip_code or "") if part)
        parts = [self.address.strip(), (self.city or "").strip(), state_zip]
        return ", ".join(part for part in parts if part)
