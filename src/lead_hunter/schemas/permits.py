"""Permit payload and stats schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from ..models.domain import Permit

PermitStatus = Literal[
    "new",
    "contacted",
    "converted_to_lead",
    "rejected",
    "hot",
    "cold",
    "visited",
    "not_visited",
]
PermitType = Literal["residential", "commercial"]


class PermitModel(BaseModel):
    id: str = Field(..., min_length=1)
    address: str = ""
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    builder_name: Optional[str] = None
    builder_phone: Optional[str] = None
    permit_type: PermitType = "residential"
    status: PermitStatus
    notes: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    created_at: datetime

    def to_domain(self) -> Permit:
        return Permit(
            permit_id=self.id,
            latitude=self.latitude if self.latitude is not None else 0.0,
            longitude=self.longitude if self.longitude is not None else 0.0,
            status=self.status,
            permit_type=self.permit_type,
            created_at=self.created_at,
            address=self.address,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            builder_name=self.builder_name,
            builder_phone=self.builder_phone,
            notes=self.notes,
        )

    @classmethod
    def from_domain(cls, permit: Permit) -> "PermitModel":
        return cls(
            id=permit.permit_id,
            address=permit.address,
            city=permit.city,
            state=permit.state,
            zip_code=permit.zip_code,
            builder_name=permit.builder_name,
            builder_phone=permit.builder_phone,
            permit_type=permit.permit_type,
            status=permit.status,
            notes=permit.notes,
            latitude=permit.latitude,
            longitude=permit.longitude,
            created_at=permit.created_at,
        )


class CitySummaryModel(BaseModel):
    name: str
    permits: int


class PermitStatsResponse(BaseModel):
    total: int
    placed: int
    unplaced: int
    byStatus: dict[str, int]
    byType: dict[str, int]
    topCities: list[CitySummaryModel]
