"""Permit data loader with database-first approach, falling back to a CSV export."""

from __future__ import annotations

import csv
import functools
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from ..config import settings
from ..db.supabase import get_permits_table
from ..errors import ValidationError
from ..models.domain import PERMIT_STATUSES, PERMIT_TYPES, Permit

logger = logging.getLogger(__name__)

PERMIT_COLUMNS = (
    "id, address, city, state, zip_code, builder_name, builder_phone, "
    "permit_type, status, notes, latitude, longitude, created_at"
)


def _coerce_coordinate(value: Any, field_name: str, permit_id: str) -> float:
    # Not geocoded yet: treated as unplaced.
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0.0
    if isinstance(value, bool):
        raise ValidationError(f"Permit '{permit_id}' has a non-numeric {field_name}.")
    try:
        return float(str(value).replace(",", "")) if isinstance(value, str) else float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Permit '{permit_id}' has a non-numeric {field_name}: '{value}'") from exc


def _coerce_datetime(value: Any, permit_id: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValidationError(f"Permit '{permit_id}' has an invalid created_at: '{value}'") from exc
    raise ValidationError(f"Permit '{permit_id}' is missing created_at.")


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def permit_from_record(record: Mapping[str, Any]) -> Permit:
    """Build a Permit from a database row or CSV row.

    ``id``, ``status`` and ``created_at`` are required; optional contact
    fields are simply left empty when absent.
    """

    permit_id = _optional_text(record.get("id") or record.get("permit_id"))
    if not permit_id:
        raise ValidationError("Permit record is missing an id.")

    status = (_optional_text(record.get("status")) or "").lower()
    if status not in PERMIT_STATUSES:
        raise ValidationError(f"Permit '{permit_id}' has unknown status '{record.get('status')}'.")
    permit_type = (_optional_text(record.get("permit_type")) or "residential").lower()
    if permit_type not in PERMIT_TYPES:
        raise ValidationError(f"Permit '{permit_id}' has unknown permit type '{record.get('permit_type')}'.")

    return Permit(
        permit_id=permit_id,
        latitude=_coerce_coordinate(record.get("latitude"), "latitude", permit_id),
        longitude=_coerce_coordinate(record.get("longitude"), "longitude", permit_id),
        status=status,
        permit_type=permit_type,
        created_at=_coerce_datetime(record.get("created_at"), permit_id),
        address=_optional_text(record.get("address")) or "",
        city=_optional_text(record.get("city")),
        state=_optional_text(record.get("state")),
        zip_code=_optional_text(record.get("zip_code")),
        builder_name=_optional_text(record.get("builder_name")),
        builder_phone=_optional_text(record.get("builder_phone")),
        notes=_optional_text(record.get("notes")),
    )


def _load_permits_from_database(cities: Iterable[str] | None = None) -> tuple[Permit, ...] | None:
    """Load permits from Supabase. Returns None if the database is not configured."""
    table = get_permits_table()
    if table is None:
        return None

    query = table.select(PERMIT_COLUMNS).neq("status", "rejected")
    city_list = [city for city in (cities or ()) if city]
    if city_list:
        query = query.in_("city", city_list)
    try:
        response = query.order("created_at", desc=True).execute()
    except Exception as e:
        logger.warning(f"Permit query failed, falling back to file: {e}")
        return None

    permits: list[Permit] = []
    for row in response.data or []:
        try:
            permits.append(permit_from_record(row))
        except ValidationError as e:
            logger.warning(f"Skipping invalid permit row: {e}")
    return tuple(permits)


@functools.lru_cache(maxsize=1)
def load_permits_from_file(source: Optional[Path] = None) -> tuple[Permit, ...]:
    """Load permits from the configured CSV export."""

    csv_path = source or settings.permits_file
    if not csv_path.exists():
        raise FileNotFoundError(f"Permit file not found: {csv_path}")

    permits: list[Permit] = []
    with csv_path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise ValueError(f"Permit file '{csv_path}' is missing a header row.")
        for row in reader:
            normalized = {(key or "").strip().lower(): value for key, value in row.items()}
            permits.append(permit_from_record(normalized))
    return tuple(permits)


def get_permits(cities: Iterable[str] | None = None, source: Optional[Path] = None) -> tuple[Permit, ...]:
    """Get permits from the database first, falling back to the CSV export.

    ``cities`` narrows either source; file rows are matched case-insensitively.
    """

    cities = [city for city in (cities or ()) if city and city.strip()]
    db_permits = _load_permits_from_database(cities)
    if db_permits is not None:
        logger.info(f"Loaded {len(db_permits)} permits from Supabase")
        return db_permits

    file_permits = load_permits_from_file(source)
    wanted = {city.strip().lower() for city in cities}
    if wanted:
        file_permits = tuple(permit for permit in file_permits if (permit.city or "").strip().lower() in wanted)
    logger.info(f"Loaded {len(file_permits)} permits from {source or settings.permits_file}")
    return file_permits
