from datetime import datetime, timezone

import pytest

from lead_hunter.data import permits_repository
from lead_hunter.data.permits_repository import get_permits, load_permits_from_file, permit_from_record
from lead_hunter.errors import ValidationError

CSV_TEXT = """id,address,city,state,zip_code,builder_name,builder_phone,permit_type,status,notes,latitude,longitude,created_at
P-1,12 Oak St,Boston,MA,02108,Acme Homes,555-0100,residential,hot,,42.36,-71.06,2025-09-20T10:00:00Z
P-2,9 Pine Rd,Lowell,MA,,,,commercial,new,Gut renovation of storefront,42.64,-71.31,2025-09-22T08:30:00+00:00
P-3,4 Birch Ln,Salem,MA,,,,residential,not_visited,,,,2025-09-25T12:00:00
"""


@pytest.fixture(autouse=True)
def _clear_file_cache():
    load_permits_from_file.cache_clear()
    yield
    load_permits_from_file.cache_clear()


def _write_csv(tmp_path):
    path = tmp_path / "permits.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")
    return path


def test_permit_from_record_parses_database_row():
    permit = permit_from_record(
        {
            "id": 17,
            "address": "12 Oak St",
            "city": "Boston",
            "status": "HOT",
            "permit_type": "Residential",
            "latitude": 42.36,
            "longitude": "-71.06",
            "created_at": "2025-09-20T10:00:00Z",
            "builder_phone": "  ",
        }
    )

    assert permit.permit_id == "17"
    assert permit.status == "hot"
    assert permit.permit_type == "residential"
    assert permit.longitude == -71.06
    assert permit.created_at == datetime(2025, 9, 20, 10, 0, tzinfo=timezone.utc)
    assert permit.builder_phone is None
    assert permit.is_placed


def test_missing_coordinates_mean_unplaced():
    permit = permit_from_record({"id": "P", "status": "new", "created_at": "2025-09-20"})

    assert permit.latitude == 0.0
    assert permit.longitude == 0.0
    assert not permit.is_placed


@pytest.mark.parametrize(
    "record",
    [
        {"id": "P", "status": "new", "created_at": "2025-09-20", "latitude": "north"},
        {"id": "P", "status": "maybe", "created_at": "2025-09-20"},
        {"id": "P", "status": "new", "permit_type": "industrial", "created_at": "2025-09-20"},
        {"id": "P", "status": "new"},
        {"status": "new", "created_at": "2025-09-20"},
    ],
)
def test_invalid_records_are_rejected(record):
    with pytest.raises(ValidationError):
        permit_from_record(record)


def test_load_permits_from_file(tmp_path):
    permits = load_permits_from_file(_write_csv(tmp_path))

    assert [permit.permit_id for permit in permits] == ["P-1", "P-2", "P-3"]
    assert permits[1].permit_type == "commercial"
    assert permits[1].zip_code is None
    assert not permits[2].is_placed


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_permits_from_file(tmp_path / "missing.csv")


def test_get_permits_falls_back_to_file(tmp_path, monkeypatch):
    monkeypatch.setattr(permits_repository, "_load_permits_from_database", lambda cities=None: None)

    permits = get_permits(source=_write_csv(tmp_path))

    assert len(permits) == 3


def test_get_permits_prefers_database(tmp_path, monkeypatch):
    from_db = (permit_from_record({"id": "DB-1", "status": "new", "created_at": "2025-09-20"}),)
    monkeypatch.setattr(permits_repository, "_load_permits_from_database", lambda cities=None: from_db)

    assert get_permits(source=_write_csv(tmp_path)) == from_db


def test_database_rows_filtered_by_city(monkeypatch):
    calls = {}

    class _Query:
        def select(self, columns):
            return self

        def neq(self, column, value):
            calls["neq"] = (column, value)
            return self

        def in_(self, column, values):
            calls["in"] = (column, values)
            return self

        def order(self, column, desc=False):
            return self

        def execute(self):
            return type("Response", (), {"data": [
                {"id": "A", "status": "hot", "created_at": "2025-09-20", "latitude": 42.3, "longitude": -71.0},
                {"id": "B", "status": "bogus", "created_at": "2025-09-20"},
            ]})()

    monkeypatch.setattr(permits_repository, "get_permits_table", lambda: _Query())

    permits = permits_repository._load_permits_from_database(["Boston", ""])

    assert [permit.permit_id for permit in permits] == ["A"]
    assert calls["neq"] == ("status", "rejected")
    assert calls["in"] == ("city", ["Boston"])


def test_get_permits_filters_file_rows_by_city(tmp_path, monkeypatch):
    monkeypatch.setattr(permits_repository, "_load_permits_from_database", lambda cities=None: None)

    permits = get_permits(cities=[" lowell ", "SALEM"], source=_write_csv(tmp_path))

    assert [permit.permit_id for permit in permits] == ["P-2", "P-3"]
