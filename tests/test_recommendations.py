from datetime import datetime, timedelta, timezone

import pytest

from lead_hunter.errors import ValidationError
from lead_hunter.models.domain import Permit
from lead_hunter.services.recommendations.filters import LocationFilter
from lead_hunter.services.recommendations.ranker import EMPTY_DAILY_GOAL, generate_recommendations
from lead_hunter.services.recommendations.scoring import ScoringWeights

NOW = datetime(2025, 10, 1, 12, 0, tzinfo=timezone.utc)


def _permit(
    pid: str,
    status: str,
    lat: float = 42.36,
    lon: float = -71.06,
    *,
    days_old: float = 5,
    city: str = "Boston",
    state: str | None = "MA",
    builder: str | None = None,
) -> Permit:
    return Permit(
        permit_id=pid,
        latitude=lat,
        longitude=lon,
        status=status,
        permit_type="residential",
        created_at=NOW - timedelta(days=days_old),
        address=f"{pid} Elm St",
        city=city,
        state=state,
        builder_name=builder,
    )


def _sample_permits() -> list[Permit]:
    return [
        _permit("H1", "hot", 42.36, -71.06, days_old=3),
        _permit("H2", "hot", 42.361, -71.061, days_old=4),
        _permit("H3", "hot", 42.362, -71.062, days_old=1),
        _permit("H4", "hot", 42.60, -71.30, days_old=2, city="Lowell"),
        _permit("N1", "new", 42.40, -71.10, days_old=1, city="Cambridge"),
        _permit("C1", "contacted", 42.41, -71.11, days_old=20, city="Cambridge"),
        _permit("K1", "cold", 42.42, -71.12, days_old=40, city="Cambridge"),
        _permit("V1", "visited", 42.43, -71.13, days_old=10, city="Newton"),
        _permit("R1", "rejected", 42.44, -71.14, days_old=1),
        _permit("L1", "converted_to_lead", 42.45, -71.15, days_old=1),
        _permit("U1", "hot", 0.0, 0.0, days_old=1),
    ]


def test_empty_permit_list_returns_empty_result():
    result = generate_recommendations([], now=NOW)

    assert result.recommendations == []
    assert result.summary.total_analyzed == 0
    assert result.summary.high_priority == 0
    assert result.summary.medium_priority == 0
    assert result.summary.low_priority == 0
    assert result.summary.daily_goal == EMPTY_DAILY_GOAL
    assert result.generated_at == NOW


def test_excluded_and_unplaced_permits_never_recommended():
    result = generate_recommendations(_sample_permits(), now=NOW)

    ids = {rec.permit_id for rec in result.recommendations}
    assert "R1" not in ids
    assert "L1" not in ids
    assert "U1" not in ids
    assert result.summary.total_analyzed == 8


def test_sorted_by_score_then_oldest_first():
    permits = _sample_permits() + [
        _permit("T1", "new", 42.50, -71.00, days_old=7),
        _permit("T2", "new", 42.51, -71.01, days_old=7),
    ]
    result = generate_recommendations(permits, now=NOW)
    recs = result.recommendations

    for current, following in zip(recs, recs[1:]):
        assert current.score >= following.score
        if current.score == following.score:
            assert current.permit.created_at <= following.permit.created_at


def test_equal_scores_rank_older_permit_first():
    weights = ScoringWeights(recency_weight=0.0)
    permits = [
        _permit("YOUNG", "new", 42.50, -71.00, days_old=1),
        _permit("OLD", "new", 42.51, -71.01, days_old=9),
    ]

    result = generate_recommendations(permits, now=NOW, weights=weights)

    assert [rec.permit_id for rec in result.recommendations] == ["OLD", "YOUNG"]


def test_generation_is_idempotent_with_frozen_clock():
    permits = _sample_permits()

    first = generate_recommendations(permits, now=NOW)
    second = generate_recommendations(list(permits), now=NOW)

    assert [(r.permit_id, r.score, r.reasons) for r in first.recommendations] == [
        (r.permit_id, r.score, r.reasons) for r in second.recommendations
    ]
    assert first.summary == second.summary


def test_hot_zone_members_rank_above_isolated_hot_permit():
    result = generate_recommendations(_sample_permits(), now=NOW)
    by_id = {rec.permit_id: rec for rec in result.recommendations}

    assert len(result.clusters) == 1
    assert result.clusters[0].count == 3
    assert by_id["H1"].cluster_id == "HZ01"
    assert by_id["H4"].cluster_id is None
    assert by_id["H1"].score > by_id["H4"].score
    assert "hot-zone" in result.summary.daily_goal
    assert "Boston" in result.summary.daily_goal


def test_summary_counts_match_priorities():
    result = generate_recommendations(_sample_permits(), now=NOW)
    summary = result.summary
    priorities = [rec.priority for rec in result.recommendations]

    assert summary.high_priority == priorities.count("high")
    assert summary.medium_priority == priorities.count("medium")
    assert summary.low_priority == priorities.count("low")
    assert summary.high_priority + summary.medium_priority + summary.low_priority == summary.total_analyzed


def test_limit_truncates_list_but_not_summary():
    result = generate_recommendations(_sample_permits(), now=NOW, limit=3)

    assert len(result.recommendations) == 3
    assert result.summary.total_analyzed == 8


def test_city_filter_applied_before_scoring():
    location_filter = LocationFilter.build(cities=["cambridge"])

    result = generate_recommendations(_sample_permits(), location_filter, now=NOW)

    assert {rec.permit_id for rec in result.recommendations} == {"N1", "C1", "K1"}
    assert result.clusters == []


def test_county_filter_expands_to_towns():
    location_filter = LocationFilter.build(county="Middlesex")

    result = generate_recommendations(_sample_permits(), location_filter, now=NOW)

    assert {rec.permit.city for rec in result.recommendations} == {"Cambridge", "Lowell", "Newton"}


def test_unknown_county_is_rejected():
    with pytest.raises(ValidationError):
        generate_recommendations(_sample_permits(), LocationFilter.build(county="Atlantis"), now=NOW)


def test_non_numeric_coordinates_raise_validation_error():
    bad = _permit("X1", "new")
    bad.longitude = None

    with pytest.raises(ValidationError):
        generate_recommendations([bad], now=NOW)
