from __future__ import annotations

import datetime as dt

import pytest

from git_wrapped.analysis_periods import default_period, iso_week_key, parse_period, period_from_dates, quarter_key


def test_parse_period_year() -> None:
    p = parse_period("2025")
    assert p.label == "2025"
    assert p.start == dt.date(2025, 1, 1)
    assert p.end == dt.date(2026, 1, 1)
    assert p.until_iso == "2025-12-31"


def test_parse_period_halves() -> None:
    p1 = parse_period("2025H1")
    p2 = parse_period("2025h2")
    assert p1.end == dt.date(2025, 7, 1)
    assert p2.start == dt.date(2025, 7, 1)
    assert p2.end == dt.date(2026, 1, 1)


def test_parse_period_invalid() -> None:
    with pytest.raises(ValueError):
        parse_period("H12025")


def test_period_from_dates_is_inclusive() -> None:
    p = period_from_dates("2024-03-01", "2024-03-31")
    assert p.start_iso == "2024-03-01"
    assert p.end_iso == "2024-04-01"
    assert p.until_iso == "2024-03-31"

    with pytest.raises(ValueError):
        period_from_dates("2024-03-31", "2024-03-01")
    with pytest.raises(ValueError):
        period_from_dates("2024/03/01", "2024-03-31")


def test_default_period_is_current_year() -> None:
    assert default_period(dt.date(2023, 6, 15)).label == "2023"


def test_bucket_keys() -> None:
    assert iso_week_key(dt.date(2021, 1, 3)) == "2020-W53"
    assert iso_week_key(dt.date(2024, 1, 1)) == "2024-W01"
    assert quarter_key(dt.date(2024, 3, 31)) == "Q1"
    assert quarter_key(dt.date(2024, 10, 1)) == "Q4"
