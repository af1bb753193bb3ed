from __future__ import annotations

from datetime import date

from teenjobs.core.parsing.dates import (
    DateInterval,
    format_available_dates,
    parse_available_dates,
    parse_date,
)


def test_parse_available_dates_handles_ranges_and_single_days() -> None:
    assert parse_available_dates("Jan 15, 2024 to Jan 20, 2024") == DateInterval(
        date(2024, 1, 15), date(2024, 1, 20)
    )
    single = parse_available_dates("Mar 03, 2024")
    assert single == DateInterval(date(2024, 3, 3), date(2024, 3, 3))
    assert single.is_single_day


def test_parse_available_dates_swaps_reversed_range() -> None:
    interval = parse_available_dates("Feb 10, 2024 - Feb 01, 2024")
    assert interval == DateInterval(date(2024, 2, 1), date(2024, 2, 10))


def test_parse_available_dates_unparseable_returns_none() -> None:
    assert parse_available_dates("whenever works") is None
    assert parse_available_dates("   ") is None
    assert parse_available_dates(None) is None


def test_parse_available_dates_overflowing_numbers_return_none() -> None:
    assert parse_available_dates("99999999999999999999") is None
    assert parse_available_dates("Jan 15, 2024 to 99999999999999999999999") is None


def test_half_parseable_range_is_not_read_as_single_date() -> None:
    assert parse_available_dates("Jan 15, 2024 to whenever") is None
    assert parse_available_dates("soon - Jan 20, 2024") is None


def test_parse_date_accepts_iso_strings() -> None:
    assert parse_date("2024-06-01") == date(2024, 6, 1)
    assert parse_date("June 1, 2024") == date(2024, 6, 1)


def test_interval_overlap_is_inclusive_at_boundaries() -> None:
    job = DateInterval(date(2024, 1, 10), date(2024, 1, 20))
    assert job.overlaps(DateInterval(date(2024, 1, 20), date(2024, 1, 25)))
    assert job.overlaps(DateInterval(date(2024, 1, 1), date(2024, 1, 10)))
    assert not job.overlaps(DateInterval(date(2024, 1, 21), date(2024, 1, 22)))


def test_format_available_dates_matches_storage_form() -> None:
    assert format_available_dates(date(2024, 1, 5)) == "Jan 05, 2024"
    assert format_available_dates(date(2024, 1, 5), date(2024, 1, 9)) == "Jan 05, 2024 to Jan 09, 2024"
