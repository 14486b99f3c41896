from datetime import date, datetime, timedelta, timezone

import pytest

from campus_portal.services.date_windows import as_utc_naive, day_bounds, month_bounds, parse_calendar_date


def test_month_bounds_cover_whole_last_day():
    start, end = month_bounds(2031, 1)
    assert start == datetime(2031, 1, 1, 0, 0, 0)
    assert end == datetime(2031, 1, 31, 23, 59, 59, 999999)


def test_month_bounds_leap_february():
    _, end = month_bounds(2028, 2)
    assert end.date() == date(2028, 2, 29)


@pytest.mark.parametrize("month", [0, 13])
def test_month_bounds_rejects_invalid_month(month):
    with pytest.raises(ValueError):
        month_bounds(2031, month)


def test_day_bounds():
    start, end = day_bounds(date(2031, 5, 4))
    assert start == datetime(2031, 5, 4)
    assert end == datetime(2031, 5, 4, 23, 59, 59, 999999)


def test_as_utc_naive_converts_aware_values():
    aware = datetime(2031, 5, 4, 10, 0, tzinfo=timezone(timedelta(hours=-3)))
    assert as_utc_naive(aware) == datetime(2031, 5, 4, 13, 0)
    naive = datetime(2031, 5, 4, 10, 0)
    assert as_utc_naive(naive) is naive


def test_parse_calendar_date_accepts_dates_and_timestamps():
    assert parse_calendar_date("2031-05-04") == date(2031, 5, 4)
    assert parse_calendar_date("2031-05-04T22:10:00Z") == date(2031, 5, 4)


def test_parse_calendar_date_uses_the_utc_day_for_offsets():
    assert parse_calendar_date("2031-05-04T23:00:00-05:00") == date(2031, 5, 5)
    assert parse_calendar_date("2031-05-05T01:00:00+03:00") == date(2031, 5, 4)
    assert parse_calendar_date("2031-05-04T12:00:00") == date(2031, 5, 4)


@pytest.mark.parametrize("value", ["", "not-a-date", "2031-13-01", "04/05/2031"])
def test_parse_calendar_date_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_calendar_date(value)
