from __future__ import annotations

import calendar
from datetime import date, datetime, time, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_utc_naive(value: datetime) -> datetime:
    """Timestamps are stored without tzinfo, always in UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    if month < 1 or month > 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    start, _ = day_bounds(date(year, month, 1))
    _, end = day_bounds(date(year, month, last_day))
    return start, end


def parse_calendar_date(value: str) -> date:
    raw = str(value or "").strip()
    if not raw:
        raise ValueError("empty date")
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    # Full ISO-8601 timestamps are accepted too; the UTC calendar day is used.
    return as_utc_naive(datetime.fromisoformat(raw.replace("Z", "+00:00"))).date()
