from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from campus_portal.core.auth import get_current_user
from campus_portal.database.deps import get_db
from campus_portal.models.assignment import Assignment
from campus_portal.models.user import User
from campus_portal.routes.assignments import enrich_for_user
from campus_portal.schemas.calendar import CalendarEventDetailOut, CalendarEventOut
from campus_portal.services.date_windows import day_bounds, month_bounds, parse_calendar_date, utc_now

router = APIRouter(prefix="/api/calendar", tags=["Calendar"])

NO_DESCRIPTION = "No description available"


def published_assignments_between(db: Session, start: datetime, end: datetime) -> list[Assignment]:
    return (
        db.query(Assignment)
        .filter(
            Assignment.is_published.is_(True),
            Assignment.due_date >= start,
            Assignment.due_date <= end,
        )
        .order_by(Assignment.due_date.asc(), Assignment.id.asc())
        .all()
    )


@router.get("/events", response_model=list[CalendarEventOut])
def list_month_events(
    year: Optional[int] = Query(default=None, ge=1, le=9999),
    month: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    today = utc_now()
    resolved_year = year if year is not None else today.year
    resolved_month = month if month is not None else today.month
    try:
        start, end = month_bounds(resolved_year, resolved_month)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid year or month") from exc

    rows = published_assignments_between(db, start, end)
    return [
        CalendarEventOut(
            id=item.assignment.id,
            title=item.assignment.title,
            date=item.assignment.due_date,
            type="assignment",
            has_submitted=item.has_submitted,
        )
        for item in enrich_for_user(db, rows, current_user)
    ]


@router.get("/events/{date_value}", response_model=list[CalendarEventDetailOut])
def list_day_events(
    date_value: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        day = parse_calendar_date(date_value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid date format") from exc

    start, end = day_bounds(day)
    rows = published_assignments_between(db, start, end)
    return [
        CalendarEventDetailOut(
            id=item.assignment.id,
            title=item.assignment.title,
            description=item.assignment.description or NO_DESCRIPTION,
            date=item.assignment.due_date,
            type="assignment",
            has_submitted=item.has_submitted,
        )
        for item in enrich_for_user(db, rows, current_user)
    ]
