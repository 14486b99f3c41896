from datetime import timedelta

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_portal.core.auth import get_current_user
from campus_portal.database.deps import get_db
from campus_portal.models.assignment import Assignment
from campus_portal.models.user import User
from campus_portal.routes.assignments import enrich_for_user
from campus_portal.routes.results import results_visible_to
from campus_portal.schemas.progress import AssignmentProgressOut, ResultProgressOut
from campus_portal.services.assignment_status import (
    Urgency,
    classify_urgency,
    filter_by_date_range,
    partition_active_vs_past,
)
from campus_portal.services.date_windows import utc_now

router = APIRouter(prefix="/api/student/progress", tags=["Progress"])
UPCOMING_WINDOW = timedelta(days=7)


@router.get("/assignments", response_model=AssignmentProgressOut)
def assignment_progress(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    now = utc_now()
    published = (
        db.query(Assignment)
        .filter(Assignment.is_published.is_(True))
        .order_by(Assignment.due_date.asc(), Assignment.id.asc())
        .all()
    )
    enriched = enrich_for_user(db, published, current_user)
    submitted_ids = {item.id for item in enriched if item.has_submitted}

    active, past = partition_active_vs_past(published, now)
    pending = [assignment for assignment in active if assignment.id not in submitted_ids]
    overdue = [
        assignment for assignment in past
        if assignment.id not in submitted_ids
        and classify_urgency(assignment.due_date, now) is Urgency.OVERDUE
    ]
    due_this_week = filter_by_date_range(pending, now, now + UPCOMING_WINDOW)

    total = len(published)
    return AssignmentProgressOut(
        total=total,
        submitted=len(submitted_ids),
        pending=len(pending),
        overdue=len(overdue),
        due_this_week=len(due_this_week),
        completion_rate=round(len(submitted_ids) / total * 100, 1) if total else 0.0,
    )


@router.get("/results", response_model=ResultProgressOut)
def result_progress(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    rows = results_visible_to(db, current_user).all()
    percentages = [row.score / row.max_score * 100 for row in rows if row.max_score]
    if not percentages:
        return ResultProgressOut(count=len(rows))
    return ResultProgressOut(
        count=len(rows),
        average_percentage=round(sum(percentages) / len(percentages), 1),
        best_percentage=round(max(percentages), 1),
    )
