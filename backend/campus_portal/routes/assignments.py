import logging
from datetime import datetime
from typing import Iterable

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from campus_portal.core.auth import get_current_user, require_permission
from campus_portal.core.permissions import is_admin
from campus_portal.database.deps import get_db
from campus_portal.models.assignment import Assignment
from campus_portal.models.submission import Submission
from campus_portal.models.user import User
from campus_portal.schemas.assignment import (
    AssignmentCreate,
    AssignmentOut,
    AssignmentStatusOut,
    CompletedAssignmentOut,
    PendingCountOut,
)
from campus_portal.schemas.submission import SubmissionOut
from campus_portal.services.assignment_status import (
    EnrichedAssignment,
    classify_urgency,
    days_until_due,
    enrich_with_submission_status,
    latest_submission_by_assignment,
    status_label,
)
from campus_portal.services.date_windows import as_utc_naive, utc_now
from campus_portal.services.notifications import notify

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/assignments", tags=["Assignments"])
get_assignments_manager = require_permission("assignments.manage")
get_submissions_reviewer = require_permission("submissions.review")


def load_submissions_for(db: Session, assignments: Iterable[Assignment], current_user: User) -> list[Submission]:
    """Submissions referencing ``assignments``; students only see their own."""
    assignment_ids = [assignment.id for assignment in assignments]
    if not assignment_ids:
        return []
    query = db.query(Submission).filter(Submission.assignment_id.in_(assignment_ids))
    if not is_admin(current_user):
        query = query.filter(Submission.student_id == current_user.id)
    return query.all()


def enrich_for_user(db: Session, assignments: list[Assignment], current_user: User) -> list[EnrichedAssignment]:
    submissions = load_submissions_for(db, assignments, current_user)
    return enrich_with_submission_status(assignments, submissions)


def build_assignment_out(assignment: Assignment) -> AssignmentOut:
    return AssignmentOut(
        id=assignment.id,
        title=assignment.title,
        description=assignment.description,
        file_url=assignment.file_url,
        due_date=assignment.due_date,
        target_group=assignment.target_group,
        is_published=bool(assignment.is_published),
        author_id=assignment.author_id,
        created_at=assignment.created_at,
    )


def build_assignment_status_out(enriched: EnrichedAssignment, now: datetime) -> AssignmentStatusOut:
    assignment = enriched.assignment
    return AssignmentStatusOut(
        **build_assignment_out(assignment).model_dump(),
        has_submitted=enriched.has_submitted,
        days_remaining=days_until_due(assignment.due_date, now),
        urgency=classify_urgency(assignment.due_date, now).value,
        status=status_label(assignment.due_date, enriched.has_submitted, now),
    )


@router.get("/active", response_model=list[AssignmentStatusOut])
def list_active_assignments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    now = utc_now()
    rows = (
        db.query(Assignment)
        .filter(Assignment.is_published.is_(True), Assignment.due_date > now)
        .order_by(Assignment.due_date.asc(), Assignment.id.asc())
        .all()
    )
    return [build_assignment_status_out(item, now) for item in enrich_for_user(db, rows, current_user)]


@router.get("/completed", response_model=list[CompletedAssignmentOut])
def list_completed_assignments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    now = utc_now()
    rows = (
        db.query(Assignment)
        .filter(Assignment.is_published.is_(True), Assignment.due_date <= now)
        .order_by(Assignment.due_date.desc(), Assignment.id.desc())
        .all()
    )
    latest = latest_submission_by_assignment(load_submissions_for(db, rows, current_user))
    result = []
    for assignment in rows:
        submission = latest.get(assignment.id)
        result.append(
            CompletedAssignmentOut(
                **build_assignment_out(assignment).model_dump(),
                submission=SubmissionOut.model_validate(submission) if submission else None,
            )
        )
    return result


@router.get("/pending/count", response_model=PendingCountOut)
def count_pending_assignments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    total = (
        db.query(Assignment)
        .filter(Assignment.is_published.is_(True), Assignment.due_date > utc_now())
        .count()
    )
    return PendingCountOut(pending_count=total)


@router.get("/{assignment_id}/submissions", response_model=list[SubmissionOut])
def list_assignment_submissions(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_submissions_reviewer)
):
    return (
        db.query(Submission)
        .filter(Submission.assignment_id == assignment_id)
        .order_by(Submission.submitted_at.desc(), Submission.id.desc())
        .all()
    )


@router.post("/", response_model=AssignmentOut, status_code=status.HTTP_201_CREATED)
def create_assignment(
    payload: AssignmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_assignments_manager)
):
    assignment = Assignment(
        title=payload.title.strip(),
        description=payload.description,
        file_url=payload.file_url,
        due_date=as_utc_naive(payload.due_date),
        target_group=payload.target_group,
        is_published=payload.is_published,
        author_id=current_user.id,
        created_at=utc_now(),
    )
    db.add(assignment)
    db.flush()
    if assignment.is_published:
        notify(
            db,
            type="assignment",
            title="New assignment",
            message=f"{assignment.title} is due {assignment.due_date:%Y-%m-%d}",
            link="/student/assignments",
            item_id=assignment.id,
        )
    db.commit()
    db.refresh(assignment)
    logger.info("Assignment %s created by user %s", assignment.id, current_user.id)
    return build_assignment_out(assignment)


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_assignments_manager)
):
    assignment = db.query(Assignment).filter(Assignment.id == assignment_id).first()
    if not assignment:
        raise HTTPException(status_code=404, detail="Assignment not found")
    # Submissions go with the assignment (delete-orphan cascade).
    db.delete(assignment)
    db.commit()
    return None
