import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from campus_portal.core.auth import require_permission
from campus_portal.database.deps import get_db
from campus_portal.models.assignment import Assignment
from campus_portal.models.submission import Submission
from campus_portal.models.user import User
from campus_portal.schemas.submission import SubmissionCreate, SubmissionGrade, SubmissionOut
from campus_portal.services.date_windows import utc_now
from campus_portal.services.notifications import notify

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/submissions", tags=["Submissions"])
get_submitter = require_permission("assignments.submit")
get_submissions_reviewer = require_permission("submissions.review")


@router.post("/", response_model=SubmissionOut, status_code=status.HTTP_201_CREATED)
def create_submission(
    payload: SubmissionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_submitter)
):
    assignment = (
        db.query(Assignment)
        .filter(Assignment.id == payload.assignment_id, Assignment.is_published.is_(True))
        .first()
    )
    if not assignment:
        raise HTTPException(status_code=404, detail="Assignment not found")

    # Resubmitting adds another row; the latest one is what reviewers see first.
    submission = Submission(
        assignment_id=assignment.id,
        student_id=current_user.id,
        file_url=payload.file_url.strip(),
        submitted_at=utc_now(),
    )
    db.add(submission)
    db.commit()
    db.refresh(submission)
    logger.info("Submission %s for assignment %s by user %s", submission.id, assignment.id, current_user.id)
    return submission


@router.patch("/{submission_id}/grade", response_model=SubmissionOut)
def grade_submission(
    submission_id: int,
    payload: SubmissionGrade,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_submissions_reviewer)
):
    submission = db.query(Submission).filter(Submission.id == submission_id).first()
    if not submission:
        raise HTTPException(status_code=404, detail="Submission not found")
    submission.grade = payload.grade
    submission.feedback = payload.feedback
    notify(
        db,
        type="assignment",
        title="Submission graded",
        message=f"Your submission received {payload.grade}/100",
        user_id=submission.student_id,
        link="/student/assignments",
        item_id=submission.assignment_id,
    )
    db.commit()
    db.refresh(submission)
    return submission
