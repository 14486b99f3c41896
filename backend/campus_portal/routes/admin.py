from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from campus_portal.core.auth import get_current_admin
from campus_portal.database.deps import get_db
from campus_portal.models.announcement import Announcement
from campus_portal.models.assignment import Assignment
from campus_portal.models.feedback import Feedback
from campus_portal.models.material import Material
from campus_portal.models.result import Result
from campus_portal.models.user import User
from campus_portal.routes.announcements import list_all_announcements
from campus_portal.routes.assignments import build_assignment_status_out, enrich_for_user
from campus_portal.routes.auth import build_user_out
from campus_portal.routes.materials import materials_newest_first
from campus_portal.schemas.admin import ActivityOut, AdminStatsOut
from campus_portal.schemas.announcement import AnnouncementOut
from campus_portal.schemas.assignment import AssignmentStatusOut
from campus_portal.schemas.feedback import FeedbackOut, FeedbackStatusUpdate
from campus_portal.schemas.material import MaterialOut
from campus_portal.schemas.result import ResultOut
from campus_portal.schemas.user import UserOut
from campus_portal.services.activity_feed import (
    PER_SOURCE_LIMIT,
    activities_from_rows,
    merge_recent_activities,
)
from campus_portal.services.date_windows import utc_now

router = APIRouter(prefix="/api/admin", tags=["Admin"])
FEEDBACK_STATUSES = {"pending", "in-progress", "resolved", "rejected"}


@router.get("/announcements", response_model=list[AnnouncementOut])
def admin_list_announcements(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    return list_all_announcements(db)


@router.get("/assignments", response_model=list[AssignmentStatusOut])
def admin_list_assignments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    now = utc_now()
    # Drafts are included here; student listings only show published rows.
    rows = db.query(Assignment).order_by(Assignment.due_date.desc(), Assignment.id.desc()).all()
    return [build_assignment_status_out(item, now) for item in enrich_for_user(db, rows, current_user)]


@router.get("/materials", response_model=list[MaterialOut])
def admin_list_materials(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    return materials_newest_first(db).all()


@router.get("/results", response_model=list[ResultOut])
def admin_list_results(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    return db.query(Result).order_by(Result.created_at.desc(), Result.id.desc()).all()


@router.get("/stats", response_model=AdminStatsOut)
def admin_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    return AdminStatsOut(
        active_students=db.query(User).filter(User.role == "student").count(),
        pending_assignments=db.query(Assignment).filter(Assignment.due_date > utc_now()).count(),
        study_materials=db.query(Material).count(),
    )


@router.get("/activities", response_model=list[ActivityOut])
def admin_activities(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    def latest(model):
        return (
            db.query(model)
            .order_by(model.created_at.desc(), model.id.desc())
            .limit(PER_SOURCE_LIMIT)
            .all()
        )

    return merge_recent_activities(
        activities_from_rows(latest(Announcement), "announcement"),
        activities_from_rows(latest(Assignment), "assignment"),
        activities_from_rows(latest(Result), "result"),
    )


@router.get("/students", response_model=list[UserOut])
def admin_list_students(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    rows = db.query(User).filter(User.role == "student").order_by(User.full_name.asc()).all()
    return [build_user_out(row) for row in rows]


@router.get("/feedback", response_model=list[FeedbackOut])
def admin_list_feedback(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    return db.query(Feedback).order_by(Feedback.timestamp.desc(), Feedback.id.desc()).all()


@router.patch("/feedback/{feedback_id}", response_model=FeedbackOut)
def admin_update_feedback_status(
    feedback_id: int,
    payload: FeedbackStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    new_status = payload.status.strip().lower()
    if new_status not in FEEDBACK_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid feedback status")
    feedback = db.query(Feedback).filter(Feedback.id == feedback_id).first()
    if not feedback:
        raise HTTPException(status_code=404, detail="Feedback not found")
    feedback.status = new_status
    db.commit()
    db.refresh(feedback)
    return feedback
