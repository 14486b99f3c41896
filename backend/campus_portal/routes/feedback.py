from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from campus_portal.core.auth import require_permission
from campus_portal.database.deps import get_db
from campus_portal.models.feedback import Feedback
from campus_portal.models.user import User
from campus_portal.schemas.feedback import FeedbackCreate, FeedbackOut
from campus_portal.services.date_windows import utc_now

router = APIRouter(prefix="/api/feedback", tags=["Feedback"])
get_feedback_sender = require_permission("feedback.send")


@router.post("/", response_model=FeedbackOut, status_code=status.HTTP_201_CREATED)
def create_feedback(
    payload: FeedbackCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_feedback_sender)
):
    feedback = Feedback(
        user_id=current_user.id,
        type=payload.type,
        title=payload.title.strip(),
        description=payload.description,
        timestamp=utc_now(),
        status="pending",
    )
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    return feedback
