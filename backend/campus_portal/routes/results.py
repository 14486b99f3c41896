import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from campus_portal.core.auth import get_current_user, require_permission
from campus_portal.core.permissions import is_admin
from campus_portal.database.deps import get_db
from campus_portal.models.result import Result
from campus_portal.models.user import User
from campus_portal.schemas.result import NewResultsCountOut, ResultCreate, ResultOut
from campus_portal.services.date_windows import utc_now
from campus_portal.services.notifications import notify

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/results", tags=["Results"])
get_results_manager = require_permission("results.manage")


def results_visible_to(db: Session, current_user: User):
    query = db.query(Result)
    if not is_admin(current_user):
        query = query.filter(Result.student_id == current_user.id)
    return query


@router.get("/", response_model=list[ResultOut])
def list_results(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return (
        results_visible_to(db, current_user)
        .order_by(Result.created_at.desc(), Result.id.desc())
        .all()
    )


@router.get("/new/count", response_model=NewResultsCountOut)
def count_new_results(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return NewResultsCountOut(new_count=results_visible_to(db, current_user).count())


@router.post("/", response_model=ResultOut, status_code=status.HTTP_201_CREATED)
def create_result(
    payload: ResultCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_results_manager)
):
    student = db.query(User).filter(User.id == payload.student_id, User.role == "student").first()
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")

    result = Result(
        student_id=student.id,
        title=payload.title.strip(),
        description=payload.description,
        score=payload.score,
        max_score=payload.max_score,
        author_id=current_user.id,
        created_at=utc_now(),
    )
    db.add(result)
    db.flush()
    notify(
        db,
        type="result",
        title="New result published",
        message=f"{result.title}: {result.score}/{result.max_score}",
        user_id=student.id,
        link="/student/results",
        item_id=result.id,
    )
    db.commit()
    db.refresh(result)
    logger.info("Result %s published for student %s", result.id, student.id)
    return result


@router.delete("/{result_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_result(
    result_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_results_manager)
):
    result = db.query(Result).filter(Result.id == result_id).first()
    if not result:
        raise HTTPException(status_code=404, detail="Result not found")
    db.delete(result)
    db.commit()
    return None
