import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from campus_portal.core.auth import get_current_user, require_permission
from campus_portal.database.deps import get_db
from campus_portal.models.announcement import Announcement
from campus_portal.models.user import User
from campus_portal.schemas.announcement import AnnouncementCreate, AnnouncementOut
from campus_portal.services.date_windows import utc_now
from campus_portal.services.notifications import notify

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/announcements", tags=["Announcements"])
get_announcements_manager = require_permission("announcements.manage")


def list_all_announcements(db: Session) -> list[Announcement]:
    return (
        db.query(Announcement)
        .order_by(Announcement.created_at.desc(), Announcement.id.desc())
        .all()
    )


@router.get("/", response_model=list[AnnouncementOut])
def list_announcements(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return list_all_announcements(db)


@router.post("/", response_model=AnnouncementOut, status_code=status.HTTP_201_CREATED)
def create_announcement(
    payload: AnnouncementCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_announcements_manager)
):
    announcement = Announcement(
        title=payload.title.strip(),
        content=payload.content,
        target_group=payload.target_group,
        author_id=current_user.id,
        created_at=utc_now(),
    )
    db.add(announcement)
    db.flush()
    notify(
        db,
        type="announcement",
        title="New announcement",
        message=announcement.title,
        link="/student/dashboard",
        item_id=announcement.id,
    )
    db.commit()
    db.refresh(announcement)
    logger.info("Announcement %s posted by user %s", announcement.id, current_user.id)
    return announcement


@router.delete("/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_announcement(
    announcement_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_announcements_manager)
):
    announcement = db.query(Announcement).filter(Announcement.id == announcement_id).first()
    if not announcement:
        raise HTTPException(status_code=404, detail="Announcement not found")
    db.delete(announcement)
    db.commit()
    return None
