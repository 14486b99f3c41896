from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import and_, exists, or_
from sqlalchemy.orm import Session

from campus_portal.core.auth import get_current_user
from campus_portal.database.deps import get_db
from campus_portal.models.notification import Notification
from campus_portal.models.notification_read import NotificationRead
from campus_portal.models.user import User
from campus_portal.schemas.chat import UnreadCountOut
from campus_portal.schemas.notification import NotificationOut
from campus_portal.services.date_windows import utc_now

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


def notifications_for(db: Session, user: User):
    return db.query(Notification).filter(
        or_(Notification.user_id == user.id, Notification.user_id.is_(None))
    )


def unread_filter(user: User):
    """Own rows use ``is_read``; broadcasts are unread until the user has a read marker."""
    marked = exists().where(
        NotificationRead.notification_id == Notification.id,
        NotificationRead.user_id == user.id,
    )
    return or_(
        and_(Notification.user_id == user.id, Notification.is_read.is_(False)),
        and_(Notification.user_id.is_(None), ~marked),
    )


def read_broadcast_ids(db: Session, user: User) -> set[int]:
    rows = db.query(NotificationRead.notification_id).filter(NotificationRead.user_id == user.id).all()
    return {row.notification_id for row in rows}


def build_notification_out(notification: Notification, read_ids: set[int]) -> NotificationOut:
    out = NotificationOut.model_validate(notification)
    if notification.user_id is None:
        out.is_read = notification.id in read_ids
    return out


def mark_read_for(db: Session, notification: Notification, user: User) -> None:
    if notification.user_id is not None:
        notification.is_read = True
        return
    db.add(NotificationRead(notification_id=notification.id, user_id=user.id, read_at=utc_now()))


@router.get("/", response_model=list[NotificationOut])
def list_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    rows = (
        notifications_for(db, current_user)
        .order_by(Notification.timestamp.desc(), Notification.id.desc())
        .all()
    )
    read_ids = read_broadcast_ids(db, current_user)
    return [build_notification_out(row, read_ids) for row in rows]


@router.get("/unread/count", response_model=UnreadCountOut)
def count_unread_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    total = db.query(Notification).filter(unread_filter(current_user)).count()
    return UnreadCountOut(count=total)


@router.put("/read-all", status_code=status.HTTP_204_NO_CONTENT)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    for notification in db.query(Notification).filter(unread_filter(current_user)).all():
        mark_read_for(db, notification, current_user)
    db.commit()
    return None


@router.put("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    notification = (
        notifications_for(db, current_user)
        .filter(Notification.id == notification_id)
        .first()
    )
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")
    already_read = (
        db.query(Notification)
        .filter(Notification.id == notification.id, unread_filter(current_user))
        .first()
        is None
    )
    if not already_read:
        mark_read_for(db, notification, current_user)
        db.commit()
    return None
