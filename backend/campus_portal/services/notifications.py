from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from campus_portal.models.notification import Notification
from campus_portal.services.date_windows import utc_now

logger = logging.getLogger(__name__)

NOTIFICATION_TYPES = {"announcement", "assignment", "result", "material", "chat", "system"}


def notify(
    db: Session,
    *,
    type: str,
    title: str,
    message: str,
    user_id: Optional[int] = None,
    link: Optional[str] = None,
    item_id: Optional[int] = None,
) -> Notification:
    """Queue a notification on the session; the caller commits.

    ``user_id=None`` addresses every user.
    """
    if type not in NOTIFICATION_TYPES:
        raise ValueError(f"unknown notification type: {type}")
    row = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        link=link,
        item_id=item_id,
        timestamp=utc_now(),
        is_read=False,
    )
    db.add(row)
    logger.info("Queued %s notification for %s", type, user_id if user_id is not None else "all users")
    return row
