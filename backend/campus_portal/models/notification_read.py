from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, func

from campus_portal.database.base import Base


class NotificationRead(Base):
    """Per-user read marker for broadcast notifications."""

    __tablename__ = "notification_reads"
    __table_args__ = (
        UniqueConstraint("notification_id", "user_id", name="uq_notification_reads_notification_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    notification_id = Column(Integer, ForeignKey("notifications.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    read_at = Column(DateTime, server_default=func.now(), nullable=False)
