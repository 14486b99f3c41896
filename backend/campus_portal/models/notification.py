from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func

from campus_portal.database.base import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    # NULL means the notification is addressed to every user; their read state lives in notification_reads.
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    type = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    timestamp = Column(DateTime, server_default=func.now(), nullable=False, index=True)
    # Only used for notifications addressed to one user.
    is_read = Column(Boolean, nullable=False, default=False)
    link = Column(String, nullable=True)
    item_id = Column(Integer, nullable=True)
