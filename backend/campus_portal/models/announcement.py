from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from campus_portal.database.base import Base


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    target_group = Column(String(120), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)
