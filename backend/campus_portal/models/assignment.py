from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import relationship

from campus_portal.database.base import Base


class Assignment(Base):
    __tablename__ = "assignments"
    __table_args__ = (
        Index("ix_assignments_published_due", "is_published", "due_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    file_url = Column(String, nullable=False)
    due_date = Column(DateTime, nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    target_group = Column(String(120), nullable=False)
    is_published = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)

    submissions = relationship("Submission", back_populates="assignment", cascade="all, delete-orphan")
