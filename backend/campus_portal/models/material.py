from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from campus_portal.database.base import Base


class Material(Base):
    __tablename__ = "materials"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    file_url = Column(String, nullable=False)
    file_type = Column(String(60), nullable=False)
    file_size = Column(Integer, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    target_group = Column(String(120), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)
