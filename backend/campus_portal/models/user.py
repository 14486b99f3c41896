from sqlalchemy import Column, DateTime, Integer, String, func

from campus_portal.database.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(80), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    role = Column(String(20), nullable=False, default="student", index=True)
    full_name = Column(String(180), nullable=False)
    phone_number = Column(String(40), nullable=True)
    profile_picture = Column(String, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
