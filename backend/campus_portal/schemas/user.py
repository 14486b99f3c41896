from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=80)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1)
    full_name: str = Field(min_length=1, max_length=180)
    phone_number: Optional[str] = Field(default=None, max_length=40)


class UserLogin(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: str


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    role: str
    full_name: str
    phone_number: Optional[str] = None
    profile_picture: Optional[str] = None
    permissions: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserUpdate(BaseModel):
    username: Optional[str] = Field(default=None, min_length=1, max_length=80)
    email: Optional[str] = Field(default=None, min_length=3, max_length=255)
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=180)
    phone_number: Optional[str] = Field(default=None, max_length=40)


class ProfilePictureUpdate(BaseModel):
    profile_picture: Optional[str] = None


class UserRoleOut(BaseModel):
    role: str
