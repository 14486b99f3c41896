from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from campus_portal.schemas.fields import strip_required_text


class AnnouncementCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    target_group: str = Field(default="all", min_length=1, max_length=120)

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        return strip_required_text(value)


class AnnouncementOut(BaseModel):
    id: int
    title: str
    content: str
    author_id: int
    target_group: str
    created_at: datetime

    class Config:
        from_attributes = True
