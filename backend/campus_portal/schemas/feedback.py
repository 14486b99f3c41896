from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from campus_portal.schemas.fields import strip_required_text

FeedbackType = Literal["bug", "feature", "feedback"]
FeedbackStatus = Literal["pending", "in-progress", "resolved", "rejected"]


class FeedbackCreate(BaseModel):
    type: FeedbackType = "feedback"
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        return strip_required_text(value)


class FeedbackStatusUpdate(BaseModel):
    status: str


class FeedbackOut(BaseModel):
    id: int
    user_id: Optional[int] = None
    type: str
    title: str
    description: str
    timestamp: datetime
    status: str

    class Config:
        from_attributes = True
