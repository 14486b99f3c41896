from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from campus_portal.schemas.fields import strip_required_text
from campus_portal.schemas.submission import SubmissionOut


class AssignmentBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str
    file_url: str
    due_date: datetime
    target_group: str = Field(default="all", min_length=1, max_length=120)
    is_published: bool = True

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        return strip_required_text(value)


class AssignmentCreate(AssignmentBase):
    pass


class AssignmentOut(AssignmentBase):
    id: int
    author_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class AssignmentStatusOut(AssignmentOut):
    has_submitted: bool
    days_remaining: int
    urgency: str
    status: str


class CompletedAssignmentOut(AssignmentOut):
    submission: Optional[SubmissionOut] = None


class PendingCountOut(BaseModel):
    pending_count: int
