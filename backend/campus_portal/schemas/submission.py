from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SubmissionCreate(BaseModel):
    assignment_id: int
    file_url: str = Field(min_length=1)


class SubmissionGrade(BaseModel):
    grade: int = Field(ge=0, le=100)
    feedback: Optional[str] = None


class SubmissionOut(BaseModel):
    id: int
    assignment_id: int
    student_id: int
    file_url: str
    submitted_at: datetime
    grade: Optional[int] = None
    feedback: Optional[str] = None

    class Config:
        from_attributes = True
