from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from campus_portal.schemas.fields import strip_required_text


class ResultCreate(BaseModel):
    student_id: int
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    score: int = Field(ge=0)
    max_score: int = Field(gt=0)

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        return strip_required_text(value)

    @model_validator(mode="after")
    def check_score_range(self):
        if self.score > self.max_score:
            raise ValueError("score cannot exceed max_score")
        return self


class ResultOut(BaseModel):
    id: int
    student_id: int
    title: str
    description: Optional[str] = None
    score: int
    max_score: int
    author_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class NewResultsCountOut(BaseModel):
    new_count: int
