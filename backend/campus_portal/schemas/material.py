from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from campus_portal.schemas.fields import strip_required_text


class MaterialCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str
    file_url: str = Field(min_length=1)
    file_type: str = Field(min_length=1, max_length=60)
    file_size: int = Field(ge=0)
    target_group: str = Field(default="all", min_length=1, max_length=120)

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        return strip_required_text(value)


class MaterialOut(MaterialCreate):
    id: int
    author_id: int
    created_at: datetime

    class Config:
        from_attributes = True
