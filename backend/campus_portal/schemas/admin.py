from datetime import datetime

from pydantic import BaseModel


class AdminStatsOut(BaseModel):
    active_students: int
    pending_assignments: int
    study_materials: int


class ActivityOut(BaseModel):
    id: int
    type: str
    title: str
    timestamp: datetime

    class Config:
        from_attributes = True
