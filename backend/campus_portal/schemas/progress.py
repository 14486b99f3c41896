from typing import Optional

from pydantic import BaseModel


class AssignmentProgressOut(BaseModel):
    total: int
    submitted: int
    pending: int
    overdue: int
    due_this_week: int
    completion_rate: float


class ResultProgressOut(BaseModel):
    count: int
    average_percentage: Optional[float] = None
    best_percentage: Optional[float] = None
