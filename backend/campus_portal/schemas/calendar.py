from datetime import datetime

from pydantic import BaseModel


class CalendarEventOut(BaseModel):
    id: int
    title: str
    date: datetime
    type: str = "assignment"
    has_submitted: bool


class CalendarEventDetailOut(CalendarEventOut):
    description: str
