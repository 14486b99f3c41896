from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class NotificationOut(BaseModel):
    id: int
    user_id: Optional[int] = None
    type: str
    title: str
    message: str
    timestamp: datetime
    is_read: bool
    link: Optional[str] = None
    item_id: Optional[int] = None

    class Config:
        from_attributes = True
