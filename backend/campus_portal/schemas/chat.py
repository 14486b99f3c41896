from datetime import datetime

from pydantic import BaseModel, Field


class ChatMessageCreate(BaseModel):
    content: str = Field(min_length=1, max_length=4000)


class ChatSenderOut(BaseModel):
    id: int
    username: str
    full_name: str
    role: str

    class Config:
        from_attributes = True


class ChatMessageOut(BaseModel):
    id: int
    sender_id: int
    content: str
    timestamp: datetime
    is_read: bool
    sender: ChatSenderOut

    class Config:
        from_attributes = True


class UnreadCountOut(BaseModel):
    count: int
