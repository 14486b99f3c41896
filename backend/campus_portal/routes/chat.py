from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, joinedload

from campus_portal.core.auth import get_current_user, require_permission
from campus_portal.database.deps import get_db
from campus_portal.models.chat_message import ChatMessage
from campus_portal.models.user import User
from campus_portal.schemas.chat import ChatMessageCreate, ChatMessageOut, ChatSenderOut, UnreadCountOut
from campus_portal.services.date_windows import utc_now

router = APIRouter(prefix="/api/chat/messages", tags=["Chat"])
get_chat_sender = require_permission("chat.send")

UNKNOWN_SENDER = ChatSenderOut(id=0, username="unknown", full_name="Unknown User", role="")


def build_chat_message_out(message: ChatMessage) -> ChatMessageOut:
    sender = message.sender
    return ChatMessageOut(
        id=message.id,
        sender_id=message.sender_id,
        content=message.content,
        timestamp=message.timestamp,
        is_read=bool(message.is_read),
        sender=ChatSenderOut.model_validate(sender) if sender else UNKNOWN_SENDER,
    )


def messages_newest_first(db: Session):
    return (
        db.query(ChatMessage)
        .options(joinedload(ChatMessage.sender))
        .order_by(ChatMessage.timestamp.desc(), ChatMessage.id.desc())
    )


@router.get("/", response_model=list[ChatMessageOut])
def list_messages(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return [build_chat_message_out(row) for row in messages_newest_first(db).all()]


@router.get("/user/{user_id}", response_model=list[ChatMessageOut])
def list_messages_for_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # Every participant shares the single campus thread.
    return [build_chat_message_out(row) for row in messages_newest_first(db).all()]


@router.get("/unread", response_model=UnreadCountOut)
def count_unread_messages(
    user_id: Optional[int] = Query(default=None, alias="userId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    query = db.query(ChatMessage).filter(ChatMessage.is_read.is_(False))
    if user_id is not None:
        query = query.filter(ChatMessage.sender_id != user_id)
    return UnreadCountOut(count=query.count())


@router.post("/", response_model=ChatMessageOut, status_code=status.HTTP_201_CREATED)
def create_message(
    payload: ChatMessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_chat_sender)
):
    content = payload.content.strip()
    if not content:
        raise HTTPException(status_code=400, detail="Message cannot be empty")
    message = ChatMessage(
        sender_id=current_user.id,
        content=content,
        timestamp=utc_now(),
        is_read=False,
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    return build_chat_message_out(message)


@router.put("/{message_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_message_read(
    message_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    message = db.query(ChatMessage).filter(ChatMessage.id == message_id).first()
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")
    message.is_read = True
    db.commit()
    return None
