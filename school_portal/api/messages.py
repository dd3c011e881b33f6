"""站内消息API：发送、收件箱、标记已读。"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from school_portal.db import get_db
from school_portal.models import Message, MessageType, ReadReceipt, User
from school_portal.schemas.common import CamelModel, MessageResponse
from school_portal.schemas.messages import MessageListResponse, MessageSentResponse
from school_portal.services.errors import PermissionDeniedError
from school_portal.services.projections import message_record
from school_portal.services.recipients import resolve_recipients
from school_portal.api.auth import get_current_user
from school_portal.utils.ids import is_valid_object_id, normalize_object_id

logger = logging.getLogger(__name__)

router = APIRouter()

_MESSAGE_TYPES = {item.value for item in MessageType}


# === Schemas ===

class MessageCreate(CamelModel):
    subject: Optional[str] = None
    content: Optional[str] = None
    type: Optional[str] = None
    recipients: List[str] = []
    grade: Optional[str] = None


def _load_message(db: Session, message_id: str) -> Optional[Message]:
    return (
        db.query(Message)
        .options(
            selectinload(Message.sender),
            selectinload(Message.recipients),
            selectinload(Message.read_by).selectinload(ReadReceipt.user),
        )
        .filter(Message.id == message_id)
        .first()
    )


# === API 端点 ===

@router.post("", response_model=MessageSentResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    data: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """发送消息，收件人在此刻一次性确定。"""
    subject = (data.subject or "").strip()
    content = (data.content or "").strip()
    if not subject or not content or not data.type:
        raise HTTPException(status_code=400, detail="Missing required fields")
    if data.type not in _MESSAGE_TYPES:
        raise HTTPException(status_code=400, detail="Invalid message type")

    message_type = MessageType(data.type)
    grade = (data.grade or "").strip() or None
    if message_type == MessageType.CLASS and not grade:
        raise HTTPException(status_code=400, detail="Grade is required for class messages")
    if message_type == MessageType.INDIVIDUAL and not data.recipients:
        raise HTTPException(status_code=400, detail="Recipients are required for individual messages")

    recipients = resolve_recipients(
        db,
        message_type,
        sender_id=current_user.id,
        recipient_ids=data.recipients,
        grade=grade,
    )
    message = Message(
        sender_id=current_user.id,
        subject=subject,
        content=content,
        type=message_type,
        grade=grade if message_type == MessageType.CLASS else None,
        recipients=recipients,
    )
    db.add(message)
    db.commit()

    logger.info(
        "Message %s (%s) sent by %s to %d recipient(s)",
        message.id,
        message_type.value,
        current_user.id,
        len(recipients),
    )
    return MessageSentResponse(
        message="Message sent successfully",
        data=message_record(_load_message(db, message.id)),
    )


@router.get("", response_model=MessageListResponse)
async def list_messages(
    type: Optional[MessageType] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """当前用户发出或收到的消息，按时间倒序。"""
    query = (
        db.query(Message)
        .options(
            selectinload(Message.sender),
            selectinload(Message.recipients),
            selectinload(Message.read_by).selectinload(ReadReceipt.user),
        )
        .filter(
            or_(
                Message.sender_id == current_user.id,
                Message.recipients.any(User.id == current_user.id),
            )
        )
    )
    if type is not None:
        query = query.filter(Message.type == type)

    messages = query.order_by(Message.created_at.desc()).all()
    return MessageListResponse(
        message="Messages retrieved successfully",
        messages=[message_record(message) for message in messages],
    )


@router.post("/{message_id}/read", response_model=MessageResponse)
async def mark_as_read(
    message_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """标记已读。重复标记不会产生新的回执。"""
    if not is_valid_object_id(message_id):
        raise HTTPException(status_code=400, detail=f"Invalid message ID: {message_id}")

    message = _load_message(db, normalize_object_id(message_id))
    if message is None:
        raise HTTPException(status_code=404, detail="Message not found")

    if message.sender_id != current_user.id and not message.has_recipient(current_user.id):
        raise PermissionDeniedError("Not authorized to read this message")

    if not message.has_read(current_user.id):
        message.read_by.append(ReadReceipt(user_id=current_user.id))
        try:
            db.commit()
        except IntegrityError:
            # 并发请求已写入同一回执
            db.rollback()

    return MessageResponse(message="Message marked as read")
