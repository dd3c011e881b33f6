"""消息相关响应模型。"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from school_portal.models import MessageType, UserRole
from school_portal.schemas.common import CamelModel


class MessageUser(CamelModel):
    id: str
    full_name: str
    email: str
    role: UserRole


class ReadReceiptRecord(CamelModel):
    user: MessageUser
    read_at: datetime


class MessageRecord(CamelModel):
    id: str
    subject: str
    content: str
    type: MessageType
    grade: Optional[str] = None
    sender: MessageUser
    recipients: List[MessageUser]
    read_by: List[ReadReceiptRecord]
    created_at: datetime


class MessageSentResponse(CamelModel):
    message: str
    data: MessageRecord


class MessageListResponse(CamelModel):
    message: str
    messages: List[MessageRecord]
