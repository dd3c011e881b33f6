"""站内消息模型：收件人快照与已读回执。"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Table, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_portal.db import Base
from school_portal.models.enums import MessageType
from school_portal.utils.ids import new_object_id


# 收件人在发送时一次性写入，之后不随关系变化
message_recipients = Table(
    "message_recipients",
    Base.metadata,
    Column("message_id", ForeignKey("messages.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Message(Base):
    """消息记录。"""

    __tablename__ = "messages"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    sender_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[MessageType] = mapped_column(Enum(MessageType), nullable=False)
    grade: Mapped[Optional[str]] = mapped_column(String(50))  # 仅 class 类型

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    sender = relationship("User", foreign_keys=[sender_id])
    recipients = relationship("User", secondary=message_recipients, order_by="User.created_at")
    read_by: Mapped[List["ReadReceipt"]] = relationship(
        back_populates="message",
        cascade="all, delete-orphan",
        order_by="ReadReceipt.read_at",
    )

    def has_recipient(self, user_id: str) -> bool:
        return any(user.id == user_id for user in self.recipients)

    def has_read(self, user_id: str) -> bool:
        return any(receipt.user_id == user_id for receipt in self.read_by)

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, type={self.type.value}, sender_id={self.sender_id})>"


class ReadReceipt(Base):
    """已读回执，只追加，每个用户每条消息最多一条。"""

    __tablename__ = "message_read_receipts"
    __table_args__ = (UniqueConstraint("message_id", "user_id", name="uq_receipt_message_user"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    message_id: Mapped[str] = mapped_column(
        ForeignKey("messages.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    read_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    message: Mapped[Message] = relationship(back_populates="read_by")
    user = relationship("User", foreign_keys=[user_id])
