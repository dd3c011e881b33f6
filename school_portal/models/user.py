"""用户模型定义 - 家长/教师/管理员三角色。"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import DateTime, Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import JSON

from school_portal.db import Base
from school_portal.models.enums import ApprovalStatus, UserRole
from school_portal.utils.ids import new_object_id


class User(Base):
    """身份记录。

    ``role`` 在注册时确定，决定是否存在对应的 Parent / Teacher 记录。
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), nullable=False)

    # 时间戳
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    parent_profile = relationship("Parent", back_populates="user", uselist=False, foreign_keys="Parent.user_id")
    teacher_profile = relationship("Teacher", back_populates="user", uselist=False, foreign_keys="Teacher.user_id")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role.value})>"


class Parent(Base):
    """家长档案，与 role=parent 的 User 一一对应。"""

    __tablename__ = "parents"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    status: Mapped[ApprovalStatus] = mapped_column(
        Enum(ApprovalStatus), default=ApprovalStatus.APPROVED, nullable=False
    )
    approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    approved_by: Mapped[Optional[str]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))

    user = relationship("User", back_populates="parent_profile", foreign_keys=[user_id])
    children = relationship("Child", back_populates="parent", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Parent(id={self.id}, user_id={self.user_id}, status={self.status.value})>"


class Teacher(Base):
    """教师档案，与 role=teacher 的 User 一一对应。"""

    __tablename__ = "teachers"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    # 任教学科 (JSON数组)，至少一项
    subjects: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    grade: Mapped[str] = mapped_column(String(50), nullable=False)  # 如 "Grade 2"
    status: Mapped[ApprovalStatus] = mapped_column(
        Enum(ApprovalStatus), default=ApprovalStatus.PENDING, nullable=False
    )
    approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    approved_by: Mapped[Optional[str]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))

    user = relationship("User", back_populates="teacher_profile", foreign_keys=[user_id])

    @property
    def is_approved(self) -> bool:
        return self.status == ApprovalStatus.APPROVED

    def __repr__(self) -> str:
        return f"<Teacher(id={self.id}, user_id={self.user_id}, status={self.status.value})>"
