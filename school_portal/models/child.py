"""学生（孩子）模型与任课教师槽位。"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import JSON

from school_portal.db import Base
from school_portal.utils.ids import new_object_id


class Child(Base):
    """家长名下的学生记录。

    - ``class_teacher``：班主任，可为空。
    - ``subject_teachers``：每门学科一个槽位，``teacher_id`` 在分配前为空。
    """

    __tablename__ = "children"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)  # 4-12
    grade: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    # 学科列表 (JSON数组)，前端约定 4 门
    subjects: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)

    parent_id: Mapped[str] = mapped_column(
        ForeignKey("parents.id", ondelete="CASCADE"), nullable=False
    )
    class_teacher_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("teachers.id", ondelete="SET NULL")
    )

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

    parent = relationship("Parent", back_populates="children")
    class_teacher = relationship("Teacher", foreign_keys=[class_teacher_id])
    subject_teachers: Mapped[List["SubjectTeacherSlot"]] = relationship(
        back_populates="child",
        cascade="all, delete-orphan",
        order_by="SubjectTeacherSlot.position",
    )

    def __repr__(self) -> str:
        return f"<Child(id={self.id}, full_name={self.full_name}, grade={self.grade})>"


class SubjectTeacherSlot(Base):
    """学生某一学科的任课教师。整组随分配操作整体替换。"""

    __tablename__ = "subject_teacher_slots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    child_id: Mapped[str] = mapped_column(
        ForeignKey("children.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    subject: Mapped[str] = mapped_column(String(100), nullable=False)
    teacher_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("teachers.id", ondelete="SET NULL"), index=True
    )

    child: Mapped[Child] = relationship(back_populates="subject_teachers")
    teacher = relationship("Teacher", foreign_keys=[teacher_id])

    def __repr__(self) -> str:
        return f"<SubjectTeacherSlot(child_id={self.child_id}, subject={self.subject}, teacher_id={self.teacher_id})>"
