"""成绩记录模型。"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school_portal.db import Base
from school_portal.utils.ids import new_object_id


class Grade(Base):
    """某次测验的分数 (0-100)。"""

    __tablename__ = "grades"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    test_title: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(100), nullable=False)
    grade: Mapped[str] = mapped_column(String(50), nullable=False)  # 年级标签
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    teacher_id: Mapped[str] = mapped_column(
        ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    student_id: Mapped[str] = mapped_column(
        ForeignKey("children.id", ondelete="CASCADE"), nullable=False, index=True
    )
    comments: Mapped[Optional[str]] = mapped_column(Text)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    teacher = relationship("Teacher", foreign_keys=[teacher_id])
    student = relationship("Child", foreign_keys=[student_id])

    def __repr__(self) -> str:
        return f"<Grade(id={self.id}, subject={self.subject}, score={self.score})>"
