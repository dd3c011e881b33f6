"""SQLAlchemy 模型汇总导出。"""

from school_portal.models.assignment import Assignment
from school_portal.models.child import Child, SubjectTeacherSlot
from school_portal.models.enums import ApprovalStatus, MessageType, UserRole
from school_portal.models.grade import Grade
from school_portal.models.message import Message, ReadReceipt, message_recipients
from school_portal.models.user import Parent, Teacher, User

__all__ = [
    "ApprovalStatus",
    "Assignment",
    "Child",
    "Grade",
    "Message",
    "MessageType",
    "Parent",
    "ReadReceipt",
    "SubjectTeacherSlot",
    "Teacher",
    "User",
    "UserRole",
    "message_recipients",
]
