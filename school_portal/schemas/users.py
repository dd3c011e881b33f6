"""用户、家长、教师相关的响应模型。"""

from __future__ import annotations

from typing import List

from school_portal.models import ApprovalStatus, UserRole
from school_portal.schemas.common import CamelModel


class UserRecord(CamelModel):
    id: str
    full_name: str
    email: str
    role: UserRole


class AuthResponse(CamelModel):
    message: str
    token: str
    user: UserRecord


class CurrentUserResponse(CamelModel):
    message: str
    user: UserRecord


class TeacherRecord(CamelModel):
    id: str
    full_name: str
    email: str
    phone: str
    subjects: List[str]
    grade: str
    status: ApprovalStatus


class ParentRecord(CamelModel):
    id: str
    full_name: str
    email: str
    phone: str
    child_count: int
    status: ApprovalStatus


class TeacherStatusResponse(CamelModel):
    message: str
    teacher: TeacherRecord
