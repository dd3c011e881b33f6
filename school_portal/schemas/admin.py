"""管理员总览响应模型。"""

from __future__ import annotations

from typing import List

from school_portal.schemas.children import AdminStudentRecord
from school_portal.schemas.common import CamelModel
from school_portal.schemas.users import ParentRecord, TeacherRecord


class AdminUsersResponse(CamelModel):
    message: str
    teachers: List[TeacherRecord]
    parents: List[ParentRecord]
    students: List[AdminStudentRecord]
