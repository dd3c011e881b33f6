"""学生记录及其教师关系的响应模型。"""

from __future__ import annotations

from typing import List, Optional

from school_portal.schemas.common import CamelModel


class TeacherRef(CamelModel):
    id: str
    full_name: str
    email: str


class SubjectTeacherRecord(CamelModel):
    subject: str
    teacher: Optional[TeacherRef] = None


class ChildBrief(CamelModel):
    id: str
    full_name: str
    age: int
    grade: str
    subjects: List[str]


class ChildRecord(ChildBrief):
    class_teacher: Optional[TeacherRef] = None
    subject_teachers: List[SubjectTeacherRecord]


class AdminStudentRecord(ChildRecord):
    parent_name: str
    parent_email: str


class ChildListResponse(CamelModel):
    message: str
    children: List[ChildRecord]


class ChildCreatedResponse(CamelModel):
    message: str
    child: ChildBrief


class AssignedChildResponse(CamelModel):
    message: str
    child: ChildRecord


# === 教师视角 ===

class TeacherStudentRecord(CamelModel):
    id: str
    full_name: str
    grade: str
    subjects: List[str]
    is_class_teacher: bool


class ChildGradeRef(CamelModel):
    name: str
    grade: str


class ParentContactRecord(CamelModel):
    id: str
    full_name: str
    email: str
    phone: str
    children: List[ChildGradeRef]


class TeacherStudentsResponse(CamelModel):
    message: str
    students: List[TeacherStudentRecord]


class TeacherParentsResponse(CamelModel):
    message: str
    parents: List[ParentContactRecord]
