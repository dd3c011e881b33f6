"""ORM 记录到响应模型的投影函数。

同一种记录在所有接口中形状一致；关联缺失时返回 None。
"""

from __future__ import annotations

from typing import Optional

from school_portal.models import Assignment, Child, Grade, Message, Parent, Teacher, User
from school_portal.schemas.assignments import AssignmentRecord
from school_portal.schemas.children import (
    AdminStudentRecord,
    ChildBrief,
    ChildRecord,
    SubjectTeacherRecord,
    TeacherRef,
)
from school_portal.schemas.grades import GradeRecord, GradeStudentRef, GradeTeacherRef
from school_portal.schemas.messages import MessageRecord, MessageUser, ReadReceiptRecord
from school_portal.schemas.users import ParentRecord, TeacherRecord, UserRecord


def user_record(user: User) -> UserRecord:
    return UserRecord(id=user.id, full_name=user.full_name, email=user.email, role=user.role)


def teacher_ref(teacher: Optional[Teacher]) -> Optional[TeacherRef]:
    if teacher is None or teacher.user is None:
        return None
    return TeacherRef(id=teacher.id, full_name=teacher.user.full_name, email=teacher.user.email)


def teacher_record(teacher: Teacher) -> TeacherRecord:
    return TeacherRecord(
        id=teacher.id,
        full_name=teacher.user.full_name,
        email=teacher.user.email,
        phone=teacher.user.phone,
        subjects=list(teacher.subjects or []),
        grade=teacher.grade,
        status=teacher.status,
    )


def parent_record(parent: Parent) -> ParentRecord:
    return ParentRecord(
        id=parent.id,
        full_name=parent.user.full_name,
        email=parent.user.email,
        phone=parent.user.phone,
        child_count=len(parent.children),
        status=parent.status,
    )


def child_brief(child: Child) -> ChildBrief:
    return ChildBrief(
        id=child.id,
        full_name=child.full_name,
        age=child.age,
        grade=child.grade,
        subjects=list(child.subjects or []),
    )


def child_record(child: Child) -> ChildRecord:
    """学生记录，附带班主任与各科任课教师。"""
    return ChildRecord(
        **child_brief(child).model_dump(),
        class_teacher=teacher_ref(child.class_teacher),
        subject_teachers=[
            SubjectTeacherRecord(subject=slot.subject, teacher=teacher_ref(slot.teacher))
            for slot in child.subject_teachers
        ],
    )


def admin_student_record(child: Child) -> AdminStudentRecord:
    parent_user = child.parent.user if child.parent is not None else None
    return AdminStudentRecord(
        **child_record(child).model_dump(),
        parent_name=parent_user.full_name if parent_user else "N/A",
        parent_email=parent_user.email if parent_user else "N/A",
    )


def message_user(user: User) -> MessageUser:
    return MessageUser(id=user.id, full_name=user.full_name, email=user.email, role=user.role)


def message_record(message: Message) -> MessageRecord:
    return MessageRecord(
        id=message.id,
        subject=message.subject,
        content=message.content,
        type=message.type,
        grade=message.grade,
        sender=message_user(message.sender),
        recipients=[message_user(user) for user in message.recipients],
        read_by=[
            ReadReceiptRecord(user=message_user(receipt.user), read_at=receipt.read_at)
            for receipt in message.read_by
        ],
        created_at=message.created_at,
    )


def grade_record(grade: Grade) -> GradeRecord:
    return GradeRecord(
        id=grade.id,
        test_title=grade.test_title,
        subject=grade.subject,
        grade=grade.grade,
        score=grade.score,
        comments=grade.comments,
        date=grade.date,
        student=GradeStudentRef(
            id=grade.student.id, full_name=grade.student.full_name, grade=grade.student.grade
        ),
        teacher=GradeTeacherRef(id=grade.teacher.id, full_name=grade.teacher.user.full_name),
    )


def assignment_record(assignment: Assignment) -> AssignmentRecord:
    return AssignmentRecord.model_validate(assignment)
