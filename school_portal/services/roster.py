"""教师视角的学生与家长名单。"""

from __future__ import annotations

from typing import Dict, List

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from school_portal.models import Child, Parent, SubjectTeacherSlot, Teacher
from school_portal.schemas.children import (
    ChildGradeRef,
    ParentContactRecord,
    TeacherStudentRecord,
)


def students_for_teacher(db: Session, teacher: Teacher) -> List[Child]:
    """该教师担任班主任或任课教师的全部学生。"""
    return (
        db.query(Child)
        .options(
            selectinload(Child.subject_teachers),
            selectinload(Child.parent).selectinload(Parent.user),
        )
        .filter(
            or_(
                Child.class_teacher_id == teacher.id,
                Child.subject_teachers.any(SubjectTeacherSlot.teacher_id == teacher.id),
            )
        )
        .order_by(Child.created_at.asc())
        .all()
    )


def student_view(child: Child, teacher: Teacher) -> TeacherStudentRecord:
    """班主任看到全部学科，任课教师只看到自己教的学科。"""
    is_class_teacher = child.class_teacher_id == teacher.id
    if is_class_teacher:
        subjects = list(child.subjects or [])
    else:
        subjects = [slot.subject for slot in child.subject_teachers if slot.teacher_id == teacher.id]
    return TeacherStudentRecord(
        id=child.id,
        full_name=child.full_name,
        grade=child.grade,
        subjects=subjects,
        is_class_teacher=is_class_teacher,
    )


def build_student_roster(db: Session, teacher: Teacher) -> List[TeacherStudentRecord]:
    return [student_view(child, teacher) for child in students_for_teacher(db, teacher)]


def build_parent_roster(db: Session, teacher: Teacher) -> List[ParentContactRecord]:
    """按家长去重，并列出与该教师相关的孩子。"""
    parents: Dict[str, ParentContactRecord] = {}
    for child in students_for_teacher(db, teacher):
        parent = child.parent
        if parent is None or parent.user is None:
            continue
        if parent.id not in parents:
            parents[parent.id] = ParentContactRecord(
                id=parent.id,
                full_name=parent.user.full_name,
                email=parent.user.email,
                phone=parent.user.phone,
                children=[],
            )
        parents[parent.id].children.append(ChildGradeRef(name=child.full_name, grade=child.grade))
    return list(parents.values())
