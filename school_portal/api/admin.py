"""管理员API：用户总览、教师审核、教师分配。"""

import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, selectinload

from school_portal.db import get_db
from school_portal.models import ApprovalStatus, Child, Parent, SubjectTeacherSlot, Teacher, User
from school_portal.schemas.admin import AdminUsersResponse
from school_portal.schemas.children import AssignedChildResponse
from school_portal.schemas.common import CamelModel
from school_portal.schemas.users import TeacherStatusResponse
from school_portal.services.projections import (
    admin_student_record,
    child_record,
    parent_record,
    teacher_record,
)
from school_portal.services.teacher_assignment import SubjectTeacherPair, TeacherAssignmentService
from school_portal.api.auth import require_admin
from school_portal.utils.ids import is_valid_object_id, normalize_object_id

logger = logging.getLogger(__name__)

router = APIRouter()
assignment_service = TeacherAssignmentService()


# === Schemas ===

class TeacherStatusUpdate(CamelModel):
    status: str


class SubjectTeacherInput(CamelModel):
    subject: str
    teacher_id: str


class AssignTeachersRequest(CamelModel):
    student_id: str
    class_teacher_id: str
    subject_teachers: List[SubjectTeacherInput] = []


# === API 端点 ===

@router.get("/users", response_model=AdminUsersResponse)
async def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """教师、家长、学生全量列表。"""
    teachers = (
        db.query(Teacher)
        .options(selectinload(Teacher.user))
        .join(Teacher.user)
        .order_by(User.created_at.asc())
        .all()
    )
    parents = (
        db.query(Parent)
        .options(selectinload(Parent.user), selectinload(Parent.children))
        .join(Parent.user)
        .order_by(User.created_at.asc())
        .all()
    )
    children = (
        db.query(Child)
        .options(
            selectinload(Child.parent).selectinload(Parent.user),
            selectinload(Child.class_teacher).selectinload(Teacher.user),
            selectinload(Child.subject_teachers)
            .selectinload(SubjectTeacherSlot.teacher)
            .selectinload(Teacher.user),
        )
        .order_by(Child.created_at.asc())
        .all()
    )
    return AdminUsersResponse(
        message="Users retrieved successfully",
        teachers=[teacher_record(teacher) for teacher in teachers],
        parents=[parent_record(parent) for parent in parents],
        students=[admin_student_record(child) for child in children],
    )


@router.post("/teachers/{teacher_id}/status", response_model=TeacherStatusResponse)
async def update_teacher_status(
    teacher_id: str,
    data: TeacherStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """审核教师：approved 记录审核人与时间，rejected 清空。"""
    if data.status not in (ApprovalStatus.APPROVED.value, ApprovalStatus.REJECTED.value):
        raise HTTPException(status_code=400, detail="Invalid status")
    if not is_valid_object_id(teacher_id):
        raise HTTPException(status_code=400, detail=f"Invalid teacher ID: {teacher_id}")

    teacher = db.get(Teacher, normalize_object_id(teacher_id))
    if teacher is None:
        raise HTTPException(status_code=404, detail="Teacher not found")

    new_status = ApprovalStatus(data.status)
    teacher.status = new_status
    if new_status == ApprovalStatus.APPROVED:
        teacher.approved_at = datetime.now(timezone.utc)
        teacher.approved_by = current_user.id
    else:
        teacher.approved_at = None
        teacher.approved_by = None
    db.commit()
    db.refresh(teacher)

    logger.info("Teacher %s marked %s by %s", teacher.id, new_status.value, current_user.id)
    return TeacherStatusResponse(
        message=f"Teacher {new_status.value} successfully",
        teacher=teacher_record(teacher),
    )


@router.post("/assign-teachers", response_model=AssignedChildResponse)
async def assign_teachers(
    data: AssignTeachersRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """为学生指定班主任与各科任课教师（整体替换）。"""
    child = assignment_service.assign(
        db,
        student_id=data.student_id,
        class_teacher_id=data.class_teacher_id,
        pairs=[
            SubjectTeacherPair(subject=item.subject, teacher_id=item.teacher_id)
            for item in data.subject_teachers
        ],
    )
    return AssignedChildResponse(message="Teachers assigned successfully", child=child_record(child))
