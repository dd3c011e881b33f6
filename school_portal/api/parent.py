"""家长端API：查看与登记孩子。"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationInfo, field_validator
from sqlalchemy.orm import Session, selectinload

from school_portal.db import get_db
from school_portal.models import Child, Parent, SubjectTeacherSlot, Teacher, User
from school_portal.schemas.children import ChildCreatedResponse, ChildListResponse
from school_portal.schemas.common import CamelModel
from school_portal.services.projections import child_brief, child_record
from school_portal.api.auth import require_parent
from school_portal.utils.subjects import clean_subject_list

logger = logging.getLogger(__name__)

router = APIRouter()

_REQUIRED_LABELS = {"full_name": "Full name", "grade": "Grade"}


# === Schemas ===

class ChildCreate(CamelModel):
    full_name: str
    age: int
    grade: str
    subjects: List[str] = []

    @field_validator("full_name", "grade")
    @classmethod
    def _strip_required(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{_REQUIRED_LABELS[info.field_name]} is required")
        return value

    @field_validator("age")
    @classmethod
    def _check_age(cls, value: int) -> int:
        if value < 4:
            raise ValueError("Age must be at least 4")
        if value > 12:
            raise ValueError("Age must not exceed 12")
        return value


def get_parent_record(db: Session, user: User) -> Parent:
    parent = db.query(Parent).filter(Parent.user_id == user.id).first()
    if parent is None:
        raise HTTPException(status_code=404, detail="Parent record not found")
    return parent


# === API 端点 ===

@router.get("/children", response_model=ChildListResponse)
async def list_children(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_parent),
):
    """家长查看自己名下的孩子及其教师。"""
    parent = get_parent_record(db, current_user)
    children = (
        db.query(Child)
        .options(
            selectinload(Child.class_teacher).selectinload(Teacher.user),
            selectinload(Child.subject_teachers)
            .selectinload(SubjectTeacherSlot.teacher)
            .selectinload(Teacher.user),
        )
        .filter(Child.parent_id == parent.id)
        .order_by(Child.created_at.asc())
        .all()
    )
    return ChildListResponse(
        message="Children retrieved successfully",
        children=[child_record(child) for child in children],
    )


@router.post("/children", response_model=ChildCreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_child(
    data: ChildCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_parent),
):
    """登记孩子，每门学科预留一个未分配的任课教师槽位。"""
    parent = get_parent_record(db, current_user)
    subjects = clean_subject_list(data.subjects)
    child = Child(
        full_name=data.full_name,
        age=data.age,
        grade=data.grade,
        subjects=subjects,
        parent_id=parent.id,
        subject_teachers=[
            SubjectTeacherSlot(position=index, subject=subject)
            for index, subject in enumerate(subjects)
        ],
    )
    db.add(child)
    db.commit()
    db.refresh(child)

    logger.info("Child %s added by parent %s", child.id, parent.id)
    return ChildCreatedResponse(message="Child added successfully", child=child_brief(child))
