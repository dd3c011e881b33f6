"""教师端API：任教学生与家长名单。"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from school_portal.db import get_db
from school_portal.models import Teacher, User
from school_portal.schemas.children import TeacherParentsResponse, TeacherStudentsResponse
from school_portal.services.roster import build_parent_roster, build_student_roster
from school_portal.api.auth import require_teacher

router = APIRouter()


def get_teacher_record(db: Session, user: User) -> Teacher:
    teacher = db.query(Teacher).filter(Teacher.user_id == user.id).first()
    if teacher is None:
        raise HTTPException(status_code=404, detail="Teacher record not found")
    return teacher


@router.get("/students", response_model=TeacherStudentsResponse)
async def list_students(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
):
    """教师担任班主任或任课教师的学生。"""
    teacher = get_teacher_record(db, current_user)
    return TeacherStudentsResponse(
        message="Students retrieved successfully",
        students=build_student_roster(db, teacher),
    )


@router.get("/parents", response_model=TeacherParentsResponse)
async def list_parents(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
):
    """上述学生的家长（去重）。"""
    teacher = get_teacher_record(db, current_user)
    return TeacherParentsResponse(
        message="Parents retrieved successfully",
        parents=build_parent_roster(db, teacher),
    )
