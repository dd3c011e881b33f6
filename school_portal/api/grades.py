"""成绩API：录入、按角色查询、年级分析。"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationInfo, field_validator
from sqlalchemy.orm import Session

from school_portal.db import get_db
from school_portal.models import Child, Grade, User
from school_portal.schemas.common import CamelModel
from school_portal.schemas.grades import GradeCreatedResponse, GradeListResponse, GradeSummaryResponse
from school_portal.services.grades import summarize_grades, visible_grades
from school_portal.services.projections import grade_record
from school_portal.api.auth import get_current_user, require_teacher
from school_portal.api.teacher import get_teacher_record
from school_portal.utils.ids import is_valid_object_id, normalize_object_id

logger = logging.getLogger(__name__)

router = APIRouter()

_REQUIRED_LABELS = {"test_title": "Test title", "subject": "Subject", "grade": "Grade"}


class GradeCreate(CamelModel):
    test_title: str
    subject: str
    grade: str
    score: int
    student_id: str
    comments: Optional[str] = None

    @field_validator("test_title", "subject", "grade")
    @classmethod
    def _strip_required(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{_REQUIRED_LABELS[info.field_name]} is required")
        return value

    @field_validator("score")
    @classmethod
    def _check_score(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Score cannot be less than 0")
        if value > 100:
            raise ValueError("Score cannot exceed 100")
        return value

    @field_validator("comments")
    @classmethod
    def _strip_comments(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None


@router.post("", response_model=GradeCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_grade(
    data: GradeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
):
    """教师为学生录入一次测验成绩。"""
    teacher = get_teacher_record(db, current_user)
    if not is_valid_object_id(data.student_id):
        raise HTTPException(status_code=400, detail=f"Invalid student ID: {data.student_id}")
    student = db.get(Child, normalize_object_id(data.student_id))
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")

    grade = Grade(
        test_title=data.test_title,
        subject=data.subject,
        grade=data.grade,
        score=data.score,
        teacher_id=teacher.id,
        student_id=student.id,
        comments=data.comments,
    )
    db.add(grade)
    db.commit()
    db.refresh(grade)

    logger.info("Grade %s recorded for child %s by teacher %s", grade.id, student.id, teacher.id)
    return GradeCreatedResponse(message="Grade added successfully", grade=grade_record(grade))


@router.get("", response_model=GradeListResponse)
async def list_grades(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """按调用者角色限定范围的成绩列表。"""
    grades = visible_grades(db, current_user)
    return GradeListResponse(
        message="Grades retrieved successfully",
        grades=[grade_record(grade) for grade in grades],
    )


@router.get("/summary", response_model=GradeSummaryResponse)
async def grades_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """按年级汇总的成绩分析，范围与成绩列表一致。"""
    grades = visible_grades(db, current_user)
    return GradeSummaryResponse(
        message="Grade summary generated successfully",
        summaries=summarize_grades(grades),
    )
