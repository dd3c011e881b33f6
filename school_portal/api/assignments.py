"""作业API（教师权限）。"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import field_validator
from sqlalchemy.orm import Session

from school_portal.db import get_db
from school_portal.models import Assignment, User
from school_portal.schemas.assignments import AssignmentCreatedResponse, AssignmentListResponse
from school_portal.schemas.common import CamelModel
from school_portal.services.projections import assignment_record
from school_portal.api.auth import require_teacher

logger = logging.getLogger(__name__)

router = APIRouter()


class AssignmentCreate(CamelModel):
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        return value


@router.get("", response_model=AssignmentListResponse)
async def list_assignments(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
):
    """全部作业，按截止日期升序，无截止日期的排在最后。"""
    assignments = (
        db.query(Assignment)
        .order_by(Assignment.due_date.is_(None), Assignment.due_date.asc(), Assignment.created_at.asc())
        .all()
    )
    return AssignmentListResponse(
        message="Assignments retrieved successfully",
        assignments=[assignment_record(item) for item in assignments],
    )


@router.post("", response_model=AssignmentCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_assignment(
    data: AssignmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
):
    """创建作业。"""
    assignment = Assignment(
        title=data.title,
        description=data.description,
        due_date=data.due_date,
        created_by=current_user.id,
    )
    db.add(assignment)
    db.commit()
    db.refresh(assignment)

    logger.info("Assignment %s created by %s", assignment.id, current_user.id)
    return AssignmentCreatedResponse(
        message="Assignment created successfully",
        assignment=assignment_record(assignment),
    )
