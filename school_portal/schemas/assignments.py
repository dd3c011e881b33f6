"""作业响应模型。"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from school_portal.schemas.common import CamelModel


class AssignmentRecord(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    created_by: str
    created_at: datetime


class AssignmentCreatedResponse(CamelModel):
    message: str
    assignment: AssignmentRecord


class AssignmentListResponse(CamelModel):
    message: str
    assignments: List[AssignmentRecord]
