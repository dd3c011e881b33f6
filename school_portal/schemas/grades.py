"""成绩记录与成绩分析的响应模型。"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from school_portal.schemas.common import CamelModel


class GradeStudentRef(CamelModel):
    id: str
    full_name: str
    grade: str


class GradeTeacherRef(CamelModel):
    id: str
    full_name: str


class GradeRecord(CamelModel):
    id: str
    test_title: str
    subject: str
    grade: str
    score: int
    comments: Optional[str] = None
    date: datetime
    student: GradeStudentRef
    teacher: GradeTeacherRef


class GradeCreatedResponse(CamelModel):
    message: str
    grade: GradeRecord


class GradeListResponse(CamelModel):
    message: str
    grades: List[GradeRecord]


# === 成绩分析 ===

class ScoreDistribution(CamelModel):
    excellent: int = 0   # 90-100
    good: int = 0        # 80-89
    average: int = 0     # 70-79
    needs_help: int = 0  # <70


class SubjectBreakdown(CamelModel):
    average_score: int
    total_tests: int
    highest_score: int
    lowest_score: int
    score_distribution: ScoreDistribution


class TeacherPerformance(CamelModel):
    teacher_id: str
    teacher_name: str
    average_score: int
    total_tests: int
    subjects: List[str]


class GradeLevelSummary(CamelModel):
    grade: str
    total_students: int
    average_score: int
    highest_score: int
    lowest_score: int
    subject_breakdown: Dict[str, SubjectBreakdown]
    teacher_performance: List[TeacherPerformance]


class GradeSummaryResponse(CamelModel):
    message: str
    summaries: List[GradeLevelSummary]
