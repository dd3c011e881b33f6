"""成绩查询范围与成绩分析。

查询范围按调用者角色决定：

- 教师：自己录入的成绩；
- 家长：自己孩子的成绩，没有孩子时返回空列表；
- 管理员：全部成绩。
"""

from __future__ import annotations

import math
from collections import OrderedDict
from typing import Dict, Iterable, List, Sequence

from sqlalchemy.orm import Session, selectinload

from school_portal.models import Child, Grade, Parent, Teacher, User, UserRole
from school_portal.schemas.grades import (
    GradeLevelSummary,
    ScoreDistribution,
    SubjectBreakdown,
    TeacherPerformance,
)
from school_portal.services.errors import NotFoundError


def visible_grades(db: Session, user: User) -> List[Grade]:
    query = db.query(Grade).options(
        selectinload(Grade.student),
        selectinload(Grade.teacher).selectinload(Teacher.user),
    )

    if user.role == UserRole.TEACHER:
        teacher = db.query(Teacher).filter(Teacher.user_id == user.id).first()
        if teacher is None:
            raise NotFoundError("Teacher record not found")
        query = query.filter(Grade.teacher_id == teacher.id)
    elif user.role == UserRole.PARENT:
        parent = db.query(Parent).filter(Parent.user_id == user.id).first()
        if parent is None:
            raise NotFoundError("Parent record not found")
        child_ids = [row.id for row in db.query(Child.id).filter(Child.parent_id == parent.id)]
        if not child_ids:
            return []
        query = query.filter(Grade.student_id.in_(child_ids))

    return query.order_by(Grade.date.desc()).all()


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def average(scores: Sequence[int]) -> int:
    if not scores:
        return 0
    return round_half_up(sum(scores) / len(scores))


def score_distribution(scores: Iterable[int]) -> ScoreDistribution:
    dist = ScoreDistribution()
    for score in scores:
        if score >= 90:
            dist.excellent += 1
        elif score >= 80:
            dist.good += 1
        elif score >= 70:
            dist.average += 1
        else:
            dist.needs_help += 1
    return dist


def summarize_grades(grades: Iterable[Grade]) -> List[GradeLevelSummary]:
    """按年级汇总成绩：整体统计、分学科统计、教师表现。"""
    by_level: Dict[str, List[Grade]] = OrderedDict()
    for grade in grades:
        by_level.setdefault(grade.grade, []).append(grade)

    summaries: List[GradeLevelSummary] = []
    for level in sorted(by_level):
        rows = by_level[level]
        scores = [row.score for row in rows]

        by_subject: Dict[str, List[int]] = OrderedDict()
        for row in rows:
            by_subject.setdefault(row.subject, []).append(row.score)

        by_teacher: Dict[str, List[Grade]] = OrderedDict()
        for row in rows:
            by_teacher.setdefault(row.teacher_id, []).append(row)

        summaries.append(
            GradeLevelSummary(
                grade=level,
                total_students=len({row.student_id for row in rows}),
                average_score=average(scores),
                highest_score=max(scores),
                lowest_score=min(scores),
                subject_breakdown={
                    subject: SubjectBreakdown(
                        average_score=average(subject_scores),
                        total_tests=len(subject_scores),
                        highest_score=max(subject_scores),
                        lowest_score=min(subject_scores),
                        score_distribution=score_distribution(subject_scores),
                    )
                    for subject, subject_scores in by_subject.items()
                },
                teacher_performance=[
                    TeacherPerformance(
                        teacher_id=teacher_id,
                        teacher_name=teacher_rows[0].teacher.user.full_name,
                        average_score=average([row.score for row in teacher_rows]),
                        total_tests=len(teacher_rows),
                        subjects=list(dict.fromkeys(row.subject for row in teacher_rows)),
                    )
                    for teacher_id, teacher_rows in by_teacher.items()
                ],
            )
        )
    return summaries
