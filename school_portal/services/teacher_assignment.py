"""管理员为学生分配班主任与任课教师。

校验顺序：ID 格式 → 学生存在 → 班主任已审核 → 任课教师已审核 →
教师确实教授对应学科。任一步失败都不会修改学生记录；全部通过后
在同一次提交中整体替换 ``class_teacher`` 与 ``subject_teachers``。

同一学生的并发分配请求按"后写入者生效"处理，不加锁。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from sqlalchemy.orm import Session

from school_portal.models import ApprovalStatus, Child, SubjectTeacherSlot, Teacher
from school_portal.services.errors import InvalidInputError, NotFoundError
from school_portal.utils.ids import is_valid_object_id, normalize_object_id
from school_portal.utils.subjects import canonical_subject, teaches_subject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubjectTeacherPair:
    subject: str
    teacher_id: str


class TeacherAssignmentService:
    """封装教师分配的校验与写入逻辑。"""

    def _validate_ids(
        self, student_id: str, class_teacher_id: str, pairs: Sequence[SubjectTeacherPair]
    ) -> None:
        if not is_valid_object_id(student_id):
            raise InvalidInputError(f"Invalid student ID: {student_id}", {"invalidIds": [student_id]})
        if not is_valid_object_id(class_teacher_id):
            raise InvalidInputError(
                f"Invalid class teacher ID: {class_teacher_id}", {"invalidIds": [class_teacher_id]}
            )
        invalid = [pair.teacher_id for pair in pairs if not is_valid_object_id(pair.teacher_id)]
        if invalid:
            raise InvalidInputError(f"Invalid teacher ID: {invalid[0]}", {"invalidIds": invalid})

    def _approved_teachers(self, db: Session, teacher_ids: Sequence[str]) -> Dict[str, Teacher]:
        if not teacher_ids:
            return {}
        teachers = (
            db.query(Teacher)
            .filter(Teacher.id.in_(teacher_ids), Teacher.status == ApprovalStatus.APPROVED)
            .all()
        )
        return {teacher.id: teacher for teacher in teachers}

    def assign(
        self,
        db: Session,
        student_id: str,
        class_teacher_id: str,
        pairs: Sequence[SubjectTeacherPair],
    ) -> Child:
        self._validate_ids(student_id, class_teacher_id, pairs)
        student_id = normalize_object_id(student_id)
        class_teacher_id = normalize_object_id(class_teacher_id)
        pairs = [
            SubjectTeacherPair(subject=pair.subject, teacher_id=normalize_object_id(pair.teacher_id))
            for pair in pairs
        ]

        child = db.get(Child, student_id)
        if child is None:
            raise NotFoundError("Student not found")

        class_teacher = self._approved_teachers(db, [class_teacher_id]).get(class_teacher_id)
        if class_teacher is None:
            raise NotFoundError(
                "Class teacher not found or not approved",
                {"missingTeachers": [class_teacher_id]},
            )

        # 保序去重
        teacher_ids: List[str] = list(dict.fromkeys(pair.teacher_id for pair in pairs))
        teachers = self._approved_teachers(db, teacher_ids)
        missing = [teacher_id for teacher_id in teacher_ids if teacher_id not in teachers]
        if missing:
            raise NotFoundError(
                "One or more subject teachers not found or not approved",
                {"missingTeachers": missing},
            )

        for pair in pairs:
            teacher = teachers[pair.teacher_id]
            if not teaches_subject(teacher.subjects or [], pair.subject):
                raise InvalidInputError(f"Teacher {teacher.id} does not teach {pair.subject}")

        child.class_teacher = class_teacher
        child.subject_teachers = [
            SubjectTeacherSlot(
                position=index,
                subject=canonical_subject(child.subjects or [], pair.subject),
                teacher=teachers[pair.teacher_id],
            )
            for index, pair in enumerate(pairs)
        ]
        db.commit()
        db.refresh(child)
        logger.info(
            "Assigned teachers to child %s: class teacher %s, %d subject slot(s)",
            child.id,
            class_teacher.id,
            len(pairs),
        )
        return child
