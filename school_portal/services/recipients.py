"""消息收件人解析。

收件人在发送时按消息类型一次性计算并写入消息记录：

- individual：请求中给出的用户 ID，必须全部存在；
- class：该年级所有学生的家长、班主任、任课教师对应的用户（去重）；
- announcement：除发送者外的全部用户。
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from sqlalchemy.orm import Session, selectinload

from school_portal.models import Child, MessageType, Parent, SubjectTeacherSlot, Teacher, User
from school_portal.services.errors import InvalidInputError
from school_portal.utils.ids import is_valid_object_id, normalize_object_id


def resolve_individual(db: Session, recipient_ids: Sequence[str]) -> List[User]:
    ids = [normalize_object_id(value) for value in recipient_ids if is_valid_object_id(value)]
    if len(ids) != len(recipient_ids):
        raise InvalidInputError("One or more recipients not found")
    ids = list(dict.fromkeys(ids))
    users = db.query(User).filter(User.id.in_(ids)).all()
    if len(users) != len(ids):
        raise InvalidInputError("One or more recipients not found")
    by_id = {user.id: user for user in users}
    return [by_id[user_id] for user_id in ids]


def resolve_class(db: Session, grade: str) -> List[User]:
    """汇总指定年级学生的相关用户，缺失的关联直接跳过。"""
    children = (
        db.query(Child)
        .options(
            selectinload(Child.parent).selectinload(Parent.user),
            selectinload(Child.class_teacher).selectinload(Teacher.user),
            selectinload(Child.subject_teachers)
            .selectinload(SubjectTeacherSlot.teacher)
            .selectinload(Teacher.user),
        )
        .filter(Child.grade == grade)
        .order_by(Child.created_at.asc())
        .all()
    )

    users: Dict[str, User] = {}

    def _add(user: Optional[User]) -> None:
        if user is not None and user.id not in users:
            users[user.id] = user

    for child in children:
        if child.parent is not None:
            _add(child.parent.user)
        if child.class_teacher is not None:
            _add(child.class_teacher.user)
        for slot in child.subject_teachers:
            if slot.teacher is not None:
                _add(slot.teacher.user)

    return list(users.values())


def resolve_announcement(db: Session, sender_id: str) -> List[User]:
    return db.query(User).filter(User.id != sender_id).order_by(User.created_at.asc()).all()


def resolve_recipients(
    db: Session,
    message_type: MessageType,
    sender_id: str,
    recipient_ids: Optional[Sequence[str]] = None,
    grade: Optional[str] = None,
) -> List[User]:
    if message_type == MessageType.INDIVIDUAL:
        return resolve_individual(db, recipient_ids or [])
    if message_type == MessageType.CLASS:
        return resolve_class(db, grade or "")
    return resolve_announcement(db, sender_id)
