"""写入演示数据：管理员、已审核教师、家长与孩子，并完成教师分配。"""
import sys
from pathlib import Path

# 添加项目根目录到 path
sys.path.insert(0, str(Path(__file__).parent.parent))

from school_portal.db import Base, engine, session_scope
from school_portal.models import (
    ApprovalStatus,
    Child,
    Parent,
    SubjectTeacherSlot,
    Teacher,
    User,
    UserRole,
)
from school_portal.services.security import hash_password
from school_portal.services.teacher_assignment import SubjectTeacherPair, TeacherAssignmentService

DEMO_PASSWORD = "password123"

TEACHERS = [
    ("Grace Hopper", "grace@school.test", ["Math", "Science"], "Grade 2"),
    ("Ada Lovelace", "ada@school.test", ["Math", "Music"], "Grade 2"),
    ("Frida Kahlo", "frida@school.test", ["Art"], "Grade 2"),
]

CHILDREN = [
    ("Lily Parker", 7, "Grade 2", ["Math", "Art", "Music", "Science"]),
    ("Max Parker", 9, "Grade 4", ["Math", "Art", "Music", "Science"]),
]


def _user(full_name, email, role):
    return User(
        full_name=full_name,
        email=email,
        phone="555-0100",
        password_hash=hash_password(DEMO_PASSWORD),
        role=role,
    )


def seed():
    print("=" * 50)
    print("写入 School Portal 演示数据")
    print("=" * 50)

    Base.metadata.create_all(bind=engine)

    with session_scope() as db:
        if db.query(User).count():
            print("\n数据库已有用户，跳过写入")
            return

        # 1. 管理员
        print("\n[1/4] 创建管理员...")
        admin = _user("Site Admin", "admin@school.test", UserRole.ADMIN)
        db.add(admin)
        db.flush()
        print(f"  ✓ {admin.email}")

        # 2. 教师（直接审核通过）
        print("\n[2/4] 创建教师...")
        teachers = []
        for full_name, email, subjects, grade in TEACHERS:
            user = _user(full_name, email, UserRole.TEACHER)
            db.add(user)
            db.flush()
            teacher = Teacher(
                user_id=user.id,
                subjects=subjects,
                grade=grade,
                status=ApprovalStatus.APPROVED,
                approved_by=admin.id,
            )
            db.add(teacher)
            teachers.append(teacher)
            print(f"  ✓ {email} ({', '.join(subjects)})")
        db.flush()

        # 3. 家长与孩子
        print("\n[3/4] 创建家长与孩子...")
        parent_user = _user("Pat Parker", "parent@school.test", UserRole.PARENT)
        db.add(parent_user)
        db.flush()
        parent = Parent(user_id=parent_user.id, status=ApprovalStatus.APPROVED)
        db.add(parent)
        db.flush()
        children = []
        for full_name, age, grade, subjects in CHILDREN:
            child = Child(
                full_name=full_name,
                age=age,
                grade=grade,
                subjects=subjects,
                parent_id=parent.id,
                subject_teachers=[
                    SubjectTeacherSlot(position=index, subject=subject)
                    for index, subject in enumerate(subjects)
                ],
            )
            db.add(child)
            children.append(child)
            print(f"  ✓ {full_name} ({grade})")

        # 4. 给第一个孩子分配教师
        print("\n[4/4] 分配教师...")
        db.flush()
        grace, ada, frida = teachers
        lily = TeacherAssignmentService().assign(
            db,
            student_id=children[0].id,
            class_teacher_id=grace.id,
            pairs=[
                SubjectTeacherPair("Math", ada.id),
                SubjectTeacherPair("Art", frida.id),
                SubjectTeacherPair("Music", ada.id),
                SubjectTeacherPair("Science", grace.id),
            ],
        )
        print(f"  ✓ {lily.full_name}: 班主任 {TEACHERS[0][0]}")

    print("\n" + "=" * 50)
    print(f"完成，所有演示账号密码均为 {DEMO_PASSWORD}")
    print("=" * 50)


if __name__ == "__main__":
    seed()
