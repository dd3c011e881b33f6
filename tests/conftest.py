import pytest
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# 必须在导入应用之前设置，避免测试在本地创建数据库文件
os.environ.setdefault("SCHOOL_DATABASE_URL", "sqlite:///:memory:")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from school_portal.config import get_settings
from school_portal.db import Base, get_db
from school_portal.main import app

# Use in-memory SQLite for testing to ensure isolation
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "secret123"


@pytest.fixture(scope="function")
def session():
    """
    Create a fresh database session for each test.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(session):
    """
    Create a TestClient that uses the override_get_db dependency.
    """
    def override_get_db():
        try:
            yield session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(client):
    """已注册的管理员：返回 ``{"user", "token", "headers"}``。"""
    response = client.post(
        "/api/auth/admin/signup",
        json={
            "fullName": "Ada Admin",
            "email": "admin@school.test",
            "phone": "555-0100",
            "password": PASSWORD,
            "adminCode": get_settings().admin_signup_code,
        },
    )
    assert response.status_code == 201
    data = response.json()
    return {"user": data["user"], "token": data["token"], "headers": auth_headers(data["token"])}


@pytest.fixture
def make_teacher(client, admin, session):
    """注册教师，默认由管理员审核通过后重新登录。"""

    def _make(name, subjects, grade="Grade 2", approve=True):
        email = f"{name.lower().replace(' ', '.')}@school.test"
        response = client.post(
            "/api/auth/teacher/signup",
            json={
                "fullName": name,
                "email": email,
                "phone": "555-0200",
                "password": PASSWORD,
                "subjects": subjects,
                "grade": grade,
            },
        )
        assert response.status_code == 201
        user = response.json()["user"]

        from school_portal.models import Teacher
        teacher_id = session.query(Teacher).filter(Teacher.user_id == user["id"]).one().id

        token = response.json()["token"]
        if approve:
            approved = client.post(
                f"/api/admin/teachers/{teacher_id}/status",
                json={"status": "approved"},
                headers=admin["headers"],
            )
            assert approved.status_code == 200
            login = client.post(
                "/api/auth/login",
                json={"email": email, "password": PASSWORD, "role": "teacher"},
            )
            assert login.status_code == 200
            token = login.json()["token"]
        return {
            "id": teacher_id,
            "user": user,
            "email": email,
            "token": token,
            "headers": auth_headers(token),
        }

    return _make


@pytest.fixture
def make_parent(client):
    def _make(name="Pat Parent"):
        email = f"{name.lower().replace(' ', '.')}@family.test"
        response = client.post(
            "/api/auth/signup",
            json={"fullName": name, "email": email, "phone": "555-0300", "password": PASSWORD},
        )
        assert response.status_code == 201
        data = response.json()
        return {
            "user": data["user"],
            "email": email,
            "token": data["token"],
            "headers": auth_headers(data["token"]),
        }

    return _make


@pytest.fixture
def add_child(client):
    def _add(parent, name="Sam Student", grade="Grade 2", subjects=None, age=7):
        response = client.post(
            "/api/parent/children",
            json={
                "fullName": name,
                "age": age,
                "grade": grade,
                "subjects": subjects if subjects is not None else ["Math", "Art", "Music", "Science"],
            },
            headers=parent["headers"],
        )
        assert response.status_code == 201
        return response.json()["child"]

    return _add
