"""School Portal HTTP 客户端。

每个方法对应一个 REST 路由。登录态保存在显式的 :class:`AuthSession`
对象中，由调用方持有和传递，不使用任何全局存储。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

import requests

logger = logging.getLogger(__name__)

_SIGNUP_PATHS = {
    "parent": "/api/auth/signup",
    "teacher": "/api/auth/teacher/signup",
    "admin": "/api/auth/admin/signup",
}


class ApiError(Exception):
    """非 2xx 响应。"""

    def __init__(self, status_code: int, message: str, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}


@dataclass
class AuthSession:
    """当前登录态：令牌与用户信息。"""

    token: Optional[str] = None
    user: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def role(self) -> Optional[str]:
        return self.user.get("role")

    def clear(self) -> None:
        self.token = None
        self.user = {}

    def headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


class SchoolPortalClient:
    """对 REST API 的薄封装。

    ``http`` 可传入任何提供 ``get``/``post`` 的会话对象（默认 ``requests.Session``）。
    收到 401/403 时清空登录态。
    """

    def __init__(
        self,
        base_url: str,
        http: Optional[Any] = None,
        session: Optional[AuthSession] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.http = http if http is not None else requests.Session()
        self.session = session if session is not None else AuthSession()

    # === 内部工具 ===

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _handle(self, response: Any) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if response.status_code >= 400:
            if response.status_code in (401, 403):
                self.session.clear()
            message = payload.get("message", "Request failed") if isinstance(payload, dict) else "Request failed"
            logger.debug("API error %s: %s", response.status_code, message)
            raise ApiError(response.status_code, message, payload if isinstance(payload, dict) else None)
        return payload

    def _get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        response = self.http.get(self._url(path), params=params, headers=self.session.headers())
        return self._handle(response)

    def _post(self, path: str, json: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        response = self.http.post(self._url(path), json=json, headers=self.session.headers())
        return self._handle(response)

    def _remember(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if payload.get("token"):
            self.session.token = payload["token"]
            self.session.user = dict(payload.get("user") or {})
        return payload

    # === 认证 ===

    def signup(
        self,
        full_name: str,
        email: str,
        phone: str,
        password: str,
        role: str = "parent",
        subjects: Optional[Iterable[str]] = None,
        grade: Optional[str] = None,
        admin_code: Optional[str] = None,
    ) -> Dict[str, Any]:
        if role not in _SIGNUP_PATHS:
            raise ValueError(f"Unknown role: {role}")
        body: Dict[str, Any] = {
            "fullName": full_name,
            "email": email,
            "phone": phone,
            "password": password,
        }
        if role == "teacher":
            body["subjects"] = list(subjects or [])
            body["grade"] = grade
        elif role == "admin":
            body["adminCode"] = admin_code
        return self._remember(self._post(_SIGNUP_PATHS[role], body))

    def login(self, email: str, password: str, role: str) -> Dict[str, Any]:
        payload = self._post("/api/auth/login", {"email": email, "password": password, "role": role})
        return self._remember(payload)

    def logout(self) -> None:
        self.session.clear()

    def me(self) -> Dict[str, Any]:
        return self._get("/api/auth/me")

    # === 家长 ===

    def get_children(self) -> List[Dict[str, Any]]:
        return self._get("/api/parent/children")["children"]

    def add_child(self, full_name: str, age: int, grade: str, subjects: Iterable[str]) -> Dict[str, Any]:
        body = {"fullName": full_name, "age": age, "grade": grade, "subjects": list(subjects)}
        return self._post("/api/parent/children", body)["child"]

    # === 教师 ===

    def get_students(self) -> List[Dict[str, Any]]:
        return self._get("/api/teacher/students")["students"]

    def get_parents(self) -> List[Dict[str, Any]]:
        return self._get("/api/teacher/parents")["parents"]

    # === 管理员 ===

    def get_users(self) -> Dict[str, Any]:
        return self._get("/api/admin/users")

    def update_teacher_status(self, teacher_id: str, status: str) -> Dict[str, Any]:
        return self._post(f"/api/admin/teachers/{teacher_id}/status", {"status": status})

    def assign_teachers(
        self,
        student_id: str,
        class_teacher_id: str,
        subject_teachers: Iterable[Mapping[str, str]],
    ) -> Dict[str, Any]:
        body = {
            "studentId": student_id,
            "classTeacherId": class_teacher_id,
            "subjectTeachers": [
                {"subject": item["subject"], "teacherId": item["teacherId"]} for item in subject_teachers
            ],
        }
        return self._post("/api/admin/assign-teachers", body)["child"]

    # === 消息 ===

    def send_message(
        self,
        subject: str,
        content: str,
        type: str,
        recipients: Optional[Iterable[str]] = None,
        grade: Optional[str] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"subject": subject, "content": content, "type": type}
        if recipients is not None:
            body["recipients"] = list(recipients)
        if grade is not None:
            body["grade"] = grade
        return self._post("/api/messages", body)["data"]

    def get_messages(self, type: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"type": type} if type else None
        return self._get("/api/messages", params=params)["messages"]

    def mark_as_read(self, message_id: str) -> Dict[str, Any]:
        return self._post(f"/api/messages/{message_id}/read")

    # === 作业 ===

    def get_assignments(self) -> List[Dict[str, Any]]:
        return self._get("/api/assignments")["assignments"]

    def create_assignment(
        self, title: str, description: Optional[str] = None, due_date: Optional[str] = None
    ) -> Dict[str, Any]:
        body = {"title": title, "description": description, "dueDate": due_date}
        return self._post("/api/assignments", body)["assignment"]

    # === 成绩 ===

    def create_grade(
        self,
        test_title: str,
        subject: str,
        grade: str,
        score: int,
        student_id: str,
        comments: Optional[str] = None,
    ) -> Dict[str, Any]:
        body = {
            "testTitle": test_title,
            "subject": subject,
            "grade": grade,
            "score": score,
            "studentId": student_id,
            "comments": comments,
        }
        return self._post("/api/grades", body)["grade"]

    def get_grades(self) -> List[Dict[str, Any]]:
        return self._get("/api/grades")["grades"]

    def get_grade_summary(self) -> List[Dict[str, Any]]:
        return self._get("/api/grades/summary")["summaries"]
