"""用户认证API：注册、登录与角色鉴权依赖。"""

import logging
import re
import secrets
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import field_validator
from sqlalchemy.orm import Session

from school_portal.config import get_settings
from school_portal.db import get_db
from school_portal.models import ApprovalStatus, Parent, Teacher, User, UserRole
from school_portal.schemas.common import CamelModel
from school_portal.schemas.users import AuthResponse, CurrentUserResponse
from school_portal.services.projections import user_record
from school_portal.services.security import create_token, decode_token, hash_password, verify_password
from school_portal.utils.subjects import clean_subject_list

logger = logging.getLogger(__name__)

router = APIRouter()

_EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")


# === Schemas ===

class SignupRequest(CamelModel):
    full_name: str
    email: str
    phone: str
    password: str

    @field_validator("full_name")
    @classmethod
    def _check_full_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Full name must be at least 2 characters long")
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        value = value.strip().lower()
        if not _EMAIL_RE.match(value):
            raise ValueError("Please enter a valid email")
        return value

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Phone number is required")
        return value

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters long")
        return value


class TeacherSignupRequest(SignupRequest):
    subjects: List[str] = []
    grade: Optional[str] = None


class AdminSignupRequest(SignupRequest):
    admin_code: Optional[str] = None


class LoginRequest(CamelModel):
    email: str
    password: str
    role: UserRole

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()


# === 鉴权依赖 ===

async def get_current_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> User:
    """从 Bearer Token 获取当前用户。

    缺少令牌返回 401；令牌无效、过期或用户不存在返回 403。
    """
    token = None
    if authorization and authorization.startswith("Bearer "):
        token = authorization[7:].strip()
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_token(token)
    user_id = payload.get("id") if payload else None
    user = db.get(User, user_id) if user_id else None
    if user is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired token")
    return user


def require_roles(*roles: UserRole):
    """生成角色白名单依赖。"""

    def _dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
        return current_user

    return _dependency


require_parent = require_roles(UserRole.PARENT)
require_teacher = require_roles(UserRole.TEACHER)
require_admin = require_roles(UserRole.ADMIN)


# === 辅助函数 ===

def _ensure_email_available(db: Session, email: str) -> None:
    if db.query(User.id).filter(User.email == email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")


def _new_user(data: SignupRequest, role: UserRole) -> User:
    return User(
        full_name=data.full_name,
        email=data.email,
        phone=data.phone,
        password_hash=hash_password(data.password),
        role=role,
    )


def _auth_response(message: str, user: User) -> AuthResponse:
    return AuthResponse(
        message=message,
        token=create_token(user.id, user.role.value),
        user=user_record(user),
    )


# === API 端点 ===

@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup_parent(data: SignupRequest, db: Session = Depends(get_db)):
    """家长注册，家长档案自动审核通过。"""
    _ensure_email_available(db, data.email)

    user = _new_user(data, UserRole.PARENT)
    db.add(user)
    db.flush()
    db.add(Parent(user_id=user.id, status=ApprovalStatus.APPROVED))
    db.commit()
    db.refresh(user)

    logger.info("Parent account created: %s", user.id)
    return _auth_response("Parent account created successfully", user)


@router.post("/teacher/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup_teacher(data: TeacherSignupRequest, db: Session = Depends(get_db)):
    """教师注册，需等待管理员审核后才能登录。"""
    subjects = clean_subject_list(data.subjects)
    if not subjects:
        raise HTTPException(status_code=400, detail="At least one subject is required")
    grade = (data.grade or "").strip()
    if not grade:
        raise HTTPException(status_code=400, detail="Grade is required")
    _ensure_email_available(db, data.email)

    user = _new_user(data, UserRole.TEACHER)
    db.add(user)
    db.flush()
    db.add(Teacher(user_id=user.id, subjects=subjects, grade=grade, status=ApprovalStatus.PENDING))
    db.commit()
    db.refresh(user)

    logger.info("Teacher account created and awaiting approval: %s", user.id)
    return _auth_response("Teacher account created successfully. Awaiting admin approval.", user)


@router.post("/admin/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup_admin(data: AdminSignupRequest, db: Session = Depends(get_db)):
    """管理员注册，需提供管理员口令。"""
    expected = get_settings().admin_signup_code
    if not data.admin_code or not secrets.compare_digest(data.admin_code.encode(), expected.encode()):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid administrator code")
    _ensure_email_available(db, data.email)

    user = _new_user(data, UserRole.ADMIN)
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("Administrator account created: %s", user.id)
    return _auth_response("Administrator account created successfully", user)


@router.post("/login", response_model=AuthResponse)
async def login(data: LoginRequest, db: Session = Depends(get_db)):
    """登录：校验邮箱、角色、密码，教师还需已审核。"""
    user = db.query(User).filter(User.email == data.email).first()
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if user.role != data.role:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Incorrect role for this account")

    if not verify_password(data.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if user.role == UserRole.TEACHER:
        teacher = db.query(Teacher).filter(Teacher.user_id == user.id).first()
        if teacher is None or not teacher.is_approved:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Your account is pending approval from the administrator",
            )

    return _auth_response("Login successful", user)


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """获取当前登录用户信息。"""
    return CurrentUserResponse(message="Current user retrieved", user=user_record(current_user))
