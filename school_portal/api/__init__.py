"""API 路由包入口。"""

from fastapi import APIRouter

from school_portal.api import admin, assignments, auth, grades, messages, parent, teacher

router = APIRouter(prefix="/api")

# 注册子路由
router.include_router(auth.router, prefix="/auth", tags=["认证"])
router.include_router(parent.router, prefix="/parent", tags=["家长"])
router.include_router(teacher.router, prefix="/teacher", tags=["教师"])
router.include_router(admin.router, prefix="/admin", tags=["管理员"])
router.include_router(messages.router, prefix="/messages", tags=["消息"])
router.include_router(assignments.router, prefix="/assignments", tags=["作业"])
router.include_router(grades.router, prefix="/grades", tags=["成绩"])
