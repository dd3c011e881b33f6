"""角色、审核状态与消息类型枚举。"""

import enum


class UserRole(str, enum.Enum):
    """用户角色枚举。创建后不可变更。"""
    PARENT = "parent"
    TEACHER = "teacher"
    ADMIN = "admin"


class ApprovalStatus(str, enum.Enum):
    """账号审核状态。

    家长注册即自动通过；教师需管理员审核。
    """
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class MessageType(str, enum.Enum):
    """消息类型，决定收件人的解析方式。"""
    INDIVIDUAL = "individual"      # 指定用户
    CLASS = "class"                # 某年级的家长与任课教师
    ANNOUNCEMENT = "announcement"  # 全校广播
