"""服务层领域异常。

API 层的异常处理器会把它们映射为 ``{"message": ...}`` 响应。
"""

from typing import Any, Dict, Optional


class DomainError(ValueError):
    """领域错误基类，携带 HTTP 状态码与附加字段。"""

    status_code = 400

    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra or {}

    def to_payload(self) -> Dict[str, Any]:
        return {"message": self.message, **self.extra}


class InvalidInputError(DomainError):
    status_code = 400


class PermissionDeniedError(DomainError):
    status_code = 403


class NotFoundError(DomainError):
    status_code = 404
