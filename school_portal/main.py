"""FastAPI 入口：应用工厂、异常映射与数据库表初始化。"""

import logging
import re
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from school_portal import __version__
from school_portal.api import router as api_router
from school_portal.config import get_settings
from school_portal.db import Base, engine
from school_portal.services.errors import DomainError

logger = logging.getLogger(__name__)

_UNIQUE_FIELD_RE = re.compile(r"(?:UNIQUE constraint failed: \w+\.(\w+)|Key \((\w+)\)=)")

_VALUE_ERROR_PREFIX = "Value error, "


def _format_validation_error(error: Dict[str, Any]) -> str:
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc)
    if error.get("type") == "missing":
        return f"{field} is required" if field else "Request body is required"
    message = error.get("msg", "Invalid value")
    if message.startswith(_VALUE_ERROR_PREFIX):
        return message[len(_VALUE_ERROR_PREFIX):]
    return f"{field}: {message}" if field else message


def _unique_field_message(exc: IntegrityError) -> str:
    match = _UNIQUE_FIELD_RE.search(str(exc.orig))
    field = next((group for group in match.groups() if group), None) if match else None
    if not field:
        return "Duplicate value"
    return f"{field[0].upper()}{field[1:]} already exists"


def register_exception_handlers(app: FastAPI) -> None:
    """把各类异常统一为 ``{"message": ...}`` 响应。"""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc.detail, dict):
            content = exc.detail
        else:
            content = {"message": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        messages = list(dict.fromkeys(_format_validation_error(err) for err in exc.errors()))
        return JSONResponse(status_code=400, content={"message": ". ".join(messages)})

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        if "unique" not in str(exc.orig).lower():
            logger.exception("Integrity error on %s %s", request.method, request.url.path)
            return JSONResponse(status_code=500, content={"message": "Internal server error"})
        return JSONResponse(status_code=400, content={"message": _unique_field_message(exc)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app() -> FastAPI:
    """应用工厂，便于测试与拓展路由。"""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title="School Portal API", version=__version__)
    register_exception_handlers(app)
    app.include_router(api_router)

    @app.on_event("startup")
    def init_models() -> None:
        """启动时确保表存在。"""

        Base.metadata.create_all(bind=engine)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"message": "ok", "status": "ok"}

    return app


app = create_app()
