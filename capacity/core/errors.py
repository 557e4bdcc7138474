"""
统一错误类型

所有业务错误都是同一个 AppError，通过 kind 区分类别；
ERROR_STATUS 是 kind 到 HTTP 状态码的唯一映射表。
"""
import logging
from enum import Enum
from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"


class ErrorKind(str, Enum):
    DATABASE = "database"
    UNAUTHORIZED = "unauthorized"
    INVALID_TOKEN = "invalid_token"
    TOKEN_EXPIRED = "token_expired"
    INVALID_CREDENTIALS = "invalid_credentials"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BAD_REQUEST = "bad_request"
    INTERNAL = "internal"


ERROR_STATUS = {
    ErrorKind.DATABASE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# 这些类别的消息是固定的，不带调用方传入的内容
FIXED_MESSAGES = {
    ErrorKind.UNAUTHORIZED: "Unauthorized",
    ErrorKind.INVALID_TOKEN: "Invalid token",
    ErrorKind.TOKEN_EXPIRED: "Token expired",
    ErrorKind.INVALID_CREDENTIALS: "Invalid credentials",
    ErrorKind.INTERNAL: "An internal error occurred",
}


class AppError(Exception):
    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or FIXED_MESSAGES.get(kind, kind.value)
        super().__init__(f"{kind.value}: {self.message}")

    @property
    def status_code(self) -> int:
        return ERROR_STATUS[self.kind]

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized") -> "AppError":
        return cls(ErrorKind.UNAUTHORIZED, message)

    @classmethod
    def invalid_token(cls) -> "AppError":
        return cls(ErrorKind.INVALID_TOKEN)

    @classmethod
    def token_expired(cls) -> "AppError":
        return cls(ErrorKind.TOKEN_EXPIRED)

    @classmethod
    def invalid_credentials(cls) -> "AppError":
        return cls(ErrorKind.INVALID_CREDENTIALS)

    @classmethod
    def validation(cls, message: str) -> "AppError":
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def not_found(cls, resource: str) -> "AppError":
        return cls(ErrorKind.NOT_FOUND, f"{resource} not found")

    @classmethod
    def conflict(cls, message: str) -> "AppError":
        return cls(ErrorKind.CONFLICT, message)

    @classmethod
    def bad_request(cls, message: str) -> "AppError":
        return cls(ErrorKind.BAD_REQUEST, message)

    @classmethod
    def internal(cls, message: str) -> "AppError":
        return cls(ErrorKind.INTERNAL, message)

    @classmethod
    def database(cls, message: str = "Database error") -> "AppError":
        return cls(ErrorKind.DATABASE, message)


def is_unique_violation(exc: IntegrityError) -> bool:
    """判断是否为唯一约束冲突（PostgreSQL 23505 / SQLite UNIQUE）"""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return "UNIQUE constraint failed" in str(orig)


def from_db_error(exc: SQLAlchemyError, conflict_message: str = "Unique constraint violation") -> AppError:
    """把存储层异常转换为 AppError：唯一冲突 -> CONFLICT，其余 -> DATABASE"""
    if isinstance(exc, IntegrityError) and is_unique_violation(exc):
        return AppError.conflict(conflict_message)
    return AppError.database(str(getattr(exc, "orig", None) or exc))


def error_body(message: str, status_code: int) -> dict:
    return {"error": message, "status": status_code}


def _debug_enabled(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.DEBUG)


def render_app_error(exc: AppError, debug: bool = False) -> JSONResponse:
    """AppError -> JSON 响应"""
    status_code = exc.status_code
    message = exc.message

    if exc.kind == ErrorKind.DATABASE:
        logger.error(f"❌ 数据库错误: {exc.message}")
        if not debug:
            message = "A database error occurred"
        else:
            message = f"Database error: {exc.message}"
    elif exc.kind == ErrorKind.INTERNAL:
        logger.error(f"❌ 内部错误: {exc.message}")
        message = FIXED_MESSAGES[ErrorKind.INTERNAL]

    return JSONResponse(status_code=status_code, content=error_body(message, status_code))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return render_app_error(exc, debug=_debug_enabled(request))


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("未处理的数据库异常")
    return render_app_error(from_db_error(exc), debug=_debug_enabled(request))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    error = AppError.validation("; ".join(messages) or "Invalid request")
    return render_app_error(error)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = "The requested resource does not exist"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message, exc.status_code),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
