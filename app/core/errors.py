"""
Application errors and their HTTP mapping.

Services and repositories raise AppError subclasses; the handler registered
by register_exception_handlers() renders them as
{"success": false, "error": {"code", "message", "data"?}}.
"""
import enum
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorCode(str, enum.Enum):
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_FORMAT = "INVALID_FORMAT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    RESOURCE_EXISTS = "RESOURCE_EXISTS"
    DATABASE_ERROR = "DATABASE_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    SESSION_INVALID = "SESSION_INVALID"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    FORBIDDEN = "FORBIDDEN"


class AppError(Exception):
    status_code = 500
    code = ErrorCode.DATABASE_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        status_code: Optional[int] = None,
        data: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.data = data

    def to_dict(self) -> dict:
        error = {"code": self.code.value, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return {"success": False, "error": error}


class MissingFieldError(AppError):
    status_code = 400
    code = ErrorCode.MISSING_FIELD


class InvalidInputError(AppError):
    status_code = 400
    code = ErrorCode.INVALID_INPUT


class InvalidFormatError(AppError):
    status_code = 400
    code = ErrorCode.INVALID_FORMAT


class ValidationError(AppError):
    """Business rule violation (password policy, plan size, allergens)."""
    status_code = 400
    code = ErrorCode.VALIDATION_ERROR


class ResourceNotFoundError(AppError):
    status_code = 404
    code = ErrorCode.RESOURCE_NOT_FOUND


class ResourceExistsError(AppError):
    status_code = 409
    code = ErrorCode.RESOURCE_EXISTS


class StorageError(AppError):
    status_code = 500
    code = ErrorCode.DATABASE_ERROR


class UnauthorizedError(AppError):
    status_code = 401
    code = ErrorCode.UNAUTHORIZED


class ForbiddenError(AppError):
    status_code = 403
    code = ErrorCode.FORBIDDEN


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: [{exc.code.value}] {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: [{exc.code.value}] {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema failures (missing fields, unparsable values) share the INVALID_INPUT envelope."""
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path")),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    first = details[0] if details else {"field": "", "message": "Invalid request"}
    message = f"{first['field']}: {first['message']}" if first["field"] else first["message"]
    return await app_error_handler(request, InvalidInputError(message, data=details))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
