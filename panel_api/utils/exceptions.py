"""Custom exceptions and error handlers"""
from typing import Any, Optional
import traceback

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from panel_api.utils.logger import logger


class PanelError(Exception):
    """Base class for errors that map onto an HTTP status"""
    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "BAD_REQUEST"

    def __init__(self, message: str, detail: Optional[Any] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class BadRequestError(PanelError):
    """Raised when query or path parameters are unusable"""
    pass


class ViewValidationError(PanelError):
    """Raised when a view model fails its create/update rules"""
    code = "VALIDATION_ERROR"


class UserNotFoundError(PanelError):
    """Raised when no user exists with the requested username"""
    status_code = status.HTTP_404_NOT_FOUND
    code = "USER_NOT_FOUND"

    def __init__(self, username: str):
        super().__init__("no user with username", detail={"username": username})


class UserExistsError(PanelError):
    """Raised when a username or email is already taken"""
    status_code = status.HTTP_409_CONFLICT
    code = "USER_EXISTS"


def error_response(
    status_code: int,
    code: str,
    message: str,
    detail: Optional[Any] = None,
    headers: Optional[dict] = None
) -> JSONResponse:
    """Build a failed response in the shared envelope format"""
    error = {"code": code, "msg": message}
    if detail is not None:
        error["detail"] = detail
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": False, "error": error}),
        headers=headers
    )


async def panel_exception_handler(request: Request, exc: PanelError):
    """Handle application errors"""
    logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return error_response(exc.status_code, exc.code, exc.message, exc.detail)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request parsing errors (bad JSON, wrong types, non-numeric query values)"""
    errors = exc.errors()
    logger.warning(f"Validation error on {request.url.path}: {errors}")
    detail = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg"),
            "type": error.get("type")
        }
        for error in errors
    ]
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Request validation failed",
        detail
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions raised by dependencies (authentication, scopes, routing)"""
    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
    else:
        logger.warning(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
    return error_response(
        exc.status_code,
        f"HTTP_{exc.status_code}",
        str(exc.detail),
        headers=getattr(exc, "headers", None)
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.error(f"Unhandled exception on {request.url.path}: {str(exc)}\n{traceback.format_exc()}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred. Please try again later."
    )
