"""
Custom exceptions and error handlers for consistent error responses.

Provides standardized error codes and global exception handlers. Every error
body follows the response envelope: {data, status, message, error_code, details}.
"""

import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException
from sqlalchemy.exc import IntegrityError
from typing import Any, Dict, Optional

logger = logging.getLogger("cort.errors")


class AppException(Exception):
    """Base application exception."""
    
    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers
        super().__init__(message)


class AuthenticationError(AppException):
    """Raised for authentication failures (missing/invalid token, unknown or inactive user)."""
    
    def __init__(self, message: str = "Authentication failed"):
        super().__init__(
            message=message,
            error_code="ERR_AUTH_001",
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InsufficientPermissionsError(AppException):
    """Raised when user doesn't have permission to perform an action."""
    
    def __init__(self, message: str = "Insufficient permissions", details: Dict[str, Any] = None):
        super().__init__(
            message=message,
            error_code="ERR_PERM_001",
            status_code=status.HTTP_403_FORBIDDEN,
            details=details
        )


class ResourceNotFoundError(AppException):
    """Raised when requested resource is not found."""
    
    def __init__(self, message: str, resource: str = None, resource_id: Any = None):
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "id": resource_id} if resource else None
        )


class ConflictError(AppException):
    """Raised when a unique value (email, phone, plate number) is already taken."""
    
    def __init__(self, message: str, field: str = None):
        super().__init__(
            message=message,
            error_code="ERR_CONFLICT_001",
            status_code=status.HTTP_409_CONFLICT,
            details={"field": field} if field else None
        )


class InvalidStateError(AppException):
    """Raised when the current state of the data forbids the operation."""
    
    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="ERR_STATE_001",
            status_code=status.HTTP_400_BAD_REQUEST
        )


class InvalidInputError(AppException):
    """Raised for malformed input that passed schema validation."""
    
    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(
            message=message,
            error_code="ERR_INPUT_001",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


def _error_body(status_code: int, message: str, error_code: str, details: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "data": None,
        "status": status_code,
        "message": message,
        "error_code": error_code,
        "details": details,
    }


# Global Exception Handlers

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handler for custom application exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(_error_body(exc.status_code, exc.message, exc.error_code, exc.details)),
        headers=exc.headers,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for FastAPI HTTPException with standardized format."""
    # Map status code to error code
    error_code_map = {
        400: "ERR_BAD_REQUEST",
        401: "ERR_UNAUTHORIZED",
        403: "ERR_FORBIDDEN",
        404: "ERR_NOT_FOUND",
        405: "ERR_METHOD_NOT_ALLOWED",
        409: "ERR_CONFLICT",
        500: "ERR_INTERNAL_SERVER"
    }
    
    error_code = error_code_map.get(exc.status_code, "ERR_UNKNOWN")
    
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.detail, error_code, {}),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for Pydantic validation errors (malformed body, query or path)."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            status.HTTP_400_BAD_REQUEST,
            "Validation error",
            "ERR_VALIDATION",
            {"errors": jsonable_encoder(exc.errors())},
        ),
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """
    Handler for storage-level constraint violations.
    
    Unique pre-checks are advisory; two concurrent writes with the same key
    end up here when the database rejects the second one.
    """
    logger.warning("Integrity constraint violated on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=_error_body(
            status.HTTP_409_CONFLICT,
            "Resource already exists with the same values",
            "ERR_CONFLICT_002",
            {},
        ),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for unhandled exceptions."""
    logger.exception("Unhandled exception: %s", type(exc).__name__, exc_info=exc)
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An internal server error occurred",
            "ERR_INTERNAL_SERVER",
            {},
        ),
    )
