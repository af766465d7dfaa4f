# letter_system/errors.py
from __future__ import annotations

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from letter_system.utils.logger import logger


class LetterSystemError(Exception):
    """Base for errors that end a request with a JSON ``{"error": ...}`` body."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(LetterSystemError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "All fields are required"


class AuthError(LetterSystemError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password"


class NotFoundError(LetterSystemError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Letter not found"


class StoreError(LetterSystemError):
    """Database failure. The message is generic; details go to the log."""

    default_message = "Database error"


class ConflictError(StoreError):
    # Duplicate username; reported like any other insert failure
    default_message = "Database insert error"


def letter_system_error_handler(request: Request, exc: LetterSystemError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    # a non-numeric id names no row, same as an unknown one
    if any(err.get("loc", ("",))[0] == "path" for err in errors):
        return letter_system_error_handler(request, NotFoundError())

    logger.warning(f"Rejected body for {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )
