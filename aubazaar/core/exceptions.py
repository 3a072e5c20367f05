"""
Domain errors raised by services and the auth gate.
Each carries the HTTP status it maps to; handlers in main.py render {"error": message}.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that are safe to show to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Something went wrong!"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class PayloadTooLarge(AppError):
    # Upload errors are reported as 400 like any other bad upload
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "File too large"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access token required"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already exists"


class InternalError(AppError):
    default_message = "Internal server error"
