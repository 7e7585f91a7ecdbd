# app/core/exceptions.py
from typing import Optional


class AppError(Exception):
    """Base error carrying the HTTP status it should be rendered with."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationRequired(AppError):
    status_code = 401
    default_message = "Authentication required"


class InvalidCredentials(AuthenticationRequired):
    default_message = "Invalid credentials"


class AuthorizationDenied(AppError):
    status_code = 403
    default_message = "Admin access required"


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class DuplicateResourceError(AppError):
    status_code = 409
    default_message = "Resource already exists"


class DuplicateUserError(DuplicateResourceError):
    default_message = "User already exists"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class UnexpectedError(AppError):
    pass
