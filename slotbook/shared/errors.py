"""Application error taxonomy

Every service-level failure is raised as one of these. ``main.py`` registers a
single exception handler that renders them as ``{"detail": message}`` with the
error's HTTP status.
"""


class AppError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError, ValueError):
    # ValueError so pydantic field validators report it as a field error
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(AppError):
    status_code = 401
    default_message = "Invalid credentials"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    # Surfaced as 400 (already booked, email taken)
    status_code = 400
    default_message = "Conflict"


class StoreError(AppError):
    status_code = 500
    default_message = "Database operation failed"
