"""
Shared exceptions for service layer operations.

Every error a service raises on purpose is an AppError carrying the HTTP status the
API layer should answer with. Entity-specific subclasses live next to the service
that raises them (e.g. TagNotFoundError in tag_service).
"""


class AppError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class InputValidationError(AppError):
    """Raised when caller input is missing or malformed."""

    status_code = 400


class AuthenticationError(AppError):
    """Raised when the request carries no user identity."""

    status_code = 401


class NotFoundError(AppError):
    """Raised when a referenced id does not exist for the user."""

    status_code = 404


class StoreError(AppError):
    """
    Raised when the database rejects or fails a statement.

    400 when the failure is attributable to the caller's input (constraint or data
    errors), 500 otherwise.
    """

    status_code = 500
