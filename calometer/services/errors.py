from fastapi import status


class CalometerError(Exception):
    """Base for errors raised by the calorie-tracking services.

    Each subclass carries the HTTP status the API layer answers with, so
    routers can hand any of them straight to ``handle_exception``.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CalometerError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(CalometerError):
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(CalometerError):
    status_code = status.HTTP_404_NOT_FOUND


class AuthenticationError(CalometerError):
    status_code = status.HTTP_401_UNAUTHORIZED


class StorageError(CalometerError):
    """Opaque persistence failure; the message never reaches the client."""
