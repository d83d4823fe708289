"""
SoYummy Service Errors
Errors raised by services and rendered by the application exception handler
"""

from fastapi import status


class SoYummyError(Exception):
    """Base class for errors surfaced to the client with an HTTP status"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(SoYummyError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad Request"


class UnauthorizedError(SoYummyError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"


class NotFoundError(SoYummyError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(SoYummyError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


__all__ = [
    "SoYummyError",
    "BadRequestError",
    "UnauthorizedError",
    "NotFoundError",
    "ConflictError",
]
