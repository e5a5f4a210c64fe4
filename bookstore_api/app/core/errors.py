"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to so that endpoints can
translate it into an ``HTTPException`` without string matching.
"""

from fastapi import status


class BookstoreError(Exception):
    """Base class for all catalog service errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(BookstoreError):
    """Required fields are missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(BookstoreError):
    """The username is already registered."""

    status_code = status.HTTP_409_CONFLICT


class UnauthorizedError(BookstoreError):
    """Login credentials did not match a registered user."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(BookstoreError):
    """Unknown ISBN, or no review by the requesting user."""

    status_code = status.HTTP_404_NOT_FOUND


class StorageError(BookstoreError):
    """The catalog file could not be read or written."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
