# /app/core/errors.py

"""
The error taxonomy shared by every service.

Services raise these exceptions; they never build HTTP responses themselves.
Each class carries the HTTP status it maps to, and `app.main` registers a
single handler that renders any `LibraryError` as `{"message": ...}` with
that status.
"""

from typing import Optional

from fastapi import status


class LibraryError(Exception):
    """Base class for all expected, user-facing failures."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# --- 400: malformed input and business-rule violations ---

class ValidationError(LibraryError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Please provide all required fields"


class ConflictError(LibraryError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class OutOfStockError(LibraryError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "This book is currently out of stock"


class AlreadyBorrowedError(LibraryError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "You have already borrowed this book"


class NotBorrowedError(LibraryError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "You have not borrowed this book"


# --- 401 / 403: identity and access ---

class AuthenticationError(LibraryError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class AuthorizationError(LibraryError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized to view other users' books"


# --- 404 ---

class NotFoundError(LibraryError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


# --- 500: the store could not complete the unit of work ---

class TransactionError(LibraryError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Transaction failed"
