# /app/models/borrow_model.py

from pydantic import BaseModel

from .book_model import Book
from .user_model import User


class BorrowResult(BaseModel):
    """
    Defines the data contract for POST /api/borrow/{bookId} and
    POST /api/return/{bookId}: both sides of the committed transition.
    """
    message: str
    book: Book
    user: User


class ErrorResponse(BaseModel):
    message: str
