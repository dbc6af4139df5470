# /app/services/book_service.py

"""
This service module is the business logic layer for the book catalog.

It validates new titles, enforces ISBN uniqueness and quantity rules, and
turns stored rows into API models. Books are created here and never deleted;
their quantity is only ever changed by `borrow_service`.
"""

import logging
from typing import Any, List

from ..core.errors import ConflictError, NotFoundError, ValidationError
from ..models.book_model import Book, BookCreate
from .database_service import DatabaseService, Transaction
from .identifiers import BOOK_PREFIX, is_well_formed, new_id

logger = logging.getLogger(__name__)

# Largest value a PostgreSQL INTEGER column holds.
MAX_QUANTITY = 2_147_483_647


# --- HELPER FUNCTIONS ---

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coerce_quantity(value: Any) -> int:
    """
    Accepts ints and integral floats (`3.0`); rejects booleans, strings and
    fractional numbers.
    """
    if isinstance(value, bool):
        raise ValidationError("Quantity must be an integer")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        raise ValidationError("Quantity must be an integer")
    return value


def _validate(book_data: BookCreate) -> dict:
    if any(_is_blank(getattr(book_data, field)) for field in ("title", "author", "ISBN", "quantity")):
        raise ValidationError("Please provide all required fields")

    quantity = _coerce_quantity(book_data.quantity)
    if quantity < 1:
        raise ValidationError("New books must have at least 1 copy")
    if quantity > MAX_QUANTITY:
        raise ValidationError(f"Quantity must not exceed {MAX_QUANTITY}")

    return {
        "title": book_data.title.strip(),
        "author": book_data.author.strip(),
        "ISBN": book_data.ISBN.strip(),
        "quantity": quantity,
    }


# --- PUBLIC SERVICE FUNCTIONS ---

def create_book(book_data: BookCreate, db: DatabaseService) -> Book:
    """Registers a new title with its initial stock."""
    record = _validate(book_data)
    record["id"] = new_id(BOOK_PREFIX)

    def _insert(tx: Transaction) -> Book:
        if tx.books.get_book_by_isbn(record["ISBN"]) is not None:
            raise ConflictError("Book with this ISBN already exists")
        return Book.model_validate(tx.books.add_book(record))

    book = db.run_transaction(_insert)
    logger.info("Created book %s (ISBN %s, quantity %d)", book.id, book.ISBN, book.quantity)
    return book


def get_all_books(db: DatabaseService) -> List[Book]:
    return [Book.model_validate(b) for b in db.get_all_books()]


def get_book_by_id(book_id: str, db: DatabaseService) -> Book:
    """Raises NotFoundError for unknown and malformed ids alike."""
    if not is_well_formed(book_id, BOOK_PREFIX):
        raise NotFoundError("Book not found")
    book = db.get_book_by_id(book_id)
    if book is None:
        raise NotFoundError("Book not found")
    return Book.model_validate(book)
