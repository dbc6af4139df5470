# /app/services/borrow_service.py

"""
The borrow/return transaction engine.

A borrow or a return touches two rows that must move together: the book's
available quantity and the user's borrowed-set. Each request runs as one
`DatabaseService.run_transaction` body, so every check is made against the
same transaction and all writes commit, or none do.

Borrow:  load book -> in stock? -> load user -> not yet borrowed?
         -> quantity - 1 -> add reference -> commit
Return:  load book -> load user -> remove reference (none? not borrowed)
         -> quantity + 1 -> commit

Rows are read with SELECT ... FOR UPDATE where the backend supports it, and
the decrement itself is guarded (`WHERE quantity > 0`), so concurrent
borrowers of the last copy can never drive quantity negative: the loser gets
OutOfStockError. Returns are guarded the same way: the increment only runs
after the DELETE of the reference matched a row. Any error rolls the whole
transaction back.
"""

import logging

from ..core.errors import AlreadyBorrowedError, NotBorrowedError, NotFoundError, OutOfStockError
from ..db.models.book_models import Book as BookRow
from ..db.models.user_model import User as UserRow
from ..models.book_model import Book
from ..models.borrow_model import BorrowResult
from ..models.user_model import User
from .database_service import DatabaseService, Transaction
from .identifiers import BOOK_PREFIX, USER_PREFIX, is_well_formed

logger = logging.getLogger(__name__)

BORROWED_MESSAGE = "Book borrowed successfully"
RETURNED_MESSAGE = "Book returned successfully"


def _load_book(tx: Transaction, book_id: str) -> BookRow:
    book = tx.books.get_book_by_id(book_id, for_update=True) if is_well_formed(book_id, BOOK_PREFIX) else None
    if book is None:
        raise NotFoundError("Book not found")
    return book


def _load_user(tx: Transaction, user_id: str) -> UserRow:
    user = tx.users.get_user_by_id(user_id, for_update=True) if is_well_formed(user_id, USER_PREFIX) else None
    if user is None:
        raise NotFoundError("User not found")
    return user


def _snapshot(message: str, book: BookRow, user: UserRow) -> BorrowResult:
    return BorrowResult(message=message, book=Book.model_validate(book), user=User.model_validate(user))


def borrow_book(user_id: str, book_id: str, db: DatabaseService) -> BorrowResult:
    """Checks one copy of `book_id` out to `user_id`."""

    def _borrow(tx: Transaction) -> BorrowResult:
        book = _load_book(tx, book_id)
        if book.quantity <= 0:
            raise OutOfStockError()

        user = _load_user(tx, user_id)
        if tx.users.has_borrowed(user, book_id):
            raise AlreadyBorrowedError()

        if not tx.books.take_copy(book):
            # Another transaction took the last copy after we read it.
            raise OutOfStockError()
        tx.users.add_borrowed(user, book_id)
        return _snapshot(BORROWED_MESSAGE, book, user)

    try:
        result = db.run_transaction(_borrow)
    except (NotFoundError, OutOfStockError, AlreadyBorrowedError) as e:
        logger.info("Borrow of %s by %s rejected: %s", book_id, user_id, e.message)
        raise
    logger.info("User %s borrowed %s (%d left)", user_id, book_id, result.book.quantity)
    return result


def return_book(user_id: str, book_id: str, db: DatabaseService) -> BorrowResult:
    """Checks the copy of `book_id` held by `user_id` back in."""

    def _return(tx: Transaction) -> BorrowResult:
        book = _load_book(tx, book_id)
        user = _load_user(tx, user_id)
        if not tx.users.remove_borrowed(user, book_id):
            raise NotBorrowedError()

        tx.books.put_back_copy(book)
        return _snapshot(RETURNED_MESSAGE, book, user)

    try:
        result = db.run_transaction(_return)
    except (NotFoundError, NotBorrowedError) as e:
        logger.info("Return of %s by %s rejected: %s", book_id, user_id, e.message)
        raise
    logger.info("User %s returned %s (%d available)", user_id, book_id, result.book.quantity)
    return result
