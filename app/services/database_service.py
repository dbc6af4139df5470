# /app/services/database_service.py

"""
The single entry point to the durable store.

`DatabaseService` wraps one SQLAlchemy session. Read helpers delegate
straight to the repositories; every write goes through `run_transaction`,
which is the only place in the application that commits or rolls back.
"""

import logging
from typing import Callable, Generator, List, Optional, TypeVar

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import LibraryError, TransactionError
from app.db.database import get_db
from app.db.models.book_models import Book
from app.db.models.user_model import User

from .database_helpers.book_repository_sql import BookRepositorySQL
from .database_helpers.user_repository_sql import UserRepositorySQL

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Transaction:
    """The repositories bound to one open transaction."""

    def __init__(self, db_session: Session):
        self.books = BookRepositorySQL(db_session)
        self.users = UserRepositorySQL(db_session)


class DatabaseService:
    def __init__(self, db_session: Session):
        self.db = db_session
        self.book_repo = BookRepositorySQL(db_session)
        self.user_repo = UserRepositorySQL(db_session)

    def run_transaction(self, body: Callable[[Transaction], T]) -> T:
        """
        Runs `body` inside one database transaction and commits it.

        Any exception raised by `body` rolls the transaction back before it
        propagates, so a failed unit of work never leaves partial writes.
        Business errors (`LibraryError`) propagate unchanged; store failures
        such as lock timeouts, serialization conflicts or a failed commit are
        reported as `TransactionError`. Nothing is retried.
        """
        if self.db.in_transaction():
            # Close the implicit read transaction left by earlier queries.
            self.db.rollback()
        # Rows cached by earlier work in this session may be stale.
        self.db.expire_all()
        try:
            with self.db.begin():
                return body(Transaction(self.db))
        except LibraryError:
            raise
        except SQLAlchemyError as e:
            logger.warning("Transaction rolled back: %s", e.__class__.__name__, exc_info=True)
            raise TransactionError() from e

    # --- BOOK METHODS (DELEGATED) ---
    def get_all_books(self) -> List[Book]: return self.book_repo.get_all_books()
    def get_book_by_id(self, book_id: str) -> Optional[Book]: return self.book_repo.get_book_by_id(book_id)

    # --- USER METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str) -> Optional[User]: return self.user_repo.get_user_by_id(user_id)
    def get_borrowed_books(self, user_id: str) -> List[Book]: return self.user_repo.get_borrowed_books(user_id)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to the request's session."""
    yield DatabaseService(db_session=db)
