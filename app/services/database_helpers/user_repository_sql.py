# /app/services/database_helpers/user_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the User table and
the borrowed-set association rows that hang off it.
"""

from typing import Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.core.errors import AlreadyBorrowedError, ConflictError
from app.db.models.book_models import Book
from app.db.models.user_model import BorrowedBook, User


class UserRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- User Methods ---

    def get_user_by_id(self, user_id: str, for_update: bool = False) -> Optional[User]:
        # The borrowed-set is reloaded with the row so membership checks never
        # run against a collection cached from an earlier transaction.
        stmt = (
            select(User)
            .where(User.id == user_id)
            .options(selectinload(User.borrowed))
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        return self.db.scalars(stmt).first()

    def add_user(self, record: Dict) -> User:
        new_user = User(**record)
        self.db.add(new_user)
        try:
            self.db.flush()
        except IntegrityError as e:
            raise ConflictError("User with this email already exists") from e
        return new_user

    # --- Borrowed-Set Methods ---

    def has_borrowed(self, user: User, book_id: str) -> bool:
        return any(entry.book_id == book_id for entry in user.borrowed)

    def add_borrowed(self, user: User, book_id: str) -> None:
        user.borrowed.append(BorrowedBook(book_id=book_id))
        try:
            self.db.flush()
        except IntegrityError as e:
            # A concurrent request by the same user committed this pair first.
            raise AlreadyBorrowedError() from e

    def remove_borrowed(self, user: User, book_id: str) -> bool:
        """
        Deletes the reference to `book_id` from the user's borrowed-set.

        The DELETE itself is the membership check: two concurrent returns of
        the same copy cannot both match the row. Returns False when there was
        nothing to remove.
        """
        result = self.db.execute(
            delete(BorrowedBook)
            .where(BorrowedBook.user_id == user.id, BorrowedBook.book_id == book_id)
            .execution_options(synchronize_session=False)
        )
        # Reload the collection so snapshots reflect the deleted row.
        self.db.expire(user, ["borrowed"])
        return result.rowcount == 1

    def get_borrowed_books(self, user_id: str) -> List[Book]:
        """The books referenced by a user's borrowed-set, oldest loan first."""
        stmt = (
            select(Book)
            .join(BorrowedBook, BorrowedBook.book_id == Book.id)
            .where(BorrowedBook.user_id == user_id)
            .order_by(BorrowedBook.borrowed_at, Book.id)
            .execution_options(populate_existing=True)
        )
        return list(self.db.scalars(stmt))
