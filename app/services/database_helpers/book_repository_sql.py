# /app/services/database_helpers/book_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the Book table.

Repository methods never commit. They flush, so constraint violations
surface inside the caller's transaction, and leave commit/rollback to
`DatabaseService.run_transaction`.
"""

from typing import Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError
from app.db.models.book_models import Book


class BookRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_all_books(self) -> List[Book]:
        stmt = select(Book).order_by(Book.created_at, Book.id).execution_options(populate_existing=True)
        return list(self.db.scalars(stmt))

    def get_book_by_id(self, book_id: str, for_update: bool = False) -> Optional[Book]:
        """
        Fetches a single book. With `for_update` the row stays locked until the
        surrounding transaction ends (ignored by SQLite, which locks the whole
        database on write instead).
        """
        stmt = select(Book).where(Book.id == book_id).execution_options(populate_existing=True)
        if for_update:
            stmt = stmt.with_for_update()
        return self.db.scalars(stmt).first()

    def get_book_by_isbn(self, isbn: str) -> Optional[Book]:
        stmt = select(Book).where(Book.ISBN == isbn).execution_options(populate_existing=True)
        return self.db.scalars(stmt).first()

    def add_book(self, record: Dict) -> Book:
        new_book = Book(**record)
        self.db.add(new_book)
        try:
            self.db.flush()
        except IntegrityError as e:
            # Lost the race on the unique ISBN index.
            raise ConflictError("Book with this ISBN already exists") from e
        return new_book

    def take_copy(self, book: Book) -> bool:
        """
        Decrements the available quantity by one, but only while copies remain.

        The guard lives in the UPDATE itself, so two transactions that both
        read `quantity == 1` cannot both succeed. Returns False when no copy
        was left to take.
        """
        result = self.db.execute(
            update(Book)
            .where(Book.id == book.id, Book.quantity > 0)
            .values(quantity=Book.quantity - 1)
            .execution_options(synchronize_session=False)
        )
        self.db.refresh(book)
        return result.rowcount == 1

    def put_back_copy(self, book: Book) -> None:
        self.db.execute(
            update(Book)
            .where(Book.id == book.id)
            .values(quantity=Book.quantity + 1)
            .execution_options(synchronize_session=False)
        )
        self.db.refresh(book)
