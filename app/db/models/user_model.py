# /app/db/models/user_model.py

"""
This module defines the SQLAlchemy ORM models for the `User` entity and the
`BorrowedBook` association that forms a user's borrowed-set.
"""

from datetime import datetime, timezone
from typing import List

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from ..base_class import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    SQLAlchemy model representing a library member.

    Users are provisioned by the identity subsystem; this service only ever
    changes their borrowed-set.
    """
    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    # Ordered oldest-first so the API shows books in the order they were taken.
    # delete-orphan means removing an entry from this list deletes its row.
    borrowed = relationship(
        "BorrowedBook",
        back_populates="user",
        order_by="BorrowedBook.borrowed_at",
        cascade="all, delete-orphan",
    )

    @property
    def borrowedBooks(self) -> List[str]:
        """The borrowed-set as a list of book ids."""
        return [entry.book_id for entry in self.borrowed]


class BorrowedBook(Base):
    """
    One checked-out copy: the link between a user and a book.

    The composite primary key makes the borrowed-set a true set, so the
    store rejects a second reference to the same book for the same user.
    """
    __tablename__ = "borrowed_books"  # Override automatic pluralization

    user_id = Column(String, ForeignKey("users.id"), primary_key=True)
    book_id = Column(String, ForeignKey("books.id"), primary_key=True, index=True)
    borrowed_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    user = relationship("User", back_populates="borrowed")
