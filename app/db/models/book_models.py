# /app/db/models/book_models.py

"""
This module defines the SQLAlchemy ORM model for the `Book` entity: one
catalog title together with the number of copies currently on the shelf.
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String

from ..base_class import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Book(Base):
    """
    SQLAlchemy model representing a catalog title.

    `quantity` counts copies available right now, not copies owned. It is
    decremented by a borrow and incremented by a return, and the CHECK
    constraint makes a negative stock unrepresentable in the store itself.
    """
    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_books_quantity_non_negative"),)

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    author = Column(String, nullable=False)
    ISBN = Column(String, unique=True, index=True, nullable=False)
    quantity = Column(Integer, nullable=False)

    # Python-side timestamps keep sub-second precision on every backend,
    # which the catalog relies on for insertion ordering.
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)
