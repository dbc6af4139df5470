# /app/models/book_model.py

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class BookCreate(BaseModel):
    """
    The payload for registering a new title.

    Every field is optional at the schema level on purpose: the catalog
    service owns these rules and reports them with its own messages, so a
    missing field becomes a 400 with a readable message instead of a 422.
    """
    title: Optional[str] = None
    author: Optional[str] = None
    ISBN: Optional[str] = None
    quantity: Optional[Any] = Field(default=None, description="Initial number of copies, at least 1.")


class Book(BaseModel):
    """
    The full representation of a Book resource, as it is stored in the
    database and returned by the API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="The unique, server-generated identifier for the book.")
    title: str
    author: str
    ISBN: str
    quantity: int = Field(..., ge=0, description="Copies currently available to borrow.")
    created_at: datetime
    updated_at: datetime
