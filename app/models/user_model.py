# /app/models/user_model.py

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    name: str
    email: str


class User(BaseModel):
    """A library member together with the ids of the books they hold."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    borrowedBooks: List[str] = Field(default_factory=list)
