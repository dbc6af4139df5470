# /app/db/base.py

# Central registry for all SQLAlchemy models. Importing them here guarantees
# that Base.metadata knows every table before create_all() runs.

from .base_class import Base

from .models.book_models import Book
from .models.user_model import User, BorrowedBook
