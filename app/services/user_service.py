# /app/services/user_service.py

import logging
from typing import List

from ..core.errors import AuthorizationError, NotFoundError, ValidationError
from ..models.book_model import Book
from ..models.user_model import User, UserCreate
from .database_service import DatabaseService, Transaction
from .identifiers import USER_PREFIX, is_well_formed, new_id

logger = logging.getLogger(__name__)


def create_user(user_data: UserCreate, db: DatabaseService) -> User:
    """
    Provisions a member record. There is no public route for this; accounts
    come from the identity subsystem, operator scripts and the test-suite.
    """
    name, email = user_data.name.strip(), user_data.email.strip().lower()
    if not name or not email:
        raise ValidationError("Please provide all required fields")

    record = {"id": new_id(USER_PREFIX), "name": name, "email": email}

    def _insert(tx: Transaction) -> User:
        return User.model_validate(tx.users.add_user(record))

    user = db.run_transaction(_insert)
    logger.info("Created user %s", user.id)
    return user


def get_user_by_id(user_id: str, db: DatabaseService) -> User:
    user = db.get_user_by_id(user_id) if is_well_formed(user_id, USER_PREFIX) else None
    if user is None:
        raise NotFoundError("User not found")
    return User.model_validate(user)


def list_borrowed_books(requesting_user_id: str, target_user_id: str, db: DatabaseService) -> List[Book]:
    """
    The books a user currently holds, oldest loan first.

    Users may only look at their own loans; there is no admin override.
    """
    if requesting_user_id != target_user_id:
        raise AuthorizationError()

    # Existence check first so an unknown user is a 404, not an empty list.
    get_user_by_id(target_user_id, db)
    return [Book.model_validate(b) for b in db.get_borrowed_books(target_user_id)]
