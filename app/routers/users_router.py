# /app/routers/users_router.py

from typing import List

from fastapi import APIRouter, Depends

from ..core.deps import get_current_user_id
from ..models.book_model import Book
from ..models.borrow_model import ErrorResponse
from ..services import user_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get(
    "/{user_id}/books",
    response_model=List[Book],
    summary="Get Books Borrowed by a User",
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        403: {"model": ErrorResponse, "description": "Requesting another user's books"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
def get_borrowed_books(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    db: DatabaseService = Depends(get_db_service),
):
    return user_service.list_borrowed_books(
        requesting_user_id=current_user_id, target_user_id=user_id, db=db
    )
