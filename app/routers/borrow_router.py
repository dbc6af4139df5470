# /app/routers/borrow_router.py

"""
Borrow and return endpoints. Both are protected: the acting user is always
the one named by the bearer token, never a path or body parameter.
"""

from fastapi import APIRouter, Depends

from ..core.deps import get_current_user_id
from ..models.borrow_model import BorrowResult, ErrorResponse
from ..services import borrow_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Business rule violated"},
    401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    404: {"model": ErrorResponse, "description": "Book or user not found"},
    500: {"model": ErrorResponse, "description": "Transaction failed"},
}


@router.post("/borrow/{book_id}", response_model=BorrowResult, summary="Borrow a Book", responses=_ERRORS)
def borrow_book(
    book_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseService = Depends(get_db_service),
):
    return borrow_service.borrow_book(user_id=user_id, book_id=book_id, db=db)


@router.post("/return/{book_id}", response_model=BorrowResult, summary="Return a Book", responses=_ERRORS)
def return_book(
    book_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseService = Depends(get_db_service),
):
    return borrow_service.return_book(user_id=user_id, book_id=book_id, db=db)
