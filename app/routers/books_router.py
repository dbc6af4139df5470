# /app/routers/books_router.py

from typing import List

from fastapi import APIRouter, Depends, status

from ..models import book_model
from ..models.borrow_model import ErrorResponse
from ..services import book_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


# TODO: restrict book creation to librarians once the identity subsystem exposes roles.
@router.post(
    "",
    response_model=book_model.Book,
    status_code=status.HTTP_201_CREATED,
    summary="Add a New Book",
    responses={400: {"model": ErrorResponse, "description": "Missing fields, bad quantity or duplicate ISBN"}},
)
def create_book(book_create: book_model.BookCreate, db: DatabaseService = Depends(get_db_service)):
    return book_service.create_book(book_data=book_create, db=db)


@router.get("", response_model=List[book_model.Book], summary="Get All Books")
def get_all_books(db: DatabaseService = Depends(get_db_service)):
    return book_service.get_all_books(db=db)


@router.get(
    "/{book_id}",
    response_model=book_model.Book,
    summary="Get a Single Book",
    responses={404: {"model": ErrorResponse, "description": "Book not found"}},
)
def get_book_by_id(book_id: str, db: DatabaseService = Depends(get_db_service)):
    return book_service.get_book_by_id(book_id=book_id, db=db)
