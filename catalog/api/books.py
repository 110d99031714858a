"""Book endpoints: public reads, admin-only writes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from catalog.api.auth import require_admin
from catalog.core.database import get_db
from catalog.schemas.auth import CurrentUser
from catalog.schemas.books import (
    BookCreateRequest,
    BookMutationResponse,
    BookOut,
    BookUpdateRequest,
)
from catalog.schemas.common import MessageResponse
from catalog.services import books

# Auth policy:
# - GET    /books:       public
# - GET    /books/{id}:  public
# - POST   /books:       requires admin (require_admin)
# - PUT    /books/{id}:  requires admin (require_admin)
# - DELETE /books/{id}:  requires admin (require_admin)
router = APIRouter()


@router.get("", response_model=list[BookOut])
def list_books(db: Annotated[Session, Depends(get_db)]) -> list[BookOut]:
    """All books, newest first."""
    return [BookOut.model_validate(b) for b in books.list_books(db)]


@router.get("/{book_id}", response_model=BookOut)
def get_book(book_id: str, db: Annotated[Session, Depends(get_db)]) -> BookOut:
    return BookOut.model_validate(books.get_book(db, book_id))


@router.post("", response_model=BookMutationResponse, status_code=status.HTTP_201_CREATED)
def create_book(
    body: BookCreateRequest,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> BookMutationResponse:
    """Add a book. author defaults to "Unknown" and description to ""."""
    book = books.create_book(
        db,
        title=body.title,
        author=body.author,
        description=body.description,
        created_by=admin.id,
    )
    return BookMutationResponse(message="Book added successfully", book=BookOut.model_validate(book))


@router.put("/{book_id}", response_model=BookMutationResponse)
def update_book(
    book_id: str,
    body: BookUpdateRequest,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> BookMutationResponse:
    book = books.update_book(
        db,
        book_id,
        title=body.title,
        author=body.author,
        description=body.description,
    )
    return BookMutationResponse(message="Book updated successfully", book=BookOut.model_validate(book))


@router.delete("/{book_id}", response_model=MessageResponse)
def delete_book(
    book_id: str,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    books.delete_book(db, book_id)
    return MessageResponse(message="Book deleted successfully")
