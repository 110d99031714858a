"""Book repository: plain CRUD over the books table."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from catalog.core.errors import NotFound, ValidationError
from catalog.core.security import utf8_length
from catalog.models.book import AUTHOR_MAX_LEN, DEFAULT_AUTHOR, TITLE_MAX_LEN, Book

logger = logging.getLogger(__name__)

BOOK_NOT_FOUND = "Book not found"


def _check_text(title: str | None, author: str | None, description: str | None) -> None:
    """Reject text the store cannot hold: over-long title/author or unencodable characters."""
    for value in (title, author, description):
        if value is not None and utf8_length(value) is None:
            raise ValidationError("Fields must be valid UTF-8 text")
    if title is not None and len(title) > TITLE_MAX_LEN:
        raise ValidationError(f"Title must be at most {TITLE_MAX_LEN} characters")
    if author is not None and len(author) > AUTHOR_MAX_LEN:
        raise ValidationError(f"Author must be at most {AUTHOR_MAX_LEN} characters")


def list_books(db: Session) -> list[Book]:
    """All books, newest first."""
    return list(db.execute(select(Book).order_by(Book.created_at.desc(), Book.id)).scalars())


def get_book(db: Session, book_id: str) -> Book:
    """Return the book or raise NotFound. Ids that could never exist are simply not found."""
    book = db.get(Book, book_id)
    if book is None:
        raise NotFound(BOOK_NOT_FOUND)
    return book


def create_book(
    db: Session,
    title: str | None,
    author: str | None = None,
    description: str | None = None,
    created_by: str | None = None,
) -> Book:
    if not title or not title.strip():
        raise ValidationError("Title is required")
    _check_text(title, author, description)
    book = Book(
        title=title,
        author=author or DEFAULT_AUTHOR,
        description=description or "",
        created_by=created_by,
    )
    db.add(book)
    db.commit()
    db.refresh(book)
    logger.info("Book created: id=%s created_by=%s", book.id, created_by)
    return book


def update_book(
    db: Session,
    book_id: str,
    title: str | None = None,
    author: str | None = None,
    description: str | None = None,
) -> Book:
    """Apply the provided fields only. None means "leave unchanged"."""
    if title is not None and not title.strip():
        raise ValidationError("Title cannot be empty")
    _check_text(title, author, description)
    book = get_book(db, book_id)
    if title is not None:
        book.title = title
    if author is not None:
        book.author = author
    if description is not None:
        book.description = description
    db.commit()
    db.refresh(book)
    logger.info("Book updated: id=%s", book.id)
    return book


def delete_book(db: Session, book_id: str) -> None:
    """Delete immediately. A second delete of the same id raises NotFound."""
    book = get_book(db, book_id)
    db.delete(book)
    db.commit()
    logger.info("Book deleted: id=%s", book_id)
