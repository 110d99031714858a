"""SQLAlchemy ORM models."""

from catalog.models.base import Base
from catalog.models.book import Book
from catalog.models.user import User

__all__ = ["Base", "Book", "User"]
