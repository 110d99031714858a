"""ORM model for catalog books."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from catalog.models.base import Base, new_id, utcnow

DEFAULT_AUTHOR = "Unknown"
TITLE_MAX_LEN = 1024
AUTHOR_MAX_LEN = 1024


class Book(Base):
    """A catalog entry. created_by records which admin added it; it grants no access."""

    __tablename__ = "books"

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String(TITLE_MAX_LEN), nullable=False)
    author = Column(String(AUTHOR_MAX_LEN), nullable=False, default=DEFAULT_AUTHOR)
    description = Column(Text, nullable=False, default="")
    created_by = Column(
        String(32),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
