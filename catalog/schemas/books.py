"""Request/response schemas for book endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BookCreateRequest(BaseModel):
    title: str | None = None
    author: str | None = None
    description: str | None = None


class BookUpdateRequest(BaseModel):
    """Partial update; omitted (or null) fields keep their stored value."""

    title: str | None = None
    author: str | None = None
    description: str | None = None


class BookOut(BaseModel):
    """A book as returned by the API (camelCase timestamps and owner)."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    title: str
    author: str
    description: str
    created_by: str | None = Field(default=None, alias="createdBy")
    created_at: datetime = Field(alias="createdAt")


class BookMutationResponse(BaseModel):
    message: str
    book: BookOut
