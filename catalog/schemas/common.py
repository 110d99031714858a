"""Schemas shared across routers."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement; also the shape of every error body."""

    message: str
