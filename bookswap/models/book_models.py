from datetime import datetime
from pydantic import field_validator
from typing import Optional

from .base_model import BookSwapModel, require_text


class BookPayload(BookSwapModel):
    user_id: str
    title: str
    author: str
    genre: str
    description: str
    image_url: str

    @field_validator("*", mode="before")
    @classmethod
    def check_required(cls, v):
        return require_text(v)


class BookUpdate(BookSwapModel):
    """Partial update; the owning user and identifiers cannot change."""

    title: Optional[str] = None
    author: Optional[str] = None
    genre: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def check_not_blank(cls, v):
        # Omitted fields stay None; an explicit blank string is rejected.
        if isinstance(v, str):
            return require_text(v)
        return v


class Book(BookSwapModel):
    book_id: str
    user_id: str
    title: str
    author: str
    genre: str
    description: str
    image_url: str
    created_at: datetime
