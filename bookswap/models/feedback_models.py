from datetime import datetime
from pydantic import NonNegativeInt, field_validator

from .base_model import BookSwapModel, require_text


def _require_rating(v: int) -> int:
    if v == 0:
        raise ValueError("a value is required")
    return v


class FeedbackPayload(BookSwapModel):
    user_id: str
    swap_request_id: str
    rating: NonNegativeInt
    comment: str

    @field_validator("user_id", "swap_request_id", "rating", "comment", mode="before")
    @classmethod
    def check_required(cls, v):
        return require_text(v)

    @field_validator("rating")
    @classmethod
    def check_rating(cls, v: int) -> int:
        return _require_rating(v)


class FeedbackUpdate(BookSwapModel):
    """Replaces the rating and comment of an existing feedback."""

    feedback_id: str
    rating: NonNegativeInt
    comment: str

    @field_validator("feedback_id", "rating", "comment", mode="before")
    @classmethod
    def check_required(cls, v):
        return require_text(v)

    @field_validator("rating")
    @classmethod
    def check_rating(cls, v: int) -> int:
        return _require_rating(v)


class Feedback(BookSwapModel):
    feedback_id: str
    user_id: str
    swap_request_id: str
    rating: NonNegativeInt
    comment: str
    created_at: datetime
