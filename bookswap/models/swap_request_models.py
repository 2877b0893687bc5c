from datetime import datetime
from enum import Enum
from pydantic import field_validator
from typing import Optional

from .base_model import BookSwapModel, require_text


class SwapStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    REJECTED = "Rejected"


class SwapRequestPayload(BookSwapModel):
    owner_id: str
    requester_id: str
    book_id: str

    @field_validator("*", mode="before")
    @classmethod
    def check_required(cls, v):
        return require_text(v)


class SwapRequestUpdate(BookSwapModel):
    """Partial update of the (owner, requester, book) triple; status moves only via accept/reject."""

    owner_id: Optional[str] = None
    requester_id: Optional[str] = None
    book_id: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def check_not_blank(cls, v):
        if isinstance(v, str):
            return require_text(v)
        return v


class SwapRequest(BookSwapModel):
    swap_request_id: str
    owner_id: str
    requester_id: str
    book_id: str
    status: SwapStatus = SwapStatus.PENDING
    created_at: datetime
