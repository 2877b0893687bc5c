from typing import Optional

from .base_model import BookSwapModel
from .book_models import Book


class SwapperSummary(BookSwapModel):
    """One leaderboard row: completed swaps this month plus the user's latest listing."""

    user_id: str
    name: str
    swaps_completed: int
    last_book_details: Optional[Book] = None
