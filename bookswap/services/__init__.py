from .book_swap_service import BookSwapService

__all__ = [
    'BookSwapService',
]
