from .book_models import Book, BookPayload, BookUpdate
from .feedback_models import Feedback, FeedbackPayload, FeedbackUpdate
from .stats_models import SwapperSummary
from .swap_request_models import SwapRequest, SwapRequestPayload, SwapRequestUpdate, SwapStatus
from .user_models import User, UserPayload

__all__ = [
    'Book',
    'BookPayload',
    'BookUpdate',
    'Feedback',
    'FeedbackPayload',
    'FeedbackUpdate',
    'SwapperSummary',
    'SwapRequest',
    'SwapRequestPayload',
    'SwapRequestUpdate',
    'SwapStatus',
    'User',
    'UserPayload',
]
