from .user_routes import router as user_routes
from .book_routes import router as book_routes
from .swap_request_routes import router as swap_request_routes
from .feedback_routes import router as feedback_routes
from .stats_routes import router as stats_routes

__all__ = [
    'user_routes',
    'book_routes',
    'swap_request_routes',
    'feedback_routes',
    'stats_routes'
]
