"""
Read-only views computed from store snapshots.

Nothing here is cached: every function works on the records it is
handed, so results always reflect the latest committed writes.
"""

from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from ..models import Book, SwapRequest, SwapStatus, SwapperSummary, User

T = TypeVar("T")


def count_where(items: Iterable[T], predicate: Callable[[T], bool]) -> int:
    return sum(1 for item in items if predicate(item))


def involves(request: SwapRequest, user_id: str) -> bool:
    """True if the user owns the book or asked for it."""
    return request.owner_id == user_id or request.requester_id == user_id


def search_books(books: Iterable[Book], term: str) -> List[Book]:
    """Case-insensitive substring match on title, author or genre."""
    needle = term.lower()
    return [
        book for book in books
        if needle in book.title.lower()
        or needle in book.author.lower()
        or needle in book.genre.lower()
    ]


def newest_first(books: Iterable[Book]) -> List[Book]:
    return sorted(books, key=lambda book: book.created_at, reverse=True)


def recent_books(books: Iterable[Book], limit: int) -> List[Book]:
    return newest_first(books)[:limit]


def latest_book_of(books: Iterable[Book], user_id: str) -> Optional[Book]:
    owned = newest_first(book for book in books if book.user_id == user_id)
    return owned[0] if owned else None


def completed_in_month(requests: Iterable[SwapRequest], now: datetime) -> List[SwapRequest]:
    """Completed requests created in the same calendar month and year as ``now``."""
    return [
        request for request in requests
        if request.status == SwapStatus.COMPLETED
        and request.created_at.year == now.year
        and request.created_at.month == now.month
    ]


def count_swaps(requests: Iterable[SwapRequest], count_requesters: bool) -> Dict[str, int]:
    """Completed swaps per user, keyed in order of first appearance."""
    counts: Dict[str, int] = {}
    for request in requests:
        if count_requesters:
            participants = [request.requester_id, request.owner_id]
        else:
            participants = [request.owner_id]
        for user_id in participants:
            counts[user_id] = counts.get(user_id, 0) + 1
    return counts


def rank_swappers(
    requests: Iterable[SwapRequest],
    find_user: Callable[[str], Optional[User]],
    books: Iterable[Book],
    now: datetime,
    limit: int,
    count_requesters: bool,
) -> List[SwapperSummary]:
    """Leaderboard of this month's completed swaps.

    With ``count_requesters`` false only book owners score (top
    swappers); otherwise both sides of each swap do (featured swappers).
    Ties keep first-appearance order.  Users that no longer exist are
    skipped before the list is cut to ``limit``.
    """
    counts = count_swaps(completed_in_month(requests, now), count_requesters)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    books = list(books)

    swappers: List[SwapperSummary] = []
    for user_id, swaps in ranked:
        if len(swappers) == limit:
            break
        user = find_user(user_id)
        if user is None:
            continue
        swappers.append(
            SwapperSummary(
                user_id=user_id,
                name=user.name,
                swaps_completed=swaps,
                last_book_details=latest_book_of(books, user_id),
            )
        )
    return swappers
