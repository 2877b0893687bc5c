"""
The registry's operations.

``BookSwapService`` is the only entry point collaborators use.  Each
operation validates its payload, checks that referenced records exist,
performs at most one store write and returns an ``Ok``/``Err`` result.
Operations run one at a time under the service lock, so a read-then-write
inside one operation never interleaves with another call.
"""

import functools
import logging
import threading
from datetime import datetime
from typing import Any, Callable, List, Optional

from ..dataBase import Repository, StoreError
from ..models import (
    Book,
    BookPayload,
    BookUpdate,
    Feedback,
    FeedbackPayload,
    FeedbackUpdate,
    SwapperSummary,
    SwapRequest,
    SwapRequestPayload,
    SwapRequestUpdate,
    SwapStatus,
    User,
    UserPayload,
)
from ..results import Err, Ok, Result
from ..utils import generate_id, utc_now
from ..validation import parse_payload
from . import aggregation
from .swap_state import find_duplicate, transition, triple_of

logger = logging.getLogger(__name__)


def operation(func):
    """Serialize the call on the service lock and report store failures as ``Error`` results."""

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            try:
                return func(self, *args, **kwargs)
            except StoreError as e:
                logger.error("%s failed: %s", func.__name__, e)
                return Err.error(str(e))

    return wrapper


class BookSwapService:
    def __init__(
        self,
        repository: Repository,
        clock: Callable[[], datetime] = utc_now,
        recent_books_limit: int = 10,
        leaderboard_size: int = 5,
    ):
        self.repository = repository
        self.recent_books_limit = recent_books_limit
        self.leaderboard_size = leaderboard_size
        self._clock = clock
        self._lock = threading.RLock()

    # Users

    def _email_taken(self, email: str, exclude_user_id: Optional[str] = None) -> bool:
        return any(
            user.email == email and user.user_id != exclude_user_id
            for user in self.repository.users.values()
        )

    @operation
    def create_user_profile(self, caller: str, payload: Any) -> Result[User]:
        """Register a user owned by ``caller``; emails are unique across users."""
        if not caller:
            return Err.invalid("Caller identity is required.")
        parsed = parse_payload(UserPayload, payload)
        if not parsed.ok:
            return parsed
        data = parsed.value
        if self._email_taken(data.email):
            return Err.invalid("Email already exists.")

        user = User(
            user_id=generate_id(),
            owner=caller,
            created_at=self._clock(),
            **data.model_dump(),
        )
        self.repository.users.insert(user.user_id, user)
        logger.info("Caller %s created user %s", caller, user.user_id)
        return Ok(user)

    @operation
    def update_user_profile(self, user_id: str, payload: Any) -> Result[User]:
        parsed = parse_payload(UserPayload, payload)
        if not parsed.ok:
            return parsed
        user = self.repository.users.get(user_id)
        if user is None:
            return Err.not_found("User not found")
        data = parsed.value
        if self._email_taken(data.email, exclude_user_id=user_id):
            return Err.invalid("Email already exists.")

        updated = user.model_copy(update=data.model_dump())
        self.repository.users.insert(user_id, updated)
        logger.info("Updated user %s", user_id)
        return Ok(updated)

    @operation
    def get_user_profile(self, user_id: str) -> Result[User]:
        user = self.repository.users.get(user_id)
        if user is None:
            return Err.not_found("User not found")
        return Ok(user)

    @operation
    def get_user_profile_by_owner(self, caller: str) -> Result[User]:
        """The first user created by ``caller``."""
        for user in self.repository.users.values():
            if user.owner == caller:
                return Ok(user)
        return Err.not_found("User not found")

    @operation
    def get_total_users(self) -> Result[int]:
        return Ok(len(self.repository.users.values()))

    # Books

    @operation
    def list_book(self, payload: Any) -> Result[Book]:
        parsed = parse_payload(BookPayload, payload)
        if not parsed.ok:
            return parsed
        data = parsed.value
        if self.repository.users.get(data.user_id) is None:
            return Err.not_found("User not found")

        book = Book(book_id=generate_id(), created_at=self._clock(), **data.model_dump())
        self.repository.books.insert(book.book_id, book)
        logger.info("User %s listed book %s", book.user_id, book.book_id)
        return Ok(book)

    @operation
    def update_book(self, book_id: str, payload: Any) -> Result[Book]:
        parsed = parse_payload(BookUpdate, payload)
        if not parsed.ok:
            return parsed
        changes = parsed.value.model_dump(exclude_none=True)
        if not changes:
            return Err.invalid("No fields provided to update.")
        book = self.repository.books.get(book_id)
        if book is None:
            return Err.not_found("Book not found")

        updated = book.model_copy(update=changes)
        self.repository.books.insert(book_id, updated)
        logger.info("Updated book %s (%s)", book_id, ", ".join(sorted(changes)))
        return Ok(updated)

    @operation
    def get_book(self, book_id: str) -> Result[Book]:
        book = self.repository.books.get(book_id)
        if book is None:
            return Err.not_found("Book not found")
        return Ok(book)

    @operation
    def get_all_books(self) -> Result[List[Book]]:
        books = self.repository.books.values()
        if not books:
            return Err.not_found("No books found")
        return Ok(books)

    @operation
    def get_books_by_user(self, user_id: str) -> Result[List[Book]]:
        return Ok([book for book in self.repository.books.values() if book.user_id == user_id])

    @operation
    def get_books_by_genre(self, genre: str) -> Result[List[Book]]:
        """Books whose genre equals ``genre`` exactly (case-sensitive)."""
        return Ok([book for book in self.repository.books.values() if book.genre == genre])

    @operation
    def search_books(self, term: str) -> Result[List[Book]]:
        books = aggregation.search_books(self.repository.books.values(), term)
        if not books:
            return Err.not_found("No books found matching the search term.")
        return Ok(books)

    @operation
    def get_total_books(self) -> Result[int]:
        return Ok(len(self.repository.books.values()))

    @operation
    def get_number_of_books(self, user_id: str) -> Result[int]:
        return Ok(aggregation.count_where(
            self.repository.books.values(), lambda book: book.user_id == user_id
        ))

    @operation
    def get_recent_books(self) -> Result[List[Book]]:
        books = aggregation.recent_books(self.repository.books.values(), self.recent_books_limit)
        if not books:
            return Err.not_found("No recent books found.")
        return Ok(books)

    @operation
    def delete_book(self, book_id: str) -> Result[None]:
        """Remove a listing.  Swap requests pointing at it are kept."""
        if self.repository.books.get(book_id) is None:
            return Err.not_found("Book not found")
        self.repository.books.remove(book_id)
        logger.info("Deleted book %s", book_id)
        return Ok(None)

    # Swap requests

    def _check_participants(self, owner_id: str, requester_id: str, book_id: str) -> Optional[Err]:
        if self.repository.users.get(owner_id) is None:
            return Err.not_found("User not found")
        if self.repository.users.get(requester_id) is None:
            return Err.not_found("Requester not found")
        if self.repository.books.get(book_id) is None:
            return Err.not_found("Book not found")
        return None

    @operation
    def create_swap_request(self, payload: Any) -> Result[SwapRequest]:
        parsed = parse_payload(SwapRequestPayload, payload)
        if not parsed.ok:
            return parsed
        data = parsed.value
        missing = self._check_participants(data.owner_id, data.requester_id, data.book_id)
        if missing is not None:
            return missing
        triple = (data.owner_id, data.requester_id, data.book_id)
        if find_duplicate(self.repository.swap_requests.values(), triple) is not None:
            return Err.invalid("Swap request already exists.")

        request = SwapRequest(
            swap_request_id=generate_id(),
            status=SwapStatus.PENDING,
            created_at=self._clock(),
            **data.model_dump(),
        )
        self.repository.swap_requests.insert(request.swap_request_id, request)
        logger.info(
            "User %s requested book %s from user %s (swap request %s)",
            request.requester_id, request.book_id, request.owner_id, request.swap_request_id,
        )
        return Ok(request)

    @operation
    def update_swap_request(self, swap_request_id: str, payload: Any) -> Result[SwapRequest]:
        """Change the owner, requester or book of a request; the status is left alone."""
        parsed = parse_payload(SwapRequestUpdate, payload)
        if not parsed.ok:
            return parsed
        changes = parsed.value.model_dump(exclude_none=True)
        if not changes:
            return Err.invalid("No fields provided to update.")
        request = self.repository.swap_requests.get(swap_request_id)
        if request is None:
            return Err.not_found("Swap request not found.")

        updated = request.model_copy(update=changes)
        missing = self._check_participants(*triple_of(updated))
        if missing is not None:
            return missing
        duplicate = find_duplicate(
            self.repository.swap_requests.values(), triple_of(updated), exclude_id=swap_request_id
        )
        if duplicate is not None:
            return Err.invalid("Swap request already exists.")

        self.repository.swap_requests.insert(swap_request_id, updated)
        logger.info("Updated swap request %s", swap_request_id)
        return Ok(updated)

    def _move(self, swap_request_id: str, target: SwapStatus) -> Result[SwapRequest]:
        request = self.repository.swap_requests.get(swap_request_id)
        if request is None:
            return Err.not_found("Swap request not found.")
        moved = transition(request, target)
        if not moved.ok:
            logger.warning(
                "Refused %s -> %s for swap request %s",
                request.status.value, target.value, swap_request_id,
            )
            return moved
        self.repository.swap_requests.insert(swap_request_id, moved.value)
        logger.info("Swap request %s is now %s", swap_request_id, target.value)
        return moved

    @operation
    def accept_swap_request(self, swap_request_id: str) -> Result[SwapRequest]:
        return self._move(swap_request_id, SwapStatus.COMPLETED)

    @operation
    def reject_swap_request(self, swap_request_id: str) -> Result[SwapRequest]:
        return self._move(swap_request_id, SwapStatus.REJECTED)

    @operation
    def get_swap_request(self, swap_request_id: str) -> Result[SwapRequest]:
        request = self.repository.swap_requests.get(swap_request_id)
        if request is None:
            return Err.not_found("Swap request not found.")
        return Ok(request)

    @operation
    def get_all_swap_requests(self) -> Result[List[SwapRequest]]:
        requests = self.repository.swap_requests.values()
        if not requests:
            return Err.not_found("No swap requests found")
        return Ok(requests)

    @operation
    def get_swap_requests_by_user(self, user_id: str) -> Result[List[SwapRequest]]:
        """Requests where the user is either the owner or the requester."""
        return Ok([
            request for request in self.repository.swap_requests.values()
            if aggregation.involves(request, user_id)
        ])

    @operation
    def get_swap_requests_for_user(self, user_id: str) -> Result[List[SwapRequest]]:
        """Requests made for the user's own books."""
        if self.repository.users.get(user_id) is None:
            return Err.not_found("User not found")
        requests = [
            request for request in self.repository.swap_requests.values()
            if request.owner_id == user_id
        ]
        if not requests:
            return Err.not_found("No swap requests found for this user.")
        return Ok(requests)

    def _count_for_user(self, user_id: str, status: SwapStatus) -> int:
        return aggregation.count_where(
            self.repository.swap_requests.values(),
            lambda request: aggregation.involves(request, user_id) and request.status == status,
        )

    @operation
    def get_number_of_pending_swap_requests(self, user_id: str) -> Result[int]:
        return Ok(self._count_for_user(user_id, SwapStatus.PENDING))

    @operation
    def get_number_of_completed_swap_requests(self, user_id: str) -> Result[int]:
        return Ok(self._count_for_user(user_id, SwapStatus.COMPLETED))

    @operation
    def get_total_completed_swap_requests(self) -> Result[int]:
        return Ok(aggregation.count_where(
            self.repository.swap_requests.values(),
            lambda request: request.status == SwapStatus.COMPLETED,
        ))

    @operation
    def get_swaps_by_user(self, user_id: str) -> Result[int]:
        """All requests the user takes part in, whatever their status."""
        return Ok(aggregation.count_where(
            self.repository.swap_requests.values(),
            lambda request: aggregation.involves(request, user_id),
        ))

    @operation
    def delete_swap_request(self, swap_request_id: str) -> Result[None]:
        if self.repository.swap_requests.get(swap_request_id) is None:
            return Err.not_found("Swap request not found.")
        self.repository.swap_requests.remove(swap_request_id)
        logger.info("Deleted swap request %s", swap_request_id)
        return Ok(None)

    # Feedback

    @operation
    def create_feedback(self, payload: Any) -> Result[Feedback]:
        parsed = parse_payload(FeedbackPayload, payload)
        if not parsed.ok:
            return parsed
        data = parsed.value
        if self.repository.users.get(data.user_id) is None:
            return Err.not_found("User not found.")
        if self.repository.swap_requests.get(data.swap_request_id) is None:
            return Err.not_found("Swap request not found.")

        feedback = Feedback(feedback_id=generate_id(), created_at=self._clock(), **data.model_dump())
        self.repository.feedback.insert(feedback.feedback_id, feedback)
        logger.info(
            "User %s left feedback %s on swap request %s",
            feedback.user_id, feedback.feedback_id, feedback.swap_request_id,
        )
        return Ok(feedback)

    @operation
    def update_feedback(self, payload: Any) -> Result[Feedback]:
        """Replace rating and comment of the feedback named by ``payload.feedbackId``."""
        parsed = parse_payload(FeedbackUpdate, payload)
        if not parsed.ok:
            return parsed
        data = parsed.value
        feedback = self.repository.feedback.get(data.feedback_id)
        if feedback is None:
            return Err.not_found("Feedback not found")

        updated = feedback.model_copy(update={"rating": data.rating, "comment": data.comment})
        self.repository.feedback.insert(data.feedback_id, updated)
        logger.info("Updated feedback %s", data.feedback_id)
        return Ok(updated)

    @operation
    def get_feedback(self, feedback_id: str) -> Result[Feedback]:
        feedback = self.repository.feedback.get(feedback_id)
        if feedback is None:
            return Err.not_found("Feedback not found")
        return Ok(feedback)

    @operation
    def get_all_feedbacks(self) -> Result[List[Feedback]]:
        feedbacks = self.repository.feedback.values()
        if not feedbacks:
            return Err.not_found("No feedbacks found")
        return Ok(feedbacks)

    @operation
    def get_feedbacks_by_user(self, user_id: str) -> Result[List[Feedback]]:
        return Ok([
            feedback for feedback in self.repository.feedback.values()
            if feedback.user_id == user_id
        ])

    @operation
    def get_feedbacks_by_swap_request(self, swap_request_id: str) -> Result[List[Feedback]]:
        return Ok([
            feedback for feedback in self.repository.feedback.values()
            if feedback.swap_request_id == swap_request_id
        ])

    @operation
    def delete_feedback(self, feedback_id: str) -> Result[None]:
        if self.repository.feedback.get(feedback_id) is None:
            return Err.not_found("Feedback not found")
        self.repository.feedback.remove(feedback_id)
        logger.info("Deleted feedback %s", feedback_id)
        return Ok(None)

    # Leaderboards

    def _rank(self, count_requesters: bool) -> List[SwapperSummary]:
        return aggregation.rank_swappers(
            self.repository.swap_requests.values(),
            self.repository.users.get,
            self.repository.books.values(),
            now=self._clock(),
            limit=self.leaderboard_size,
            count_requesters=count_requesters,
        )

    @operation
    def get_top_swappers(self) -> Result[List[SwapperSummary]]:
        """Book owners with the most completed swaps this month."""
        swappers = self._rank(count_requesters=False)
        if not swappers:
            return Err.not_found("No top swappers found this month.")
        return Ok(swappers)

    @operation
    def get_featured_swappers(self) -> Result[List[SwapperSummary]]:
        """Users with the most completed swaps this month, counting both sides of each swap."""
        swappers = self._rank(count_requesters=True)
        if not swappers:
            return Err.not_found("No featured swappers found for this month.")
        return Ok(swappers)
