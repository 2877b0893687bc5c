"""
Swap request lifecycle.

A request is created ``Pending`` and moves once, to ``Completed``
(accepted) or ``Rejected``.  Both are terminal.  Accepting a request does
not touch the book or any competing request for it.

A request is identified for duplicate detection by its
``(owner_id, requester_id, book_id)`` triple: while any request exists
for a triple, whatever its status, no second one may be created.
"""

from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from ..models import SwapRequest, SwapStatus
from ..results import Err, Ok, Result

Triple = Tuple[str, str, str]

TRANSITIONS: Dict[SwapStatus, FrozenSet[SwapStatus]] = {
    SwapStatus.PENDING: frozenset({SwapStatus.COMPLETED, SwapStatus.REJECTED}),
    SwapStatus.COMPLETED: frozenset(),
    SwapStatus.REJECTED: frozenset(),
}

TERMINAL_STATUSES = frozenset(status for status, targets in TRANSITIONS.items() if not targets)


def can_transition(current: SwapStatus, target: SwapStatus) -> bool:
    return target in TRANSITIONS[current]


def transition(request: SwapRequest, target: SwapStatus) -> Result[SwapRequest]:
    """Return a copy of ``request`` moved to ``target``, leaving every other field as is."""
    if not can_transition(request.status, target):
        return Err.invalid(
            f"Swap request is already {request.status.value}; it cannot become {target.value}."
        )
    return Ok(request.model_copy(update={"status": target}))


def triple_of(request: SwapRequest) -> Triple:
    return (request.owner_id, request.requester_id, request.book_id)


def find_duplicate(
    requests: Iterable[SwapRequest],
    triple: Triple,
    exclude_id: Optional[str] = None,
) -> Optional[SwapRequest]:
    """First request (other than ``exclude_id``) already holding ``triple``."""
    for request in requests:
        if request.swap_request_id != exclude_id and triple_of(request) == triple:
            return request
    return None
