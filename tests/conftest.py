"""Shared fixtures: an in-memory registry with a controllable clock."""

import os
from datetime import datetime, timedelta, timezone

import pytest

# Never reach for a real MongoDB from the test suite
os.environ.setdefault("STORE_BACKEND", "memory")

from bookswap.dataBase import Repository  # noqa: E402
from bookswap.services import BookSwapService  # noqa: E402


class FakeClock:
    """Returns ``now`` and then advances it by one second."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 10, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def repository():
    return Repository.in_memory()


@pytest.fixture
def service(repository, clock):
    return BookSwapService(repository, clock=clock)


def user_payload(**overrides):
    payload = {"name": "Alice", "email": "alice@example.com", "phoneNumber": "0123456789"}
    payload.update(overrides)
    return payload


def book_payload(user_id, **overrides):
    payload = {
        "userId": user_id,
        "title": "The Hobbit",
        "author": "J. R. R. Tolkien",
        "genre": "Fantasy",
        "description": "There and back again.",
        "imageUrl": "https://images.example.com/hobbit.jpg",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_user(service):
    counter = {"n": 0}

    def _make(caller="principal-alice", **overrides):
        counter["n"] += 1
        n = counter["n"]
        defaults = {"name": f"User {n}", "email": f"user{n}@example.com"}
        defaults.update(overrides)
        result = service.create_user_profile(caller, user_payload(**defaults))
        assert result.ok, result
        return result.value

    return _make


@pytest.fixture
def make_book(service):
    def _make(user_id, **overrides):
        result = service.list_book(book_payload(user_id, **overrides))
        assert result.ok, result
        return result.value

    return _make


@pytest.fixture
def make_swap(service):
    def _make(owner_id, requester_id, book_id):
        result = service.create_swap_request(
            {"ownerId": owner_id, "requesterId": requester_id, "bookId": book_id}
        )
        assert result.ok, result
        return result.value

    return _make
