"""Aggregation engine: pure functions over record snapshots."""

from datetime import datetime, timezone

from bookswap.models import Book, SwapRequest, SwapStatus, User
from bookswap.services import aggregation

NOW = datetime(2026, 10, 17, 8, 0, tzinfo=timezone.utc)


def book(book_id, user_id="u1", title="Title", author="Author", genre="Genre", day=1):
    return Book(
        book_id=book_id, user_id=user_id, title=title, author=author, genre=genre,
        description="d", image_url="https://img.example.com/x.jpg",
        created_at=datetime(2026, 10, day, tzinfo=timezone.utc),
    )


def swap(swap_id, owner, requester, status=SwapStatus.COMPLETED, created_at=None):
    return SwapRequest(
        swap_request_id=swap_id, owner_id=owner, requester_id=requester, book_id="b",
        status=status, created_at=created_at or datetime(2026, 10, 5, tzinfo=timezone.utc),
    )


def user(user_id, name=None):
    return User(
        user_id=user_id, owner="p", name=name or user_id, email=f"{user_id}@example.com",
        phone_number="0123456789", created_at=NOW,
    )


def test_search_is_case_insensitive_over_title_author_genre():
    books = [
        book("b1", title="Dune", author="Frank Herbert", genre="Science Fiction"),
        book("b2", title="Emma", author="Jane Austen", genre="Classic"),
        book("b3", title="Mistborn", author="Brandon Sanderson", genre="Fantasy"),
    ]
    assert [b.book_id for b in aggregation.search_books(books, "fantasy")] == ["b3"]
    assert [b.book_id for b in aggregation.search_books(books, "AUSTEN")] == ["b2"]
    assert [b.book_id for b in aggregation.search_books(books, "dun")] == ["b1"]
    assert aggregation.search_books(books, "poetry") == []


def test_search_does_not_look_at_description():
    assert aggregation.search_books([book("b1")], "d") == []


def test_count_where():
    assert aggregation.count_where([1, 2, 3, 4], lambda n: n % 2 == 0) == 2
    assert aggregation.count_where([], lambda n: True) == 0


def test_involves_owner_or_requester():
    request = swap("s1", "u1", "u2")
    assert aggregation.involves(request, "u1")
    assert aggregation.involves(request, "u2")
    assert not aggregation.involves(request, "u3")


def test_recent_books_newest_first_and_truncated():
    books = [book(f"b{day}", day=day) for day in range(1, 13)]
    recent = aggregation.recent_books(books, 10)
    assert len(recent) == 10
    assert recent[0].book_id == "b12"
    assert recent[-1].book_id == "b3"


def test_latest_book_of_user():
    books = [book("b1", "u1", day=1), book("b2", "u1", day=3), book("b3", "u2", day=5)]
    assert aggregation.latest_book_of(books, "u1").book_id == "b2"
    assert aggregation.latest_book_of(books, "u9") is None


def test_completed_in_month_filters_status_and_calendar_month():
    requests = [
        swap("s1", "u1", "u2"),
        swap("s2", "u1", "u2", status=SwapStatus.PENDING),
        swap("s3", "u1", "u2", created_at=datetime(2026, 9, 30, 23, 59, tzinfo=timezone.utc)),
        swap("s4", "u1", "u2", created_at=datetime(2025, 10, 5, tzinfo=timezone.utc)),
    ]
    assert [r.swap_request_id for r in aggregation.completed_in_month(requests, NOW)] == ["s1"]


def test_count_swaps_owner_only_or_both_sides():
    requests = [swap("s1", "u1", "u2"), swap("s2", "u3", "u1")]
    assert aggregation.count_swaps(requests, count_requesters=False) == {"u1": 1, "u3": 1}
    assert aggregation.count_swaps(requests, count_requesters=True) == {"u1": 2, "u2": 1, "u3": 1}


def test_rank_swappers_orders_by_count_with_first_appearance_ties():
    users = {uid: user(uid) for uid in ("u1", "u2", "u3")}
    requests = [swap("s1", "u2", "u1"), swap("s2", "u3", "u1"), swap("s3", "u3", "u2")]
    ranked = aggregation.rank_swappers(
        requests, users.get, [], NOW, limit=5, count_requesters=False
    )
    assert [(s.user_id, s.swaps_completed) for s in ranked] == [("u3", 2), ("u2", 1)]

    ranked = aggregation.rank_swappers(
        requests, users.get, [], NOW, limit=5, count_requesters=True
    )
    # all have 2; requesters enter first, so first appearance is u1, u2, u3
    assert [(s.user_id, s.swaps_completed) for s in ranked] == [("u1", 2), ("u2", 2), ("u3", 2)]


def test_rank_swappers_skips_unknown_users_before_limit():
    users = {uid: user(uid) for uid in ("u1", "u2", "u3")}
    requests = [
        swap("s1", "ghost", "x"), swap("s2", "ghost", "x"),
        swap("s3", "u1", "x"), swap("s4", "u2", "x"), swap("s5", "u3", "x"),
    ]
    ranked = aggregation.rank_swappers(
        requests, users.get, [], NOW, limit=2, count_requesters=False
    )
    assert [s.user_id for s in ranked] == ["u1", "u2"]


def test_rank_swappers_attaches_latest_book():
    users = {"u1": user("u1", name="Alice")}
    books = [book("b1", "u1", day=1), book("b2", "u1", day=9)]
    ranked = aggregation.rank_swappers(
        [swap("s1", "u1", "u2")], users.get, books, NOW, limit=5, count_requesters=False
    )
    assert ranked[0].name == "Alice"
    assert ranked[0].last_book_details.book_id == "b2"


def test_rank_swappers_empty_window():
    requests = [swap("s1", "u1", "u2", status=SwapStatus.PENDING)]
    assert aggregation.rank_swappers(requests, lambda _: None, [], NOW, 5, True) == []


def test_count_swaps_lists_requester_before_owner():
    counts = aggregation.count_swaps([swap("s1", "u1", "u2")], count_requesters=True)
    assert list(counts) == ["u2", "u1"]
