"""Payload validation: format rules and InvalidPayload messages, no store involved."""

from bookswap.models import BookPayload, BookUpdate, FeedbackPayload, FeedbackUpdate, UserPayload
from bookswap.results import MessageKind
from bookswap.validation import parse_payload

from conftest import book_payload, user_payload


def test_valid_user_payload_accepts_camel_case_keys():
    result = parse_payload(UserPayload, user_payload())
    assert result.ok
    assert result.value.phone_number == "0123456789"
    assert result.value.email == "alice@example.com"


def test_user_payload_accepts_snake_case_keys():
    result = parse_payload(
        UserPayload, {"name": "Bob", "email": "bob@example.com", "phone_number": "9876543210"}
    )
    assert result.ok


def test_blank_name_is_rejected_with_field_name():
    result = parse_payload(UserPayload, user_payload(name="   "))
    assert not result.ok
    assert result.kind == MessageKind.INVALID_PAYLOAD
    assert result.text == "name: a value is required"


def test_missing_field_is_rejected():
    payload = user_payload()
    del payload["phoneNumber"]
    result = parse_payload(UserPayload, payload)
    assert not result.ok
    assert "phoneNumber" in result.text


def test_malformed_email_is_rejected():
    result = parse_payload(UserPayload, user_payload(email="alice.example.com"))
    assert not result.ok
    assert result.text.startswith("email:")


def test_phone_number_must_have_exactly_ten_digits():
    for phone in ("012345678", "01234567890", "01234abcde", "0123456789\n"):
        result = parse_payload(UserPayload, user_payload(phoneNumber=phone))
        assert not result.ok, phone
        assert result.text == "phoneNumber: must be a 10-digit number"


def test_every_error_is_reported():
    result = parse_payload(UserPayload, {"name": "", "email": "", "phoneNumber": ""})
    assert not result.ok
    assert result.text.count("a value is required") == 3


def test_non_mapping_payload_is_invalid():
    result = parse_payload(UserPayload, None)
    assert not result.ok
    assert result.kind == MessageKind.INVALID_PAYLOAD


def test_model_instance_is_revalidated():
    bogus = UserPayload.model_construct(name="", email="x", phone_number="1")
    result = parse_payload(UserPayload, bogus)
    assert not result.ok


def test_book_payload_requires_every_field():
    for field in ("userId", "title", "author", "genre", "description", "imageUrl"):
        result = parse_payload(BookPayload, book_payload("u1", **{field: ""}))
        assert not result.ok, field
        assert result.text == f"{field}: a value is required"


def test_book_update_allows_omitted_fields_but_not_blank_ones():
    assert parse_payload(BookUpdate, {"title": "New title"}).ok
    assert parse_payload(BookUpdate, {}).ok
    result = parse_payload(BookUpdate, {"author": " "})
    assert not result.ok
    assert result.text == "author: a value is required"


def test_feedback_rating_must_be_positive():
    base = {"userId": "u1", "swapRequestId": "s1", "comment": "Great swap"}
    assert parse_payload(FeedbackPayload, {**base, "rating": 4}).ok

    zero = parse_payload(FeedbackPayload, {**base, "rating": 0})
    assert not zero.ok
    assert zero.text == "rating: a value is required"

    negative = parse_payload(FeedbackPayload, {**base, "rating": -1})
    assert not negative.ok


def test_feedback_comment_is_required():
    result = parse_payload(FeedbackPayload, {"userId": "u1", "swapRequestId": "s1", "rating": 5, "comment": ""})
    assert not result.ok
    assert result.text == "comment: a value is required"


def test_feedback_update_needs_feedback_id():
    result = parse_payload(FeedbackUpdate, {"rating": 3, "comment": "ok"})
    assert not result.ok
    assert "feedbackId" in result.text


def test_email_is_kept_exactly_as_submitted():
    result = parse_payload(UserPayload, user_payload(email="Bob@Example.COM"))
    assert result.ok
    assert result.value.email == "Bob@Example.COM"


def test_display_name_email_is_rejected():
    result = parse_payload(UserPayload, user_payload(email="Bob <bob@example.com>"))
    assert not result.ok
    assert result.text == "email: must have the local@domain.tld shape"


def test_email_on_test_domain_is_accepted():
    assert parse_payload(UserPayload, user_payload(email="bob@shop.test")).ok


def test_email_failing_library_syntax_check_is_rejected():
    result = parse_payload(UserPayload, user_payload(email="bob..smith@example.com"))
    assert not result.ok
    assert result.text.startswith("email:")
