from bson import ObjectId
from datetime import datetime, timezone


def generate_id() -> str:
    """Return a fresh record identifier (24 hex characters)."""
    return str(ObjectId())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
