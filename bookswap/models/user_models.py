import re
from datetime import datetime
from email_validator import EmailNotValidError, validate_email
from pydantic import field_validator

from .base_model import BookSwapModel, require_text

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_NUMBER_PATTERN = re.compile(r"[0-9]{10}")


class UserPayload(BookSwapModel):
    """Fields accepted by createUserProfile and updateUserProfile."""

    name: str
    email: str
    phone_number: str

    @field_validator("name", "email", "phone_number", mode="before")
    @classmethod
    def check_required(cls, v):
        return require_text(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        # Stored exactly as submitted; the library only checks syntax.
        if not EMAIL_PATTERN.fullmatch(v):
            raise ValueError("must have the local@domain.tld shape")
        try:
            validate_email(v, check_deliverability=False, test_environment=True)
        except EmailNotValidError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("phone_number")
    @classmethod
    def check_phone_number(cls, v: str) -> str:
        if not PHONE_NUMBER_PATTERN.fullmatch(v):
            raise ValueError("must be a 10-digit number")
        return v


class User(BookSwapModel):
    user_id: str
    owner: str
    name: str
    email: str
    phone_number: str
    created_at: datetime
