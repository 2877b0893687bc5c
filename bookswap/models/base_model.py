from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Any


class BookSwapModel(BaseModel):
    """Base for every record and payload: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def require_text(value: Any) -> Any:
    """Reject missing or blank values for a required field."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError("a value is required")
    return value
