"""Payload parsing: turns pydantic validation failures into ``InvalidPayload`` results."""

import logging
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .results import Err, Ok, Result

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def describe_errors(exc: ValidationError) -> str:
    """Flatten pydantic errors into ``"field: reason"`` sentences."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        cause = error.get("ctx", {}).get("error")
        # Our own validators raise ValueError; report its text without pydantic's prefix.
        reason = str(cause) if cause is not None else error["msg"]
        messages.append(f"{field}: {reason}" if field else reason)
    return "; ".join(messages)


def parse_payload(model: Type[M], payload: Any) -> Result[M]:
    """Validate ``payload`` (a mapping or an instance of ``model``) against ``model``."""
    if isinstance(payload, model):
        # Re-validate so a model built with model_construct() cannot bypass the checks.
        payload = payload.model_dump()
    try:
        return Ok(model.model_validate(payload))
    except ValidationError as e:
        reason = describe_errors(e)
        logger.debug("Rejected %s payload: %s", model.__name__, reason)
        return Err.invalid(reason)
