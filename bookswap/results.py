"""Tagged results returned by every registry operation.

An operation returns ``Ok(value)`` on success or ``Err(message)`` where
the message carries one of the ``MessageKind`` tags.  Expected failures
(bad payloads, unknown identifiers, empty result sets) are never raised.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Generic, TypeVar, Union

T = TypeVar("T")


class MessageKind(str, Enum):
    SUCCESS = "Success"
    ERROR = "Error"
    NOT_FOUND = "NotFound"
    INVALID_PAYLOAD = "InvalidPayload"


@dataclass(frozen=True)
class Message:
    kind: MessageKind
    text: str

    def to_response(self) -> Dict[str, str]:
        """Render as a single-key variant, e.g. ``{"NotFound": "Book not found"}``."""
        return {self.kind.value: self.text}


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Err:
    message: Message
    ok: ClassVar[bool] = False

    @property
    def kind(self) -> MessageKind:
        return self.message.kind

    @property
    def text(self) -> str:
        return self.message.text

    @classmethod
    def not_found(cls, text: str) -> "Err":
        return cls(Message(MessageKind.NOT_FOUND, text))

    @classmethod
    def invalid(cls, text: str) -> "Err":
        return cls(Message(MessageKind.INVALID_PAYLOAD, text))

    @classmethod
    def error(cls, text: str) -> "Err":
        return cls(Message(MessageKind.ERROR, text))

    def to_response(self) -> Dict[str, Any]:
        return self.message.to_response()


Result = Union[Ok[T], Err]
