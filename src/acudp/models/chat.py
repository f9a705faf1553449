"""Chat and error models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from pydantic import Field

from acudp.models.base import CarID, Message
from acudp.models.event import Event


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Chat(Message):
    """A chat line typed by a driver. ``time`` is stamped on arrival."""

    EVENT: ClassVar[Event] = Event.CHAT

    car_id: CarID
    message: str
    time: datetime = Field(default_factory=_now)


class ServerError(Message):
    """An error reported by the server, or a receive/decode failure.

    Delivered through the normal callback so per-packet failures never stop
    the listener.
    """

    EVENT: ClassVar[Event] = Event.ERROR

    message: str
    error_type: str = "ServerError"

    @classmethod
    def from_exception(cls, exc: BaseException) -> ServerError:
        return cls(message=str(exc), error_type=type(exc).__name__)
