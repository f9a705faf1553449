"""Session lifecycle models."""

from __future__ import annotations

from typing import ClassVar

from pydantic import field_validator

from acudp.models.base import Int32, Message, UInt8, UInt16
from acudp.models.event import Event


class SessionInfo(Message):
    """Track, timing and weather metadata for a session.

    NewSession and SessionInfo share this schema; ``event_type`` keeps
    whichever discriminant was observed.
    """

    EVENT: ClassVar[Event] = Event.SESSION_INFO

    version: UInt8
    session_index: UInt8
    current_session_index: UInt8
    session_count: UInt8
    server_name: str
    track: str
    track_config: str
    name: str
    type: UInt8
    time: UInt16
    laps: UInt16
    wait_time: UInt16
    ambient_temp: UInt8
    road_temp: UInt8
    weather_graphics: str
    elapsed_milliseconds: Int32
    event_type: Event = Event.SESSION_INFO

    @field_validator("event_type")
    @classmethod
    def _session_event(cls, value: Event) -> Event:
        if value not in (Event.NEW_SESSION, Event.SESSION_INFO):
            raise ValueError(f"{value!r} is not a session info event")
        return value

    @property
    def event(self) -> Event:
        return self.event_type


class EndSession(Message):
    """The session ended and its results were written to ``filename``."""

    EVENT: ClassVar[Event] = Event.END_SESSION

    filename: str


class Version(Message):
    EVENT: ClassVar[Event] = Event.VERSION

    version: UInt8
