"""Outbound command models sent to the server."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from acudp.models.base import CarID, UInt16
from acudp.models.event import Event


class Command(BaseModel):
    """A command sent to the server's UDP plugin port."""

    model_config = ConfigDict(frozen=True)

    EVENT: ClassVar[Event]

    @property
    def event(self) -> Event:
        return self.EVENT


class EnableRealtimePosInterval(Command):
    """Ask the server for CarUpdate messages every ``interval`` milliseconds."""

    EVENT: ClassVar[Event] = Event.REALTIME_POS_INTERVAL

    interval: UInt16


class GetCarInfo(Command):
    EVENT: ClassVar[Event] = Event.GET_CAR_INFO

    car_id: CarID


class SendChat(Command):
    """A chat message to a single car."""

    EVENT: ClassVar[Event] = Event.SEND_CHAT

    car_id: CarID
    message: str


class BroadcastChat(Command):
    """A chat message to every connected car."""

    EVENT: ClassVar[Event] = Event.BROADCAST_CHAT

    message: str


class GetSessionInfo(Command):
    EVENT: ClassVar[Event] = Event.GET_SESSION_INFO


class KickUser(Command):
    EVENT: ClassVar[Event] = Event.KICK_USER

    car_id: CarID


class NextSession(Command):
    EVENT: ClassVar[Event] = Event.NEXT_SESSION


class RestartSession(Command):
    EVENT: ClassVar[Event] = Event.RESTART_SESSION


class AdminCommand(Command):
    """A server admin command such as ``/kick <name>`` or ``/ballast``."""

    EVENT: ClassVar[Event] = Event.ADMIN_COMMAND

    command: str
