"""Telemetry message models."""

from acudp.models.base import CarID, DriverGUID, Message, Vec
from acudp.models.car import CarInfo, CarUpdate, ClientLoaded, SessionCarInfo
from acudp.models.chat import Chat, ServerError
from acudp.models.collision import CollisionWithCar, CollisionWithEnvironment
from acudp.models.commands import (
    AdminCommand,
    BroadcastChat,
    Command,
    EnableRealtimePosInterval,
    GetCarInfo,
    GetSessionInfo,
    KickUser,
    NextSession,
    RestartSession,
    SendChat,
)
from acudp.models.event import Event
from acudp.models.lap import LapCompleted, LapCompletedCar
from acudp.models.session import EndSession, SessionInfo, Version

# Schema used for each inbound discriminant. NewSession/SessionInfo and
# NewConnection/ConnectionClosed share a model.
MESSAGE_TYPES: dict[Event, type[Message]] = {
    Event.COLLISION_WITH_CAR: CollisionWithCar,
    Event.COLLISION_WITH_ENV: CollisionWithEnvironment,
    Event.NEW_SESSION: SessionInfo,
    Event.NEW_CONNECTION: SessionCarInfo,
    Event.CONNECTION_CLOSED: SessionCarInfo,
    Event.CAR_UPDATE: CarUpdate,
    Event.CAR_INFO: CarInfo,
    Event.END_SESSION: EndSession,
    Event.VERSION: Version,
    Event.CHAT: Chat,
    Event.CLIENT_LOADED: ClientLoaded,
    Event.SESSION_INFO: SessionInfo,
    Event.ERROR: ServerError,
    Event.LAP_COMPLETED: LapCompleted,
}

__all__ = [
    "MESSAGE_TYPES",
    "AdminCommand",
    "BroadcastChat",
    "CarID",
    "CarInfo",
    "CarUpdate",
    "Chat",
    "ClientLoaded",
    "CollisionWithCar",
    "CollisionWithEnvironment",
    "Command",
    "DriverGUID",
    "EnableRealtimePosInterval",
    "EndSession",
    "Event",
    "GetCarInfo",
    "GetSessionInfo",
    "KickUser",
    "LapCompleted",
    "LapCompletedCar",
    "Message",
    "NextSession",
    "RestartSession",
    "SendChat",
    "ServerError",
    "SessionCarInfo",
    "SessionInfo",
    "Vec",
    "Version",
]
