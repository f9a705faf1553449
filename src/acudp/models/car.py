"""Car and driver connection models."""

from __future__ import annotations

from typing import ClassVar

from pydantic import field_validator

from acudp.models.base import CarID, DriverGUID, Message, UInt8, UInt16, Vec
from acudp.models.event import Event


class SessionCarInfo(Message):
    """A driver connected to or disconnected from a car slot."""

    EVENT: ClassVar[Event] = Event.NEW_CONNECTION

    car_id: CarID
    driver_name: str
    driver_guid: DriverGUID
    car_model: str
    car_skin: str
    event_type: Event = Event.NEW_CONNECTION

    @field_validator("event_type")
    @classmethod
    def _connection_event(cls, value: Event) -> Event:
        if value not in (Event.NEW_CONNECTION, Event.CONNECTION_CLOSED):
            raise ValueError(f"{value!r} is not a connection event")
        return value

    @property
    def event(self) -> Event:
        return self.event_type


class CarUpdate(Message):
    """Realtime position report for one car."""

    EVENT: ClassVar[Event] = Event.CAR_UPDATE

    car_id: CarID
    pos: Vec
    velocity: Vec
    gear: UInt8
    engine_rpm: UInt16
    normalised_spline_pos: float


class CarInfo(Message):
    """Snapshot of a car slot, sent in response to GetCarInfo."""

    EVENT: ClassVar[Event] = Event.CAR_INFO

    car_id: CarID
    is_connected: bool
    car_model: str
    car_skin: str
    driver_name: str
    driver_team: str
    driver_guid: DriverGUID


class ClientLoaded(Message):
    EVENT: ClassVar[Event] = Event.CLIENT_LOADED

    car_id: CarID
