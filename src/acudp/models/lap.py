"""Lap completion models."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, model_validator

from acudp.models.base import CarID, Message, UInt8, UInt16, UInt32
from acudp.models.event import Event


class LapCompletedCar(BaseModel):
    """One leaderboard row attached to a LapCompleted message."""

    model_config = ConfigDict(frozen=True)

    car_id: CarID
    lap_time: UInt32
    laps: UInt16
    completed: UInt8

    @property
    def has_completed(self) -> bool:
        return self.completed != 0


class LapCompleted(Message):
    """A car crossed the line. ``lap_time`` is in milliseconds."""

    EVENT: ClassVar[Event] = Event.LAP_COMPLETED

    car_id: CarID
    lap_time: UInt32
    cuts: UInt8
    cars_count: UInt8
    cars: tuple[LapCompletedCar, ...] = ()

    @model_validator(mode="after")
    def _cars_match_count(self) -> LapCompleted:
        if len(self.cars) != self.cars_count:
            raise ValueError(
                f"cars_count is {self.cars_count} but {len(self.cars)} cars were given"
            )
        return self
