"""Collision models, delivered inside client events."""

from __future__ import annotations

from typing import ClassVar

from acudp.models.base import CarID, Message, Vec
from acudp.models.event import Event


class CollisionWithCar(Message):
    EVENT: ClassVar[Event] = Event.COLLISION_WITH_CAR

    car_id: CarID
    other_car_id: CarID
    impact_speed: float
    world_pos: Vec
    rel_pos: Vec


class CollisionWithEnvironment(Message):
    EVENT: ClassVar[Event] = Event.COLLISION_WITH_ENV

    car_id: CarID
    impact_speed: float
    world_pos: Vec
    rel_pos: Vec
