"""Shared building blocks for message models."""

from __future__ import annotations

from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from acudp.models.event import Event

# Car slot for the lifetime of a session; reused across sessions.
CarID = Annotated[int, Field(ge=0, le=255)]

# Driver account identity, stable across sessions.
DriverGUID = str

UInt8 = Annotated[int, Field(ge=0, le=0xFF)]
UInt16 = Annotated[int, Field(ge=0, le=0xFFFF)]
UInt32 = Annotated[int, Field(ge=0, le=0xFFFFFFFF)]
Int32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]


class Message(BaseModel):
    """A decoded inbound telemetry message."""

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    EVENT: ClassVar[Event]

    @property
    def event(self) -> Event:
        """The discriminant this message was (or would be) sent with."""
        return self.EVENT


class Vec(BaseModel):
    """Three float32 components, world or car-relative."""

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
