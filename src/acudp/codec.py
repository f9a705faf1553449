"""Decode inbound datagrams into messages and encode outbound commands."""

from __future__ import annotations

from typing import Callable

from pydantic import ValidationError

from acudp._logging import get_logger
from acudp.exceptions import DecodeError, EncodeError, UnknownEventError
from acudp.models import (
    AdminCommand,
    BroadcastChat,
    CarInfo,
    CarUpdate,
    Chat,
    ClientLoaded,
    CollisionWithCar,
    CollisionWithEnvironment,
    Command,
    EnableRealtimePosInterval,
    EndSession,
    Event,
    GetCarInfo,
    GetSessionInfo,
    KickUser,
    LapCompleted,
    LapCompletedCar,
    Message,
    NextSession,
    RestartSession,
    SendChat,
    ServerError,
    SessionCarInfo,
    SessionInfo,
    Vec,
    Version,
)
from acudp.wire import WireReader, WireWriter

_CAR_UPDATE_LAYOUT = "B3f3fBHf"
_LAP_COMPLETED_HEADER_LAYOUT = "BIBB"
_LAP_COMPLETED_CAR_LAYOUT = "BIHB"
_COLLISION_WITH_CAR_LAYOUT = "BBf3f3f"
_COLLISION_WITH_ENV_LAYOUT = "Bf3f3f"

_PRINTABLE_ASCII = range(0x20, 0x7F)


def strip_non_printable_ascii(text: str) -> str:
    """Drop every character outside printable ASCII; the chat channel mangles the rest."""
    return "".join(c for c in text if ord(c) in _PRINTABLE_ASCII)


# ── Decode ─────────────────────────────────────────────────


def _vec(values: tuple) -> Vec:
    x, y, z = values
    return Vec(x=x, y=y, z=z)


def _decode_session_car_info(r: WireReader, event: Event) -> Message:
    driver_name = r.read_string_w()
    driver_guid = r.read_string_w()
    car_id = r.read_uint8()
    car_model = r.read_string()
    car_skin = r.read_string_w()

    return SessionCarInfo(
        car_id=car_id,
        driver_name=driver_name,
        driver_guid=driver_guid,
        car_model=car_model,
        car_skin=car_skin,
        event_type=event,
    )


def _decode_car_update(r: WireReader, event: Event) -> Message:
    fields = r.read_struct(_CAR_UPDATE_LAYOUT)

    return CarUpdate(
        car_id=fields[0],
        pos=_vec(fields[1:4]),
        velocity=_vec(fields[4:7]),
        gear=fields[7],
        engine_rpm=fields[8],
        normalised_spline_pos=fields[9],
    )


def _decode_car_info(r: WireReader, event: Event) -> Message:
    car_id = r.read_uint8()
    is_connected = r.read_uint8() != 0

    return CarInfo(
        car_id=car_id,
        is_connected=is_connected,
        car_model=r.read_string_w(),
        car_skin=r.read_string_w(),
        driver_name=r.read_string_w(),
        driver_team=r.read_string_w(),
        driver_guid=r.read_string_w(),
    )


def _decode_end_session(r: WireReader, event: Event) -> Message:
    return EndSession(filename=r.read_string_w())


def _decode_version(r: WireReader, event: Event) -> Message:
    return Version(version=r.read_uint8())


def _decode_chat(r: WireReader, event: Event) -> Message:
    car_id = r.read_uint8()
    return Chat(car_id=car_id, message=r.read_string_w())


def _decode_client_loaded(r: WireReader, event: Event) -> Message:
    return ClientLoaded(car_id=r.read_uint8())


def _decode_session_info(r: WireReader, event: Event) -> Message:
    version, session_index, current_session_index, session_count = r.read_struct("BBBB")
    server_name = r.read_string_w()
    track = r.read_string()
    track_config = r.read_string()
    name = r.read_string()
    session_type, time, laps, wait_time, ambient_temp, road_temp = r.read_struct("BHHHBB")
    weather_graphics = r.read_string()
    elapsed_milliseconds = r.read_int32()

    return SessionInfo(
        version=version,
        session_index=session_index,
        current_session_index=current_session_index,
        session_count=session_count,
        server_name=server_name,
        track=track,
        track_config=track_config,
        name=name,
        type=session_type,
        time=time,
        laps=laps,
        wait_time=wait_time,
        ambient_temp=ambient_temp,
        road_temp=road_temp,
        weather_graphics=weather_graphics,
        elapsed_milliseconds=elapsed_milliseconds,
        event_type=event,
    )


def _decode_error(r: WireReader, event: Event) -> Message:
    return ServerError(message=r.read_string_w())


def _decode_lap_completed(r: WireReader, event: Event) -> Message:
    car_id, lap_time, cuts, cars_count = r.read_struct(_LAP_COMPLETED_HEADER_LAYOUT)

    cars = []
    for _ in range(cars_count):
        car = r.read_struct(_LAP_COMPLETED_CAR_LAYOUT)
        cars.append(
            LapCompletedCar(car_id=car[0], lap_time=car[1], laps=car[2], completed=car[3])
        )

    return LapCompleted(
        car_id=car_id,
        lap_time=lap_time,
        cuts=cuts,
        cars_count=cars_count,
        cars=tuple(cars),
    )


def _decode_client_event(r: WireReader, event: Event) -> Message:
    kind = r.read_uint8()

    if kind == Event.COLLISION_WITH_CAR:
        fields = r.read_struct(_COLLISION_WITH_CAR_LAYOUT)
        return CollisionWithCar(
            car_id=fields[0],
            other_car_id=fields[1],
            impact_speed=fields[2],
            world_pos=_vec(fields[3:6]),
            rel_pos=_vec(fields[6:9]),
        )

    if kind == Event.COLLISION_WITH_ENV:
        fields = r.read_struct(_COLLISION_WITH_ENV_LAYOUT)
        return CollisionWithEnvironment(
            car_id=fields[0],
            impact_speed=fields[1],
            world_pos=_vec(fields[2:5]),
            rel_pos=_vec(fields[5:8]),
        )

    raise DecodeError(f"unknown client event type: {kind}")


_DECODERS: dict[Event, Callable[[WireReader, Event], Message]] = {
    Event.NEW_CONNECTION: _decode_session_car_info,
    Event.CONNECTION_CLOSED: _decode_session_car_info,
    Event.CAR_UPDATE: _decode_car_update,
    Event.CAR_INFO: _decode_car_info,
    Event.END_SESSION: _decode_end_session,
    Event.VERSION: _decode_version,
    Event.CHAT: _decode_chat,
    Event.CLIENT_LOADED: _decode_client_loaded,
    Event.NEW_SESSION: _decode_session_info,
    Event.SESSION_INFO: _decode_session_info,
    Event.ERROR: _decode_error,
    Event.LAP_COMPLETED: _decode_lap_completed,
    Event.CLIENT_EVENT: _decode_client_event,
}


def decode(data: bytes) -> Message:
    """Decode one datagram into a message.

    Args:
        data: The raw datagram, discriminant byte first.

    Returns:
        The decoded message variant.

    Raises:
        UnknownEventError: If the discriminant is not an inbound event.
        DecodeError: If the datagram is truncated or holds out-of-range values.
    """
    reader = WireReader(data)
    code = reader.read_uint8()

    try:
        event = Event(code)
    except ValueError:
        event = None

    decoder = _DECODERS.get(event) if event is not None else None
    if event is None or decoder is None:
        rest = reader.read_remaining()
        get_logger().warning("Unknown event type %d, payload: %s", code, rest.hex())
        raise UnknownEventError(code, rest)

    try:
        return decoder(reader, event)
    except ValidationError as exc:
        raise DecodeError(f"invalid {event.name} message: {exc}") from exc


# ── Encode ─────────────────────────────────────────────────


def _encode_realtime_pos_interval(w: WireWriter, cmd: EnableRealtimePosInterval) -> None:
    w.write_uint16(cmd.interval)


def _encode_car_id(w: WireWriter, cmd: GetCarInfo | KickUser) -> None:
    w.write_uint8(cmd.car_id)


def _encode_send_chat(w: WireWriter, cmd: SendChat) -> None:
    w.write_uint8(cmd.car_id)
    w.write_string_w(strip_non_printable_ascii(cmd.message))


def _encode_broadcast_chat(w: WireWriter, cmd: BroadcastChat) -> None:
    w.write_string_w(strip_non_printable_ascii(cmd.message))


def _encode_admin_command(w: WireWriter, cmd: AdminCommand) -> None:
    w.write_string_w(cmd.command)


def _encode_no_body(w: WireWriter, cmd: Command) -> None:
    pass


_ENCODERS: dict[type[Command], Callable] = {
    EnableRealtimePosInterval: _encode_realtime_pos_interval,
    GetCarInfo: _encode_car_id,
    SendChat: _encode_send_chat,
    BroadcastChat: _encode_broadcast_chat,
    GetSessionInfo: _encode_no_body,
    KickUser: _encode_car_id,
    NextSession: _encode_no_body,
    RestartSession: _encode_no_body,
    AdminCommand: _encode_admin_command,
}


def encode(command: Command) -> bytes:
    """Encode an outbound command into a datagram.

    Raises:
        EncodeError: If the command type is unknown or a field does not fit the wire format.
    """
    encoder = _ENCODERS.get(type(command))
    if encoder is None:
        raise EncodeError(f"invalid command type: {type(command).__name__}")

    writer = WireWriter()
    writer.write_uint8(command.event)
    encoder(writer, command)
    return writer.getvalue()
