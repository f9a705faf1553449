"""Builders for outbound commands.

Each builder validates eagerly, so a command that exists can always be
encoded and nothing partial is ever sent.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import ValidationError

from acudp.codec import strip_non_printable_ascii
from acudp.exceptions import EncodeError
from acudp.models import (
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
from acudp.wire import encode_wide, wide_length

T = TypeVar("T", bound=Command)


def _build(command_type: type[T], **fields: Any) -> T:
    try:
        return command_type(**fields)
    except ValidationError as exc:
        raise EncodeError(f"invalid {command_type.__name__}: {exc}") from exc


def _check_wide(text: str) -> str:
    wide_length(text)
    encode_wide(text)
    return text


def new_send_chat(car_id: int, text: str) -> SendChat:
    """Chat to one car. Characters outside printable ASCII are dropped."""
    message = _check_wide(strip_non_printable_ascii(text))
    return _build(SendChat, car_id=car_id, message=message)


def new_broadcast_chat(text: str) -> BroadcastChat:
    """Chat to every car. Characters outside printable ASCII are dropped."""
    message = _check_wide(strip_non_printable_ascii(text))
    return _build(BroadcastChat, message=message)


def new_admin_command(text: str) -> AdminCommand:
    """Run a server admin command, e.g. ``/next_session``. Sent unmodified."""
    return _build(AdminCommand, command=_check_wide(text))


def new_kick_user(car_id: int) -> KickUser:
    return _build(KickUser, car_id=car_id)


def new_get_car_info(car_id: int) -> GetCarInfo:
    return _build(GetCarInfo, car_id=car_id)


def new_enable_realtime_pos_interval(interval_ms: int) -> EnableRealtimePosInterval:
    return _build(EnableRealtimePosInterval, interval=interval_ms)


def new_get_session_info() -> GetSessionInfo:
    return GetSessionInfo()


def new_next_session() -> NextSession:
    return NextSession()


def new_restart_session() -> RestartSession:
    return RestartSession()
