"""acudp — telemetry protocol engine for the racing simulator's server UDP plugin port."""

from acudp._logging import configure_file_logging
from acudp.codec import decode, encode
from acudp.commands import (
    new_admin_command,
    new_broadcast_chat,
    new_enable_realtime_pos_interval,
    new_get_car_info,
    new_get_session_info,
    new_kick_user,
    new_next_session,
    new_restart_session,
    new_send_chat,
)
from acudp.config import ListenerConfig
from acudp.exceptions import (
    ACUDPError,
    DecodeError,
    EncodeError,
    ListenerBindError,
    ReplayError,
    TimeInPastError,
    UnknownEventError,
)
from acudp.listener import CallbackFunc, ServerListener
from acudp.models import Event, Message
from acudp.replay import Entry, Recorder, load_entries, replay_messages
from acudp.scheduler import Scheduler, Timer

__all__ = [
    "ACUDPError",
    "CallbackFunc",
    "DecodeError",
    "EncodeError",
    "Entry",
    "Event",
    "ListenerBindError",
    "ListenerConfig",
    "Message",
    "Recorder",
    "ReplayError",
    "Scheduler",
    "ServerListener",
    "TimeInPastError",
    "Timer",
    "UnknownEventError",
    "configure_file_logging",
    "decode",
    "encode",
    "load_entries",
    "new_admin_command",
    "new_broadcast_chat",
    "new_enable_realtime_pos_interval",
    "new_get_car_info",
    "new_get_session_info",
    "new_kick_user",
    "new_next_session",
    "new_restart_session",
    "new_send_chat",
    "replay_messages",
]

__version__ = "0.1.0"
