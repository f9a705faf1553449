"""Event discriminants used on the wire."""

from __future__ import annotations

from enum import IntEnum


class Event(IntEnum):
    """Leading byte of every datagram, in both directions."""

    # Receive
    COLLISION_WITH_CAR = 10
    COLLISION_WITH_ENV = 11
    NEW_SESSION = 50
    NEW_CONNECTION = 51
    CONNECTION_CLOSED = 52
    CAR_UPDATE = 53
    CAR_INFO = 54
    END_SESSION = 55
    VERSION = 56
    CHAT = 57
    CLIENT_LOADED = 58
    SESSION_INFO = 59
    ERROR = 60
    LAP_COMPLETED = 73
    CLIENT_EVENT = 130

    # Send
    REALTIME_POS_INTERVAL = 200
    GET_CAR_INFO = 201
    SEND_CHAT = 202
    BROADCAST_CHAT = 203
    GET_SESSION_INFO = 204
    SET_SESSION_INFO = 205
    KICK_USER = 206
    NEXT_SESSION = 207
    RESTART_SESSION = 208
    ADMIN_COMMAND = 209
