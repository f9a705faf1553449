"""Custom exceptions for the acudp package."""

from __future__ import annotations


class ACUDPError(Exception):
    """Base exception for all acudp errors."""


class DecodeError(ACUDPError):
    """Raised when a datagram cannot be decoded into a message."""


class UnknownEventError(DecodeError):
    """Raised when a datagram starts with an unrecognised event discriminant."""

    def __init__(self, event_type: int, payload: bytes = b"") -> None:
        self.event_type = event_type
        self.payload = payload
        super().__init__(f"unknown event type: {event_type}")


class EncodeError(ACUDPError):
    """Raised when an outbound command cannot be encoded."""


class ListenerBindError(ACUDPError):
    """Raised when the listener cannot bind its UDP socket."""

    def __init__(self, host: str, port: int, message: str) -> None:
        self.host = host
        self.port = port
        super().__init__(f"could not bind {host}:{port}: {message}")


class ReplayError(ACUDPError):
    """Raised when a replay log cannot be opened or parsed."""


class TimeInPastError(ACUDPError):
    """Raised when a timer is registered for a time that has already passed."""
