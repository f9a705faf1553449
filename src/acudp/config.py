"""Default settings for the listener, replayer and scheduler."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_SERVER_HOST = "127.0.0.1"
DEFAULT_BIND_HOST = "0.0.0.0"
DEFAULT_RECEIVE_PORT = 12000  # server's UDP_PLUGIN_LOCAL_PORT sends here
DEFAULT_SEND_PORT = 11000
MAX_DATAGRAM_SIZE = 1024
DEFAULT_POLL_INTERVAL = 0.5
DEFAULT_SCHEDULER_RESOLUTION = 1.0
DEFAULT_LOG_DIR = "logs"

_ENV_PREFIX = "ACUDP_"


def _env(name: str, default: str) -> str:
    return os.environ.get(_ENV_PREFIX + name, default)


@dataclass(frozen=True)
class ListenerConfig:
    """Socket settings for a ServerListener.

    Usage:
        config = ListenerConfig(receive_port=12000, send_port=11000)

        # Or from ACUDP_* environment variables:
        config = ListenerConfig.from_env()
    """

    server_host: str = DEFAULT_SERVER_HOST
    bind_host: str = DEFAULT_BIND_HOST
    receive_port: int = DEFAULT_RECEIVE_PORT
    send_port: int = DEFAULT_SEND_PORT
    max_datagram_size: int = MAX_DATAGRAM_SIZE
    poll_interval: float = DEFAULT_POLL_INTERVAL
    realtime_pos_interval_ms: int = -1
    forward_address: tuple[str, int] | None = None
    forward_listen_port: int = 0

    @property
    def server_address(self) -> tuple[str, int]:
        return (self.server_host, self.send_port)

    @classmethod
    def from_env(cls) -> ListenerConfig:
        """Build a config from ACUDP_* environment variables, falling back to defaults.

        ACUDP_FORWARD_ADDRESS takes the form ``host:port``.
        """
        forward: tuple[str, int] | None = None
        forward_str = _env("FORWARD_ADDRESS", "")
        if forward_str:
            host, _, port = forward_str.rpartition(":")
            forward = (host, int(port))

        return cls(
            server_host=_env("SERVER_HOST", DEFAULT_SERVER_HOST),
            bind_host=_env("BIND_HOST", DEFAULT_BIND_HOST),
            receive_port=int(_env("RECEIVE_PORT", str(DEFAULT_RECEIVE_PORT))),
            send_port=int(_env("SEND_PORT", str(DEFAULT_SEND_PORT))),
            poll_interval=float(_env("POLL_INTERVAL", str(DEFAULT_POLL_INTERVAL))),
            realtime_pos_interval_ms=int(_env("REALTIME_POS_INTERVAL_MS", "-1")),
            forward_address=forward,
            forward_listen_port=int(_env("FORWARD_LISTEN_PORT", "0")),
        )
