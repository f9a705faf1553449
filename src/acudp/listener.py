"""UDP listener: receives server plugin datagrams and hands decoded messages to a callback."""

from __future__ import annotations

import socket
import threading
from typing import Callable

from acudp._logging import get_logger
from acudp.codec import decode, encode
from acudp.commands import new_enable_realtime_pos_interval
from acudp.config import ListenerConfig
from acudp.exceptions import DecodeError, EncodeError, ListenerBindError
from acudp.models import Command, Event, Message, ServerError

CallbackFunc = Callable[[Message], None]

_READ_BUFFER_SIZE = 100_000_000


class ServerListener:
    """Owns the plugin UDP socket and a receive thread.

    Every datagram is decoded on the receive thread and passed to ``callback``;
    receive and decode failures arrive as ``ServerError`` messages. A slow
    callback delays the next datagram and the OS may drop packets meanwhile.

    Usage:
        def on_message(message: Message) -> None:
            print(message.event, message)

        with ServerListener(on_message, ListenerConfig(receive_port=12000)) as listener:
            listener.send(new_broadcast_chat("Hello!"))
            ...
    """

    def __init__(self, callback: CallbackFunc, config: ListenerConfig | None = None) -> None:
        self._config = config or ListenerConfig()
        self._callback = callback
        self._stop = threading.Event()
        self._closed = False
        self._logger = get_logger()

        self._socket = self._bind(self._config.bind_host, self._config.receive_port)
        self._forwarder: socket.socket | None = None

        if self._config.forward_address is not None:
            try:
                self._forwarder = self._bind(self._config.bind_host, self._config.forward_listen_port)
            except ListenerBindError:
                self._socket.close()
                raise

        self._threads = [
            threading.Thread(target=self._serve, name="acudp-listener", daemon=True),
        ]
        if self._forwarder is not None:
            self._threads.append(
                threading.Thread(target=self._forward_serve, name="acudp-forwarder", daemon=True),
            )

        for thread in self._threads:
            thread.start()

        self._logger.debug(
            "Started new UDP server connection on %s:%d", *self.address,
        )

    def __enter__(self) -> ServerListener:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @property
    def address(self) -> tuple[str, int]:
        """Local (host, port) the receive socket is bound to."""
        host, port = self._socket.getsockname()[:2]
        return host, port

    @property
    def forward_listen_address(self) -> tuple[str, int] | None:
        if self._forwarder is None:
            return None
        host, port = self._forwarder.getsockname()[:2]
        return host, port

    @property
    def closed(self) -> bool:
        return self._closed

    def _bind(self, host: str, port: int) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        sock.settimeout(self._config.poll_interval)

        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF, _READ_BUFFER_SIZE)
        except OSError as exc:
            self._logger.error("unable to set read buffer: %s", exc)

        try:
            sock.bind((host, port))
        except OSError as exc:
            sock.close()
            raise ListenerBindError(host, port, str(exc)) from exc

        return sock

    def close(self) -> None:
        """Stop the receive loop and release the sockets. Safe to call twice."""
        if self._closed:
            return
        self._closed = True

        self._stop.set()
        for thread in self._threads:
            if thread is not threading.current_thread():
                thread.join(timeout=self._config.poll_interval * 4 + 1)

        self._socket.close()
        if self._forwarder is not None:
            self._forwarder.close()

        self._logger.debug("Closed UDP server connection")

    def send(self, command: Command) -> None:
        """Encode ``command`` and send it to the server.

        Raises:
            EncodeError: If the command cannot be encoded; nothing is sent.
            OSError: If the datagram cannot be sent.
        """
        data = encode(command)
        self._socket.sendto(data, self._config.server_address)

    def _serve(self) -> None:
        max_size = self._config.max_datagram_size

        while not self._stop.is_set():
            try:
                data, _ = self._socket.recvfrom(max_size + 1)
            except TimeoutError:
                continue
            except OSError as exc:
                if self._stop.is_set():
                    break
                self._logger.debug("could not read from UDP: %s", exc)
                self._deliver(ServerError.from_exception(exc))
                if self._socket.fileno() == -1:
                    break
                continue

            self._handle(data)

    def _handle(self, data: bytes) -> None:
        if len(data) > self._config.max_datagram_size:
            self._logger.error("UDP datagram larger than %d bytes", self._config.max_datagram_size)
            message: Message = ServerError(
                message=f"datagram larger than {self._config.max_datagram_size} bytes",
                error_type=DecodeError.__name__,
            )
        else:
            try:
                message = decode(data)
            except DecodeError as exc:
                self._logger.error("could not handle UDP message: %s", exc)
                message = ServerError.from_exception(exc)

        self._deliver(message)

        if self._forwarder is not None and self._config.forward_address is not None:
            try:
                self._forwarder.sendto(data, self._config.forward_address)
            except OSError as exc:
                self._logger.debug("could not forward UDP message: %s", exc)

        if self._config.realtime_pos_interval_ms > 0 and message.event == Event.NEW_SESSION:
            try:
                self.send(new_enable_realtime_pos_interval(self._config.realtime_pos_interval_ms))
            except (OSError, EncodeError) as exc:
                self._logger.error("could not send realtime pos interval: %s", exc)

    def _deliver(self, message: Message) -> None:
        try:
            self._callback(message)
        except Exception:
            self._logger.exception("UDP callback failed for %s", message.event.name)

    def _forward_serve(self) -> None:
        assert self._forwarder is not None

        while not self._stop.is_set():
            try:
                data, _ = self._forwarder.recvfrom(self._config.max_datagram_size)
            except TimeoutError:
                continue
            except OSError:
                if self._stop.is_set() or self._forwarder.fileno() == -1:
                    break
                continue

            try:
                self._socket.sendto(data, self._config.server_address)
            except OSError as exc:
                self._logger.debug("could not relay forwarded UDP message: %s", exc)
