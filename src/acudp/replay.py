"""Record decoded messages to a JSON log and replay them with their original timing."""

from __future__ import annotations

import os
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    SerializeAsAny,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from acudp._logging import get_logger, log_operation
from acudp.exceptions import ReplayError
from acudp.models import MESSAGE_TYPES, Event, Message

CallbackFunc = Callable[[Message], None]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Entry(BaseModel):
    """One timestamped message in a replay log.

    ``data`` is parsed with the schema selected by ``event_type``, so
    ``event_type`` must precede it. ``received_at`` must carry a timezone
    so entries from one log always compare.
    """

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    received_at: AwareDatetime
    event_type: Event
    data: SerializeAsAny[Message]

    @field_validator("data", mode="before")
    @classmethod
    def _parse_data(cls, value: Any, info: ValidationInfo) -> Message:
        event_type = info.data.get("event_type")
        if event_type is None:
            raise ValueError("event type not specified")

        model = MESSAGE_TYPES.get(event_type)
        if model is None:
            raise ValueError(f"no message schema for event type {int(event_type)}")

        if isinstance(value, model):
            return value

        if isinstance(value, dict) and "event_type" in model.model_fields:
            value = {"event_type": event_type, **value}

        return model.model_validate(value)

    @model_validator(mode="after")
    def _data_matches_event(self) -> Entry:
        if self.data.event != self.event_type:
            raise ValueError(
                f"data is a {self.data.event.name} message but event type is {self.event_type.name}"
            )
        return self


_ENTRY_LIST = TypeAdapter(list[Entry])


def dump_entries(entries: Iterable[Entry]) -> bytes:
    """Serialise entries as an indented JSON array."""
    return _ENTRY_LIST.dump_json(list(entries), indent=2)


class Recorder:
    """Listener callback that persists every message it receives.

    The whole log is rewritten on each message (via a temporary file and an
    atomic rename), so the file on disk always holds the complete history up
    to the last successful write. A new Recorder starts with an empty log and
    overwrites whatever ``path`` held before. Not safe for concurrent writers.

    Usage:
        recorder = Recorder("session.json")
        with ServerListener(recorder):
            ...
    """

    def __init__(self, path: str | os.PathLike[str], clock: Callable[[], datetime] = _now) -> None:
        self.path = Path(path)
        self._clock = clock
        self._entries: list[Entry] = []
        self._logger = get_logger()

    @property
    def entries(self) -> list[Entry]:
        return list(self._entries)

    def __call__(self, message: Message) -> None:
        self._entries.append(
            Entry(received_at=self._clock(), event_type=message.event, data=message),
        )

        try:
            self._write()
        except OSError as exc:
            self._logger.error("could not save replay log %s: %s", self.path, exc)

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_bytes(dump_entries(self._entries))
        os.replace(tmp_path, self.path)


@log_operation
def load_entries(path: str | os.PathLike[str]) -> list[Entry]:
    """Load a replay log, oldest entry first.

    Raises:
        ReplayError: If the file cannot be read or any entry fails to parse.
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise ReplayError(f"could not open replay log {path}: {exc}") from exc

    try:
        entries = _ENTRY_LIST.validate_json(raw)
    except ValidationError as exc:
        raise ReplayError(f"could not parse replay log {path}: {exc}") from exc

    return sorted(entries, key=lambda e: e.received_at)


def _dispatch(callback: CallbackFunc, message: Message) -> None:
    try:
        callback(message)
    except Exception:
        get_logger().exception("replay callback failed for %s", message.event.name)


@log_operation
def replay_messages(
    source: str | os.PathLike[str] | Iterable[Entry],
    multiplier: float,
    callback: CallbackFunc,
    *,
    concurrent: bool = False,
    max_delay: float | None = None,
    cancel: threading.Event | None = None,
) -> int:
    """Deliver logged messages to ``callback``, reproducing the gaps between them.

    Each entry waits ``(received_at - previous received_at) / multiplier``
    seconds before it is delivered. The wait happens on the calling thread.

    Args:
        source: A replay log path, or entries already ordered oldest first.
        multiplier: Playback speed; 2 replays twice as fast. Must be positive.
        callback: Receives each entry's message.
        concurrent: Start each callback on its own daemon thread without
            waiting for it. Callbacks start in log order but may finish in any
            order, and they are never joined.
        max_delay: Upper bound in seconds for any single wait.
        cancel: Checked before every wait and interrupts a wait in progress.

    Returns:
        The number of messages delivered (or started, when ``concurrent``).

    Raises:
        ReplayError: If ``source`` is a path that cannot be loaded. Nothing is replayed.
        ValueError: If ``multiplier`` is not positive.
    """
    if multiplier <= 0:
        raise ValueError(f"multiplier must be positive, got {multiplier}")

    if isinstance(source, (str, os.PathLike)):
        entries = load_entries(source)
    else:
        entries = list(source)

    if not entries:
        return 0

    reference = entries[0].received_at
    delivered = 0

    for entry in entries:
        if cancel is not None and cancel.is_set():
            break

        delay = (entry.received_at - reference).total_seconds() / multiplier
        if max_delay is not None:
            delay = min(delay, max_delay)

        if delay > 0:
            if cancel is not None:
                if cancel.wait(delay):
                    break
            else:
                time.sleep(delay)

        if concurrent:
            threading.Thread(
                target=_dispatch, args=(callback, entry.data), name="acudp-replay", daemon=True,
            ).start()
        else:
            callback(entry.data)

        delivered += 1
        reference = entry.received_at

    return delivered
