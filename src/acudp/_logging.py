"""Package logging for the listener, recorder and replayer.

The ``acudp`` logger has only a NullHandler until a log directory is given,
either through ``ACUDP_LOG_DIR`` or ``configure_file_logging``. From then on
every record goes to ``<log dir>/acudp.log``.
"""

from __future__ import annotations

import functools
import logging
import os
import threading
import time
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

LOGGER_NAME = "acudp"
LOG_FILE_NAME = "acudp.log"

_LOG_DIR: str | None = os.environ.get("ACUDP_LOG_DIR") or None

_logger: logging.Logger | None = None
_logger_lock = threading.Lock()


def _has_handler(logger: logging.Logger, handler_type: type[logging.Handler]) -> bool:
    return any(isinstance(h, handler_type) for h in logger.handlers)


def _remove_file_handlers(logger: logging.Logger) -> None:
    for h in logger.handlers[:]:
        if isinstance(h, logging.FileHandler):
            h.close()
            logger.removeHandler(h)


def configure_file_logging(log_dir: str | os.PathLike[str]) -> None:
    """Send the package log to ``<log_dir>/acudp.log``, replacing any earlier log file."""
    global _LOG_DIR, _logger
    with _logger_lock:
        _LOG_DIR = os.fspath(log_dir)
        _remove_file_handlers(logging.getLogger(LOGGER_NAME))
        _logger = None


def get_logger() -> logging.Logger:
    """Return the package logger, attaching its handler on first use."""
    global _logger
    if _logger is not None:
        return _logger

    with _logger_lock:
        if _logger is not None:
            return _logger

        logger = logging.getLogger(LOGGER_NAME)

        if _LOG_DIR is None:
            if not _has_handler(logger, logging.NullHandler):
                logger.addHandler(logging.NullHandler())
        else:
            os.makedirs(_LOG_DIR, exist_ok=True)
            logger.setLevel(logging.DEBUG)
            logger.propagate = False

            # Other handlers (an application's, or a test runner's) may already be attached.
            if not _has_handler(logger, logging.FileHandler):
                handler = logging.FileHandler(os.path.join(_LOG_DIR, LOG_FILE_NAME), encoding="utf-8")
                handler.setFormatter(
                    logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"),
                )
                logger.addHandler(handler)

        _logger = logger

    return _logger


def log_operation(fn: F) -> F:
    """Decorator that logs a long-running operation's start, result and duration."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger()
        arg_parts = [_summarise(a) for a in args]
        arg_parts += [f"{k}={_summarise(v)}" for k, v in kwargs.items()]
        arg_str = ", ".join(arg_parts)
        logger.info("CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = fn(*args, **kwargs)
            elapsed = time.monotonic() - start
            count = len(result) if isinstance(result, list) else result
            logger.info(
                "OK: %s -> %r (%.3fs)",
                fn.__qualname__, count, elapsed,
            )
            return result
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(exc).__name__, exc, elapsed,
            )
            raise

    return wrapper  # type: ignore[return-value]


def _summarise(value: Any) -> str:
    # Entry lists can be huge; only their size is useful in a log line.
    if isinstance(value, list):
        return f"<{len(value)} items>"
    if callable(value):
        return getattr(value, "__qualname__", type(value).__name__)
    return repr(value)
