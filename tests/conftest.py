"""Shared test fixtures and sample datagram builders."""

from __future__ import annotations

import logging
import struct

import pytest

from acudp.models import Event


def narrow(text: str) -> bytes:
    data = text.encode("utf-8")
    return struct.pack("<B", len(data)) + data


def wide(text: str) -> bytes:
    return struct.pack("<B", len(text)) + text.encode("utf-32-le")


def new_connection_packet(
    car_id: int = 3,
    driver_name: str = "Jenson",
    driver_guid: str = "76561198000000001",
    car_model: str = "ks_ferrari_sf15t",
    car_skin: str = "red_01",
    event: Event = Event.NEW_CONNECTION,
) -> bytes:
    return (
        struct.pack("<B", event)
        + wide(driver_name)
        + wide(driver_guid)
        + struct.pack("<B", car_id)
        + narrow(car_model)
        + wide(car_skin)
    )


def car_update_packet(
    car_id: int = 4,
    pos: tuple[float, float, float] = (1.5, -2.25, 100.0),
    velocity: tuple[float, float, float] = (30.5, 0.0, -4.0),
    gear: int = 5,
    rpm: int = 7250,
    spline: float = 0.75,
) -> bytes:
    return struct.pack("<BB3f3fBHf", Event.CAR_UPDATE, car_id, *pos, *velocity, gear, rpm, spline)


def car_info_packet(car_id: int = 2, connected: bool = True) -> bytes:
    return (
        struct.pack("<BBB", Event.CAR_INFO, car_id, int(connected))
        + wide("ks_mazda_mx5_cup")
        + wide("00_official")
        + wide("Kimi")
        + wide("Lotus")
        + wide("76561198000000002")
    )


def session_info_packet(event: Event = Event.SESSION_INFO, elapsed_ms: int = -5000) -> bytes:
    return (
        struct.pack("<BBBBB", event, 4, 1, 1, 3)
        + wide("Friday Night Racing")
        + narrow("spa")
        + narrow("")
        + narrow("Qualify")
        + struct.pack("<BHHHBB", 2, 15, 0, 60, 22, 31)
        + narrow("3_clear")
        + struct.pack("<i", elapsed_ms)
    )


def lap_completed_packet(cars: list[tuple[int, int, int, int]], cars_count: int | None = None) -> bytes:
    count = len(cars) if cars_count is None else cars_count
    data = struct.pack("<BBIBB", Event.LAP_COMPLETED, 1, 92345, 2, count)
    for car in cars:
        data += struct.pack("<BIHB", *car)
    return data


def collision_with_car_packet() -> bytes:
    return struct.pack(
        "<BBBBf3f3f",
        Event.CLIENT_EVENT,
        Event.COLLISION_WITH_CAR,
        1,
        7,
        12.5,
        10.0, 2.0, -3.5,
        0.5, 0.25, 1.0,
    )


def collision_with_env_packet() -> bytes:
    return struct.pack(
        "<BBBf3f3f",
        Event.CLIENT_EVENT,
        Event.COLLISION_WITH_ENV,
        6,
        40.0,
        -100.0, 8.0, 250.5,
        0.0, -0.5, 0.75,
    )


def chat_packet(car_id: int = 2, message: str = "gg") -> bytes:
    return struct.pack("<BB", Event.CHAT, car_id) + wide(message)


@pytest.fixture(autouse=True)
def _log_to_tmp_path(tmp_path):
    """Redirect the package log file into tmp_path for every test."""
    import acudp._logging as mod

    old_logger = mod._logger
    old_dir = mod._LOG_DIR

    named_logger = logging.getLogger(mod.LOGGER_NAME)
    named_logger.handlers.clear()

    mod.configure_file_logging(tmp_path / "logs")

    yield tmp_path / "logs"

    for h in named_logger.handlers[:]:
        h.close()
        named_logger.removeHandler(h)
    mod._logger = old_logger
    mod._LOG_DIR = old_dir
