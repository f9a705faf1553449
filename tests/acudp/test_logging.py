"""Tests for acudp._logging: the package logger and the operation decorator."""

from __future__ import annotations

import io
import logging

import pytest

import acudp._logging as mod
from acudp._logging import configure_file_logging, get_logger, log_operation


class _FakeReplayer:
    """Minimal class to exercise the decorator."""

    @log_operation
    def load(self, path: str) -> list[int]:
        return [1, 2, 3]

    @log_operation
    def run(self, entries: list[int], multiplier: int) -> int:
        return len(entries)

    @log_operation
    def failing(self) -> None:
        raise RuntimeError("replay broke")


@pytest.fixture
def replayer() -> _FakeReplayer:
    return _FakeReplayer()


class TestGetLogger:
    def test_single_instance(self) -> None:
        assert get_logger() is get_logger()

    def test_does_not_propagate(self) -> None:
        logger = get_logger()
        assert logger.name == "acudp"
        assert logger.propagate is False
        assert sum(isinstance(h, logging.FileHandler) for h in logger.handlers) == 1

    def test_creates_log_directory(self, tmp_path) -> None:
        new_dir = tmp_path / "nested" / "logs"
        configure_file_logging(new_dir)

        get_logger().info("hello")

        assert (new_dir / "acudp.log").exists()

    def test_file_written_when_other_handler_attached(self, _log_to_tmp_path) -> None:
        other = logging.StreamHandler(io.StringIO())
        logging.getLogger(mod.LOGGER_NAME).addHandler(other)

        get_logger().info("still in the file")

        assert "still in the file" in (_log_to_tmp_path / "acudp.log").read_text()

    def test_reconfigure_moves_log_file(self, tmp_path, _log_to_tmp_path) -> None:
        get_logger().info("first")
        configure_file_logging(tmp_path / "other")
        get_logger().info("second")

        logger = get_logger()
        assert sum(isinstance(h, logging.FileHandler) for h in logger.handlers) == 1
        assert "second" not in (_log_to_tmp_path / "acudp.log").read_text()
        assert "second" in (tmp_path / "other" / "acudp.log").read_text()


class TestDefaultLogging:
    @pytest.fixture(autouse=True)
    def _no_log_dir(self, monkeypatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(mod, "_LOG_DIR", None)
        monkeypatch.setattr(mod, "_logger", None)
        logging.getLogger(mod.LOGGER_NAME).handlers.clear()

    def test_null_handler_without_log_dir(self, tmp_path) -> None:
        logger = get_logger()
        logger.info("nowhere")

        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)
        assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        assert list(tmp_path.iterdir()) == []

    def test_null_handler_added_once(self) -> None:
        get_logger()
        mod._logger = None
        logger = get_logger()
        assert sum(isinstance(h, logging.NullHandler) for h in logger.handlers) == 1



class TestLogOperation:
    def test_returns_result(self, replayer) -> None:
        assert replayer.load("a.json") == [1, 2, 3]

    def test_logs_call_and_ok(self, replayer, _log_to_tmp_path) -> None:
        replayer.load("a.json")
        content = (_log_to_tmp_path / "acudp.log").read_text()
        assert "CALL: _FakeReplayer.load(" in content
        assert "'a.json'" in content
        assert "OK: _FakeReplayer.load -> 3" in content

    def test_summarises_lists(self, replayer, _log_to_tmp_path) -> None:
        replayer.run([1, 2, 3, 4], multiplier=2)
        content = (_log_to_tmp_path / "acudp.log").read_text()
        assert "<4 items>, multiplier=2" in content
        assert "OK: _FakeReplayer.run -> 4" in content

    def test_logs_failure(self, replayer, _log_to_tmp_path) -> None:
        with pytest.raises(RuntimeError, match="replay broke"):
            replayer.failing()
        content = (_log_to_tmp_path / "acudp.log").read_text()
        assert "FAIL: _FakeReplayer.failing" in content
        assert "RuntimeError" in content

    def test_preserves_function_name(self, replayer) -> None:
        assert replayer.load.__name__ == "load"
