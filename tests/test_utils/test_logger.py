from __future__ import annotations

import io
import sys
import logging
from typing import Generator
from unittest.mock import patch

import pytest

from trainkeeper.utils.logger import (
    ROOT_LOGGER_NAME,
    ColoredFormatter,
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)


@pytest.fixture
def clean_logger_state() -> Generator[None, None, None]:
    """Clear handlers and the configured flag around each test."""
    import trainkeeper.utils.logger as logger_module

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    logger_module._logging_configured = False

    yield

    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._logging_configured = False


@pytest.fixture
def captured_stream(monkeypatch: pytest.MonkeyPatch) -> io.StringIO:
    """Plain-text stream; colors are disabled so assertions see bare level names."""
    monkeypatch.setenv("NO_COLOR", "1")
    return io.StringIO()


def _record(level: int = logging.INFO, message: str = "Test message") -> logging.LogRecord:
    return logging.LogRecord(
        name="trainkeeper.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


@pytest.mark.unit
class TestColoredFormatter:
    """Tests for ColoredFormatter ANSI color formatting."""

    def test_init_default_values(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s")

        assert formatter.use_color is True
        assert formatter._fmt == "%(levelname)s: %(message)s"

    def test_format_with_color_enabled(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=True)

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            result = formatter.format(_record(logging.ERROR))

        assert "\033[31mERROR\033[0m" in result
        assert "Test message" in result

    def test_format_with_color_disabled(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=False)

        assert formatter.format(_record(logging.WARNING)) == "WARNING: Test message"

    def test_format_preserves_original_record(self) -> None:
        """Other handlers must keep seeing the plain level name."""
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=True)
        record = _record(logging.DEBUG)

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            formatter.format(record)

        assert record.levelname == "DEBUG"

    @pytest.mark.parametrize("variable", ["NO_COLOR", "CI"])
    def test_should_use_color_env_disables(
        self, monkeypatch: pytest.MonkeyPatch, variable: str
    ) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)
        monkeypatch.setenv(variable, "1")

        assert ColoredFormatter._should_use_color() is False

    def test_should_use_color_tty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)

        with patch.object(sys.stderr, "isatty", return_value=True):
            assert ColoredFormatter._should_use_color() is True

        with patch.object(sys.stderr, "isatty", return_value=False):
            assert ColoredFormatter._should_use_color() is False

    def test_should_use_color_isatty_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)

        with patch.object(sys.stderr, "isatty", side_effect=OSError("closed")):
            assert ColoredFormatter._should_use_color() is False


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging."""

    def test_setup_default_config(self, clean_logger_state: None) -> None:
        setup_logging()

        logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert logger.propagate is False
        assert is_logging_configured()

    def test_setup_replaces_previous_handler(self, clean_logger_state: None) -> None:
        setup_logging()
        setup_logging(level=logging.DEBUG)

        logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_setup_writes_to_stream(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(stream=captured_stream)

        get_logger("resolver").info("resolved %s", "5.7.1")

        assert "INFO: resolved 5.7.1" in captured_stream.getvalue()

    def test_setup_filters_debug_at_info_level(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(stream=captured_stream)

        get_logger("resolver").debug("hidden")

        assert captured_stream.getvalue() == ""

    def test_setup_verbose_format(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(level=logging.DEBUG, verbose=True, stream=captured_stream)

        get_logger("resolver").debug("shown")

        output = captured_stream.getvalue()
        assert "trainkeeper.resolver" in output
        assert "shown" in output

    def test_engine_debug_records(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        """Resolution decisions are emitted at DEBUG under the package logger."""
        from trainkeeper.core.resolver import propose_upgrade
        from trainkeeper.models.dependency import Dependency
        from trainkeeper.models.iteration import SR1

        setup_logging(level=logging.DEBUG, stream=captured_stream)

        propose_upgrade(Dependency.of("Jackson", "com.example:jackson"), SR1, "1.0.0", ["1.0.1"])

        assert "Resolved 1.0.0" in captured_stream.getvalue()


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger name qualification."""

    def test_get_logger_no_name(self, clean_logger_state: None) -> None:
        assert get_logger().name == ROOT_LOGGER_NAME
        assert get_logger(ROOT_LOGGER_NAME).name == ROOT_LOGGER_NAME

    def test_get_logger_qualifies_simple_name(self, clean_logger_state: None) -> None:
        assert get_logger("config").name == "trainkeeper.config"

    def test_get_logger_keeps_qualified_name(self, clean_logger_state: None) -> None:
        assert get_logger("trainkeeper.config") is get_logger("config")

    def test_get_logger_adds_null_handler(self, clean_logger_state: None) -> None:
        logger = get_logger("unconfigured.module")

        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)


@pytest.mark.unit
class TestDisableLogging:
    """Tests for disable_logging."""

    def test_disable_after_setup(
        self, clean_logger_state: None, captured_stream: io.StringIO
    ) -> None:
        setup_logging(stream=captured_stream)
        disable_logging()

        get_logger("resolver").warning("silenced")

        assert captured_stream.getvalue() == ""
        assert not is_logging_configured()

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert all(isinstance(h, logging.NullHandler) for h in root_logger.handlers)
