"""Tests for logging setup."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from cmj_kinetics.core.config import LoggingSettings
from cmj_kinetics.core.logging import PACKAGE_LOGGER, get_logger, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers added by a test."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


class TestResolveLevel:
    """Tests for level names."""

    @pytest.mark.parametrize(
        "level, expected",
        [
            ("debug", logging.DEBUG),
            (" WARNING ", logging.WARNING),
            (logging.ERROR, logging.ERROR),
            ("loud", logging.INFO),
        ],
    )
    def test_levels(self, level, expected) -> None:
        """Names are case-insensitive; unknown names mean INFO."""
        assert resolve_level(level) == expected


class TestSetupLogging:
    """Tests for handler configuration."""

    def test_console_stream(self) -> None:
        """Console lines go to the given stream in short form."""
        stream = io.StringIO()
        setup_logging(LoggingSettings(level="INFO"), stream=stream)

        get_logger("batch").info("Trial %d skipped", 3)
        get_logger("batch").debug("hidden")

        assert stream.getvalue() == "INFO: Trial 3 skipped\n"

    def test_level_override(self) -> None:
        """An explicit level wins over the configured one."""
        stream = io.StringIO()
        logger = setup_logging(LoggingSettings(level="ERROR"), level="debug", stream=stream)

        get_logger("cli").debug("Using stored frame rate 240")

        assert logger.level == logging.DEBUG
        assert "DEBUG: Using stored frame rate 240" in stream.getvalue()

    def test_repeated_setup_replaces_handlers(self) -> None:
        """Setting up twice does not duplicate output."""
        first = io.StringIO()
        second = io.StringIO()
        setup_logging(LoggingSettings(), stream=first)
        logger = setup_logging(LoggingSettings(), stream=second)

        get_logger("store").warning("once")

        assert len(logger.handlers) == 1
        assert first.getvalue() == ""
        assert second.getvalue().count("once") == 1

    def test_log_file(self, tmp_path: Path) -> None:
        """A log file gets timestamped lines with the logger name."""
        log_file = tmp_path / "logs" / "cmj.log"
        logger = setup_logging(
            LoggingSettings(level="INFO", file=str(log_file)), stream=io.StringIO()
        )

        get_logger("cmj_kinetics.store.database").info("Initialized database tables")
        for handler in logger.handlers:
            handler.flush()

        line = log_file.read_text(encoding="utf-8").strip()
        assert line.endswith("| cmj_kinetics.store.database | Initialized database tables")
        assert "| INFO     |" in line

    def test_sql_logger_kept_quiet(self) -> None:
        """SQLAlchemy engine logging stays at WARNING."""
        setup_logging(LoggingSettings(level="DEBUG"), stream=io.StringIO())

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


class TestGetLogger:
    """Tests for logger naming."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("cmj_kinetics", "cmj_kinetics"),
            ("cmj_kinetics.cli", "cmj_kinetics.cli"),
            ("batch", "cmj_kinetics.batch"),
            ("cmj_kineticsx", "cmj_kinetics.cmj_kineticsx"),
        ],
    )
    def test_names_in_package_namespace(self, name, expected) -> None:
        """Loggers always sit under the package logger."""
        assert get_logger(name).name == expected
