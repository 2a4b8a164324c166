"""Tests for logging configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog

from feedmail.core.logging import (
    build_formatter,
    configure_structlog,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def clean_handlers() -> Iterator[None]:
    """Close and drop handlers installed by a test."""
    yield
    logger = logging.getLogger("feedmail")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def read_json_lines(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_creates_logger(self) -> None:
        """Test logger creation."""
        logger = setup_logging(console=True, file_logging=False)

        assert logger.name == "feedmail"
        assert logger.level == logging.INFO

    def test_console_only(self) -> None:
        """Test console-only logging uses the shared formatter."""
        logger = setup_logging(console=True, file_logging=False)

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)
        assert isinstance(logger.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_file_logging(self, tmp_path: Path) -> None:
        """Test file logging with rolling handler."""
        logger = setup_logging(
            console=False, file_logging=True, log_dir=tmp_path, log_file="test.log"
        )

        logger.info("Test message")

        assert len(logger.handlers) == 1
        assert "Test message" in (tmp_path / "test.log").read_text(encoding="utf-8")

    def test_json_file_logging(self, tmp_path: Path) -> None:
        """Test stdlib records are rendered as JSON lines."""
        setup_logging(
            console=False, file_logging=True, log_dir=tmp_path, json_format=True
        )

        get_logger("cli").warning("Loaded %d email(s)", 3)

        [entry] = read_json_lines(tmp_path / "feedmail.log")
        assert entry["event"] == "Loaded 3 email(s)"
        assert entry["level"] == "warning"
        assert entry["logger"] == "feedmail.cli"
        assert "timestamp" in entry

    def test_custom_level(self) -> None:
        """Test custom log level."""
        logger = setup_logging(level=logging.DEBUG, console=True, file_logging=False)

        assert logger.level == logging.DEBUG

    def test_clears_existing_handlers(self) -> None:
        """Test that repeated setup does not stack handlers."""
        first = len(setup_logging(console=True, file_logging=False).handlers)
        second = len(setup_logging(console=True, file_logging=False).handlers)

        assert first == second


class TestBuildFormatter:
    """Tests for build_formatter function."""

    def test_console_renderer(self) -> None:
        """Test console rendering keeps the event text."""
        record = logging.LogRecord("feedmail.x", logging.INFO, __file__, 1, "hello", None, None)

        assert "hello" in build_formatter(json_format=False).format(record)

    def test_json_renderer(self) -> None:
        """Test JSON rendering of a foreign record."""
        record = logging.LogRecord("feedmail.x", logging.ERROR, __file__, 1, "boom", None, None)

        data = json.loads(build_formatter(json_format=True).format(record))

        assert data["event"] == "boom"
        assert data["level"] == "error"


class TestGetLogger:
    """Tests for get_logger function."""

    def test_prefixes_name(self) -> None:
        """Test logger name prefixing."""
        assert get_logger("mymodule").name == "feedmail.mymodule"

    def test_preserves_full_name(self) -> None:
        """Test preserving full feedmail name."""
        assert get_logger("feedmail.extraction.pipeline").name == "feedmail.extraction.pipeline"

    def test_similar_prefix(self) -> None:
        """Test a name that only starts with the same letters is still prefixed."""
        assert get_logger("feedmailer").name == "feedmail.feedmailer"


class TestConfigureStructlog:
    """Tests for configure_structlog function."""

    def test_events_reach_handlers(self, tmp_path: Path) -> None:
        """Test structlog events go through the stdlib handlers."""
        setup_logging(console=False, file_logging=True, log_dir=tmp_path, json_format=True)
        configure_structlog(log_level="INFO")

        log = structlog.get_logger("feedmail.extraction.pipeline").bind(email_id="m-1")
        log.debug("post_extraction_started")
        with structlog.contextvars.bound_contextvars(path="batch.json"):
            log.info("post_extracted", author="Jane Doe")

        [entry] = read_json_lines(tmp_path / "feedmail.log")
        assert entry["event"] == "post_extracted"
        assert entry["author"] == "Jane Doe"
        assert entry["email_id"] == "m-1"
        assert entry["path"] == "batch.json"
        assert entry["logger"] == "feedmail.extraction.pipeline"
        assert entry["level"] == "info"

    def test_level(self) -> None:
        """Test the filtering level."""
        with patch("feedmail.core.logging.structlog") as mock_structlog:
            configure_structlog(log_level="DEBUG")

            mock_structlog.configure.assert_called_once()
            mock_structlog.make_filtering_bound_logger.assert_called_once_with(logging.DEBUG)

    def test_unknown_level_falls_back_to_info(self) -> None:
        """Test an unknown level name uses INFO."""
        with patch("feedmail.core.logging.structlog") as mock_structlog:
            configure_structlog(log_level="chatty")

            mock_structlog.make_filtering_bound_logger.assert_called_once_with(logging.INFO)
