"""Tests for logging setup."""

import json
import logging
from pathlib import Path

from book_search.utils.logging import (
    ConsoleFormatter,
    JSONFormatter,
    log_with_context,
    setup_logging,
)


def _record(message: str = "hello", **context) -> logging.LogRecord:
    record = logging.LogRecord("book_search.test", logging.WARNING, __file__, 1, message, None, None)
    if context:
        record.context = context
    return record


class TestFormatters:
    """Tests for log formatters."""

    def test_json_formatter_includes_context(self) -> None:
        """Test that structured context lands in the JSON document."""
        data = json.loads(JSONFormatter().format(_record(chapter_index=2)))

        assert data["message"] == "hello"
        assert data["level"] == "WARNING"
        assert data["logger"] == "book_search.test"
        assert data["chapter_index"] == 2

    def test_console_formatter_without_color(self) -> None:
        """Test plain console output with context pairs."""
        line = ConsoleFormatter(use_color=False).format(_record(session_id="abc"))

        assert line == "WARNING  book_search.test: hello [session_id=abc]"

    def test_console_formatter_with_color(self) -> None:
        """Test that colored output wraps the level name."""
        line = ConsoleFormatter(use_color=True).format(_record())

        assert line.startswith("\033[33m")
        assert line.endswith("book_search.test: hello")


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_sets_level_and_handler(self) -> None:
        """Test that the package logger is configured once."""
        logger = setup_logging(level="debug")
        setup_logging(level="DEBUG")

        assert logger.name == "book_search"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_file_handler_writes_json(self, temp_dir: Path) -> None:
        """Test that the log file receives JSON lines."""
        log_file = temp_dir / "logs" / "search.log"
        logger = setup_logging(level="INFO", log_file=log_file)

        log_with_context(logger, logging.INFO, "scan done", results=3)
        for handler in logger.handlers:
            handler.flush()

        line = log_file.read_text().strip().splitlines()[-1]
        assert json.loads(line)["results"] == 3

    def test_log_with_context_respects_level(self, temp_dir: Path) -> None:
        """Test that disabled levels are skipped."""
        log_file = temp_dir / "search.log"
        logger = setup_logging(level="WARNING", log_file=log_file)

        log_with_context(logger, logging.DEBUG, "hidden")
        for handler in logger.handlers:
            handler.flush()

        assert log_file.read_text() == ""
