"""Unit tests for gemmkit.utils.logging module.

Tests MultilineFormatter formatting and setup_logging configuration.

Run with: pytest test/test_logging.py -v
"""

import logging

import pytest

from gemmkit.utils.logging import MultilineFormatter, setup_logging


def _record(msg: str, level: int = logging.INFO, name: str = "test.logger") -> logging.LogRecord:
    return logging.LogRecord(name=name, level=level, pathname="", lineno=0, msg=msg, args=(), exc_info=None)


class TestMultilineFormatter:
    """Tests for MultilineFormatter."""

    def test_single_line_with_metadata(self) -> None:
        """Single-line message includes right-padded text and metadata suffix."""
        result = MultilineFormatter(msg_width=40, show_metadata=True).format(_record("hello world"))
        assert result.startswith("hello world")
        assert "INFO" in result
        assert "test.logger" in result

    def test_single_line_without_metadata(self) -> None:
        """Single-line message without metadata returns just the message."""
        assert MultilineFormatter(msg_width=40, show_metadata=False).format(_record("hello world")) == "hello world"

    def test_first_line_padded(self) -> None:
        """The first line is padded to msg_width before metadata."""
        result = MultilineFormatter(msg_width=50, show_metadata=True).format(_record("short"))
        assert result.index("20") >= 50

    def test_multiline_keeps_table(self) -> None:
        """Continuation lines, such as a tile plan table, are preserved verbatim."""
        result = MultilineFormatter(msg_width=40, show_metadata=True).format(
            _record("cpu: gemm\n| Tile width | 8 |\n| Tiles in K | 2 |", level=logging.DEBUG)
        )
        lines = result.split("\n")
        assert len(lines) == 3
        assert "DEBUG" in lines[0]
        assert lines[1] == "| Tile width | 8 |"
        assert lines[2] == "| Tiles in K | 2 |"

    def test_default_show_metadata(self) -> None:
        """show_metadata defaults to True."""
        assert MultilineFormatter(msg_width=80).show_metadata is True

    def test_lazy_args_interpolated(self) -> None:
        """%-style arguments are applied before formatting."""
        record = logging.LogRecord(
            name="x", level=logging.INFO, pathname="", lineno=0, msg="m=%d k=%d", args=(2, 3), exc_info=None
        )
        assert MultilineFormatter(msg_width=10, show_metadata=False).format(record) == "m=2 k=3"


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def _restore_root(self):
        """Restore root logger handlers and level after each test."""
        handlers = list(logging.root.handlers)
        level = logging.root.level
        yield
        for handler in list(logging.root.handlers):
            if handler not in handlers:
                logging.root.removeHandler(handler)
                handler.close()
        logging.root.setLevel(level)

    def test_file_handler(self, tmp_path) -> None:
        """Logging to a file writes formatted records there."""
        log_file = tmp_path / "gemmkit.log"
        handler = setup_logging(str(log_file), logging.DEBUG, msg_width=30, show_metadata=False)
        assert isinstance(handler, logging.FileHandler)
        assert logging.root.level == logging.DEBUG
        logging.getLogger("gemmkit.test").debug("tile plan\nrow")
        handler.flush()
        assert log_file.read_text() == "tile plan\nrow\n"

    def test_stream_handler_when_no_file(self) -> None:
        """Without a log file the handler writes to a stream."""
        handler = setup_logging(None, logging.WARNING)
        assert type(handler) is logging.StreamHandler
        assert isinstance(handler.formatter, MultilineFormatter)
        assert logging.root.level == logging.WARNING
