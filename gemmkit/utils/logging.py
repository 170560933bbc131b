# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Logging utilities for gemmkit.

Provides a multiline-aligned formatter and logging configuration helper.
"""

import logging

__all__ = ["setup_logging", "MultilineFormatter"]


class MultilineFormatter(logging.Formatter):
    """Formatter that keeps multiline messages (such as tile plan tables) intact.

    Attributes:
        msg_width: Width the first line is padded to before metadata.
        show_metadata: Whether to append timestamp/level/name metadata.
    """

    def __init__(self, msg_width: int, show_metadata: bool = True) -> None:
        """Initialize the formatter.

        Args:
            msg_width: Width for message alignment.
            show_metadata: Whether to append timestamp/level/name metadata.
        """
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")
        self.msg_width = msg_width
        self.show_metadata = show_metadata

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record, appending metadata to the first line only.

        Args:
            record: The log record to format.

        Returns:
            Formatted log message string.
        """
        lines = record.getMessage().split("\n")

        first_line = lines[0]
        if self.show_metadata:
            metadata = f"{self.formatTime(record)} - {record.levelname} - {record.name}"
            first_line = f"{lines[0]:<{self.msg_width}}{metadata}"

        return "\n".join([first_line, *lines[1:]])


def setup_logging(log_file: str | None, level: int, msg_width: int = 80, show_metadata: bool = True) -> logging.Handler:
    """Attach a multiline-aligned handler to the root logger.

    Args:
        log_file: Path to the log file, or None to log to stderr.
        level: Logging level.
        msg_width: Width for message alignment.
        show_metadata: Whether to append timestamp/level/name metadata to log lines.

    Returns:
        The installed handler.
    """
    if log_file is None:
        handler: logging.Handler = logging.StreamHandler()
    else:
        handler = logging.FileHandler(log_file, mode="w")
    handler.setFormatter(MultilineFormatter(msg_width=msg_width, show_metadata=show_metadata))
    logging.root.addHandler(handler)
    logging.root.setLevel(level)
    return handler
