# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy for gemmkit.

All errors are raised synchronously and are recoverable by the caller.
"""

__all__ = ["GemmError", "ParseError", "ShapeError", "BackendError"]


class GemmError(Exception):
    """Base class for every error raised by gemmkit."""


class ParseError(GemmError, ValueError):
    """A token in matrix text could not be parsed as a float.

    Attributes:
        row: 0-based index of the offending row, counting non-blank lines only.
        col: 0-based index of the offending token within its row.
        token: The raw token text.
    """

    def __init__(self, row: int, col: int, token: str, reason: str) -> None:
        """Initialize the parse error.

        Args:
            row: 0-based row of the offending token.
            col: 0-based column of the offending token.
            token: The raw token text.
            reason: Message of the underlying numeric parse failure.
        """
        super().__init__(f"parse error at row {row} col {col}: {token!r}: {reason}")
        self.row = row
        self.col = col
        self.token = token


class ShapeError(GemmError, ValueError):
    """Empty or jagged matrix data, or operands with incompatible dimensions."""


class BackendError(GemmError, RuntimeError):
    """A compute backend failed to allocate, transfer or multiply."""
