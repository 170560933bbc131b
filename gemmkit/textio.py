# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Plain-text matrix format.

One row per line, elements separated by whitespace. Blank lines are
ignored. Tokens use plain decimal or exponent float syntax; underscore
digit separators such as ``1_000`` are rejected. Row and column numbers
reported by ``ParseError`` are 0-based and count only non-blank lines.
"""

from pathlib import Path

import numpy as np

from gemmkit.errors import ParseError, ShapeError

__all__ = ["parse_matrix", "format_matrix", "read_matrix", "format_value"]

INT_EXACT_LIMIT = 2**24


def parse_matrix(text: str) -> np.ndarray:
    """Parse matrix text into a 2-D float32 array.

    Args:
        text: Matrix text.

    Returns:
        Array of shape (rows, cols).

    Raises:
        ParseError: If a token is not a valid float.
        ShapeError: If there are no rows or the rows have unequal lengths.
    """
    rows: list[list[float]] = []
    lines = (line for line in text.splitlines() if line.strip())
    for row, line in enumerate(lines):
        values = []
        for col, token in enumerate(line.split()):
            if "_" in token:
                raise ParseError(row, col, token, "digit separators are not allowed")
            try:
                values.append(float(token))
            except ValueError as exc:
                raise ParseError(row, col, token, str(exc)) from exc
        rows.append(values)

    if not rows:
        raise ShapeError("Matrix is empty")
    cols = len(rows[0])
    for row, values in enumerate(rows):
        if len(values) != cols:
            raise ShapeError(f"Row {row} has {len(values)} elements, expected {cols}")
    return np.array(rows, dtype=np.float32)


def read_matrix(path: str | Path) -> np.ndarray:
    """Read and parse a matrix text file.

    Raises:
        OSError: If the file cannot be read.
        ParseError: If a token is not a valid float.
        ShapeError: If the file holds no rows or jagged rows.
    """
    return parse_matrix(Path(path).read_text())


def format_value(value) -> str:
    """Render one element.

    Integral values of magnitude below 2**24, where float32 holds every
    integer exactly, render without a fractional part. Everything else,
    including ``-0.0``, uses the shortest float32 repr.
    """
    as_float = float(value)
    if as_float.is_integer() and abs(as_float) < INT_EXACT_LIMIT and not (as_float == 0 and np.signbit(as_float)):
        return str(int(as_float))
    return str(np.float32(value))


def format_matrix(array: np.ndarray) -> str:
    """Render a 2-D array as matrix text, one newline-terminated line per row."""
    return "".join(" ".join(format_value(x) for x in row) + "\n" for row in np.asarray(array))
