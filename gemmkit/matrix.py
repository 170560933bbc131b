# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Matrix container bound to a compute backend.

A ``Matrix`` owns one backend buffer of ``rows * cols`` float32 elements in
row-major order. Construction goes through the backend's ``allocate`` or
``upload``; reading values back goes through ``download``. The product
operation validates shapes, allocates the output through the backend and
lets the backend's ``gemm`` fill it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

import numpy as np

from gemmkit.backends import CPU, Backend
from gemmkit.errors import ShapeError
from gemmkit.textio import format_matrix, parse_matrix

__all__ = ["Matrix", "dot"]

logger = logging.getLogger(__name__)

B = TypeVar("B", bound=Backend)


def _check_shape(rows: int, cols: int) -> None:
    if rows <= 0 or cols <= 0:
        raise ShapeError(f"Matrix dimensions must be positive, got {rows}x{cols}")


class Matrix(Generic[B]):
    """2-D float32 matrix whose storage is owned by a backend.

    Attributes:
        backend: Backend class that owns ``buffer``.
        buffer: Opaque backend storage of ``rows * cols`` elements.
    """

    def __init__(self, backend: type[B], rows: int, cols: int, buffer: Any) -> None:
        """Wrap an existing backend buffer. Takes ownership of ``buffer``.

        Prefer the ``new``, ``from_host``, ``from_rows`` and ``from_text``
        constructors.

        Raises:
            ShapeError: If either dimension is not positive, or ``buffer`` does
                not hold exactly ``rows * cols`` elements.
        """
        _check_shape(rows, cols)
        length = backend.buffer_length(buffer)
        if length != rows * cols:
            raise ShapeError(f"Buffer holds {length} elements, expected {rows}x{cols}")
        self.backend = backend
        self._rows = rows
        self._cols = cols
        self.buffer = buffer

    @classmethod
    def new(cls, rows: int, cols: int, backend: type[B] = CPU, ctx: Any = None) -> Matrix[B]:
        """Create a zero-filled matrix.

        Raises:
            ShapeError: If either dimension is not positive.
            BackendError: If the backend cannot allocate the buffer.
        """
        _check_shape(rows, cols)
        return cls(backend, rows, cols, backend.allocate(ctx, rows * cols))

    @classmethod
    def from_host(
        cls,
        host: Any,
        rows: int | None = None,
        cols: int | None = None,
        backend: type[B] = CPU,
        ctx: Any = None,
    ) -> Matrix[B]:
        """Upload a host array.

        Args:
            host: A 2-D array, or a flat array when ``rows`` and ``cols`` are given.
            rows: Row count for a flat ``host``.
            cols: Column count for a flat ``host``.
            backend: Backend that will own the buffer.
            ctx: Backend context, or None for the default.

        Raises:
            ShapeError: If the shape is empty, not 2-D, jagged, or does not match ``rows * cols``.
            BackendError: If the upload fails.
        """
        try:
            array = np.asarray(host)
        except ValueError as exc:
            raise ShapeError(f"Host data is not a rectangular array: {exc}") from exc
        if rows is None and cols is None:
            if array.ndim != 2:
                raise ShapeError(f"Expected a 2-D array, got shape {array.shape}")
            rows, cols = array.shape
        elif rows is None or cols is None:
            raise ShapeError("rows and cols must be given together")
        _check_shape(rows, cols)
        if array.size != rows * cols:
            raise ShapeError(f"Host array holds {array.size} elements, expected {rows}x{cols}")
        return cls(backend, rows, cols, backend.upload(ctx, array))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]], backend: type[B] = CPU, ctx: Any = None) -> Matrix[B]:
        """Build a matrix from nested row sequences, e.g. ``[[1, 2], [3, 4]]``.

        Raises:
            ShapeError: If there are no rows, a row is empty, or rows differ in length.
        """
        if len(rows) == 0:
            raise ShapeError("Matrix is empty")
        cols = len(rows[0])
        if cols == 0:
            raise ShapeError("Matrix is empty")
        for index, row in enumerate(rows):
            if len(row) != cols:
                raise ShapeError(f"Row {index} has {len(row)} elements, expected {cols}")
        flat = [value for row in rows for value in row]
        return cls(backend, len(rows), cols, backend.upload(ctx, flat))

    @classmethod
    def from_text(cls, text: str, backend: type[B] = CPU, ctx: Any = None) -> Matrix[B]:
        """Parse matrix text and upload it.

        Raises:
            ParseError: If a token is not a valid float.
            ShapeError: If the text holds no rows or jagged rows.
        """
        return cls.from_host(parse_matrix(text), backend=backend, ctx=ctx)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return self._rows, self._cols

    def to_host(self, ctx: Any = None) -> np.ndarray:
        """Download into a new ``(rows, cols)`` float32 array."""
        host = np.empty((self._rows, self._cols), dtype=np.float32)
        self.backend.download(ctx, self.buffer, host)
        return host

    def to_rows(self, ctx: Any = None) -> list[list[float]]:
        return self.to_host(ctx).tolist()

    def __getitem__(self, index: tuple[int, int]) -> float:
        """Read element ``(row, col)``. Downloads the buffer on every call.

        Raises:
            IndexError: If either index is outside the matrix.
        """
        row, col = index
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexError(f"Index ({row}, {col}) out of range for a {self._rows}x{self._cols} matrix")
        return float(self.to_host()[row, col])

    def dot(self, other: Matrix[B], ctx: Any = None) -> Matrix[B]:
        """Return ``self @ other``. See ``gemmkit.matrix.dot``."""
        return dot(ctx, self, other)

    def __matmul__(self, other: Matrix[B]) -> Matrix[B]:
        return dot(None, self, other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self.backend is other.backend
            and self.shape == other.shape
            and np.array_equal(self.to_host(), other.to_host())
        )

    __hash__ = None

    def __str__(self) -> str:
        return format_matrix(self.to_host())

    def __repr__(self) -> str:
        return f"Matrix<{self.backend.name}>({self._rows}x{self._cols})"


def dot(ctx: Any, a: Matrix[B], b: Matrix[B]) -> Matrix[B]:
    """Matrix product of an m x k ``a`` and a k x n ``b``.

    Args:
        ctx: Backend context, or None for the backend's default.
        a: Left operand.
        b: Right operand, bound to the same backend as ``a``.

    Returns:
        A new m x n matrix. Neither operand is modified.

    Raises:
        TypeError: If the operands are bound to different backends.
        ShapeError: If ``a.cols != b.rows``.
        BackendError: If the backend fails to allocate or multiply.
    """
    if a.backend is not b.backend:
        raise TypeError(f"Operands are bound to different backends: {a.backend.name} and {b.backend.name}")
    if a.cols != b.rows:
        raise ShapeError(f"Cannot multiply {a.rows}x{a.cols} by {b.rows}x{b.cols}: inner dimensions differ")

    backend = a.backend
    m, k, n = a.rows, a.cols, b.cols
    logger.debug("dot on %s: (%d x %d) @ (%d x %d)", backend.name, m, k, k, n)
    c = backend.allocate(ctx, m * n)
    backend.gemm(ctx, m, k, n, a.buffer, b.buffer, c)
    return Matrix(backend, m, n, c)
