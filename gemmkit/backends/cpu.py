# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import logging

import numpy as np

from gemmkit.backends.base import HostContext
from gemmkit.backends.host import DTYPE, HostBackend
from gemmkit.tiling import TilePlan

logger = logging.getLogger(__name__)


def transpose_rhs(b: np.ndarray, k: int, n: int) -> np.ndarray:
    """Copy a row-major k x n buffer into a row-major n x k buffer.

    Row ``j`` of the result is column ``j`` of ``b``, contiguous in memory.

    Args:
        b: Flat row-major buffer of ``k * n`` elements.
        k: Rows of ``b``.
        n: Columns of ``b``.

    Returns:
        Flat row-major buffer of ``n * k`` elements.
    """
    bt = np.empty(n * k, dtype=DTYPE)
    for row in range(k):
        bt[row::k] = b[row * n : (row + 1) * n]
    return bt


class CPU(HostBackend):
    """Cache-friendly scalar GEMM.

    ``b`` is transposed once per call so that each output cell is the dot
    product of two contiguous length-k spans: a row of ``a`` and a row of
    the transposed ``b``. The reduction walks both spans in tiles of
    ``TILE_WIDTH`` and adds each tile's partial sum to a running total.
    """

    name = "cpu"

    @classmethod
    def gemm(
        cls, ctx: HostContext | None, m: int, k: int, n: int, a: np.ndarray, b: np.ndarray, c: np.ndarray
    ) -> None:
        cls.resolve_context(ctx)
        cls.check_gemm_dims(m, k, n, a.size, b.size, c.size)
        plan = TilePlan(m, k, n)
        logger.debug("%s: gemm\n%s", cls.name, plan)

        bt = transpose_rhs(b, k, n)
        tiles = plan.tile_bounds()
        for i in range(m):
            row_a = a[i * k : (i + 1) * k]
            for j in range(n):
                row_bt = bt[j * k : (j + 1) * k]
                total = DTYPE(0.0)
                for start, end in tiles:
                    total += np.dot(row_a[start:end], row_bt[start:end])
                c[i * n + j] = total
