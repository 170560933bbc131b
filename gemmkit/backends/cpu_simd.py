# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import logging

import numpy as np

from gemmkit.backends.base import HostContext
from gemmkit.backends.cpu import transpose_rhs
from gemmkit.backends.host import DTYPE, HostBackend
from gemmkit.tiling import TilePlan

logger = logging.getLogger(__name__)


def pad_rows(buffer: np.ndarray, rows: int, width: int, padded_width: int) -> np.ndarray:
    """Copy a flat row-major buffer into a zero-padded ``(rows, padded_width)`` scratch array.

    Lanes past ``width`` in every row are zero, so a full-width vector
    load of the final tile never reads outside the source rows.
    """
    scratch = np.zeros((rows, padded_width), dtype=DTYPE)
    scratch[:, :width] = buffer.reshape(rows, width)
    return scratch


class CPUSimd(HostBackend):
    """GEMM with 8-lane vector multiply-accumulate over the contraction axis.

    Uses the same transpose of ``b`` as ``CPU``. For each row of ``a`` a
    ``(n, lanes)`` accumulator holds one lane vector per output cell; every
    tile of the row is multiplied lane-wise against the matching tile of
    each transposed ``b`` row and added into the accumulator. After the
    tile loop the lanes of each cell are summed horizontally.

    The ragged final tile is read from zero-padded scratch copies of both
    operands, so padding lanes contribute nothing to the sum.
    """

    name = "cpu-simd"

    @classmethod
    def gemm(
        cls, ctx: HostContext | None, m: int, k: int, n: int, a: np.ndarray, b: np.ndarray, c: np.ndarray
    ) -> None:
        cls.resolve_context(ctx)
        cls.check_gemm_dims(m, k, n, a.size, b.size, c.size)
        plan = TilePlan(m, k, n)
        logger.debug("%s: gemm\n%s", cls.name, plan)

        lanes = plan.TILE_K
        a_tiles = pad_rows(a, m, k, plan.PADDED_K).reshape(m, plan.TILES_IN_K, lanes)
        bt_tiles = pad_rows(transpose_rhs(b, k, n), n, k, plan.PADDED_K).reshape(n, plan.TILES_IN_K, lanes)

        out = c.reshape(m, n)
        acc = np.empty((n, lanes), dtype=DTYPE)
        for i in range(m):
            acc.fill(0.0)
            for t in range(plan.TILES_IN_K):
                acc += a_tiles[i, t] * bt_tiles[:, t, :]
            out[i, :] = acc.sum(axis=1, dtype=DTYPE)
