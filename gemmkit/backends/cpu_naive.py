# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import logging

import numpy as np

from gemmkit.backends.base import HostContext
from gemmkit.backends.host import DTYPE, HostBackend

logger = logging.getLogger(__name__)


class CPUNaive(HostBackend):
    """Reference triple-loop GEMM with a scalar float32 accumulator.

    Every other kernel is checked against this one.
    """

    name = "cpu-naive"

    @classmethod
    def gemm(
        cls, ctx: HostContext | None, m: int, k: int, n: int, a: np.ndarray, b: np.ndarray, c: np.ndarray
    ) -> None:
        cls.resolve_context(ctx)
        cls.check_gemm_dims(m, k, n, a.size, b.size, c.size)
        logger.debug("%s: gemm m=%d k=%d n=%d", cls.name, m, k, n)

        for i in range(m):
            for j in range(n):
                acc = DTYPE(0.0)
                for t in range(k):
                    acc += a[i * k + t] * b[t * n + j]
                c[i * n + j] = acc
