# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Shared buffer management for backends that compute in host memory."""

import logging

import numpy as np

from gemmkit.backends.base import Backend, HostContext
from gemmkit.errors import BackendError

logger = logging.getLogger(__name__)

DTYPE = np.float32


class HostBackend(Backend):
    """Base for CPU kernels: buffers are contiguous 1-D float32 numpy arrays.

    Subclasses only implement ``gemm``.
    """

    _abstract = True
    buffer_type = np.ndarray
    context_type = HostContext

    @classmethod
    def allocate(cls, ctx: HostContext | None, size: int) -> np.ndarray:
        cls.resolve_context(ctx)
        if size < 0:
            raise BackendError(f"{cls.name}: cannot allocate a buffer of {size} elements")
        try:
            buffer = np.zeros(size, dtype=DTYPE)
        except (MemoryError, ValueError) as exc:
            raise BackendError(f"{cls.name}: allocation of {size} elements failed: {exc}") from exc
        return buffer

    @classmethod
    def upload(cls, ctx: HostContext | None, host) -> np.ndarray:
        cls.resolve_context(ctx)
        try:
            buffer = np.array(host, dtype=DTYPE, order="C").reshape(-1)
        except (MemoryError, TypeError, ValueError) as exc:
            raise BackendError(f"{cls.name}: upload failed: {exc}") from exc
        logger.debug("%s: uploaded %d elements", cls.name, buffer.size)
        return buffer

    @classmethod
    def buffer_length(cls, buffer: np.ndarray) -> int:
        return buffer.size

    @classmethod
    def download(cls, ctx: HostContext | None, buffer: np.ndarray, host: np.ndarray) -> None:
        cls.resolve_context(ctx)
        np.copyto(host, buffer.reshape(host.shape))
