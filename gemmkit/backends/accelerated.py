# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Placeholder for a hardware-accelerated backend.

``GPU`` exposes the full backend contract so call sites can already be
written against it, but every operation fails with ``BackendError`` until a
device implementation exists.
"""

import logging
from dataclasses import dataclass

import numpy as np

from gemmkit.backends.base import Backend
from gemmkit.errors import BackendError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeviceContext:
    """Handle for an accelerator device.

    A device implementation must make ``gemm`` complete or fail before
    returning, synchronizing with the device inside this context.

    Attributes:
        device_id: Ordinal of the target device.
    """

    device_id: int = 0


class DeviceBuffer:
    """Opaque device-resident storage. Never constructed by the stub."""


class GPU(Backend):
    """Accelerated backend stub. Every operation raises ``BackendError``."""

    name = "gpu"
    buffer_type = DeviceBuffer
    context_type = DeviceContext

    @classmethod
    def _unsupported(cls, op: str) -> BackendError:
        logger.debug("%s: %s requested on unimplemented backend", cls.name, op)
        return BackendError(f"{cls.name} backend: {op} is not supported")

    @classmethod
    def allocate(cls, ctx: DeviceContext | None, size: int) -> DeviceBuffer:
        cls.resolve_context(ctx)
        raise cls._unsupported("allocate")

    @classmethod
    def upload(cls, ctx: DeviceContext | None, host) -> DeviceBuffer:
        cls.resolve_context(ctx)
        raise cls._unsupported("upload")

    @classmethod
    def download(cls, ctx: DeviceContext | None, buffer: DeviceBuffer, host: np.ndarray) -> None:
        cls.resolve_context(ctx)
        raise cls._unsupported("download")

    @classmethod
    def buffer_length(cls, buffer: DeviceBuffer) -> int:
        raise cls._unsupported("buffer_length")

    @classmethod
    def gemm(
        cls,
        ctx: DeviceContext | None,
        m: int,
        k: int,
        n: int,
        a: DeviceBuffer,
        b: DeviceBuffer,
        c: DeviceBuffer,
    ) -> None:
        cls.resolve_context(ctx)
        raise cls._unsupported("gemm")
