# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Compute backends.

Backends:
    CPUNaive: scalar triple loop, the correctness reference
    CPU: transposed rhs with tiled scalar reduction
    CPUSimd: transposed rhs with 8-lane vector reduction
    GPU: accelerated backend stub, every operation raises BackendError
"""

from gemmkit.backends.accelerated import GPU, DeviceContext
from gemmkit.backends.base import HOST, Backend, HostContext
from gemmkit.backends.cpu import CPU
from gemmkit.backends.cpu_naive import CPUNaive
from gemmkit.backends.cpu_simd import CPUSimd
from gemmkit.backends.host import HostBackend

CPU_BACKENDS = (CPUNaive, CPU, CPUSimd)

__all__ = [
    "Backend",
    "HostBackend",
    "HostContext",
    "HOST",
    "DeviceContext",
    "CPUNaive",
    "CPU",
    "CPUSimd",
    "GPU",
    "CPU_BACKENDS",
]
