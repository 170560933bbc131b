# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""gemmkit - dense single-precision GEMM over pluggable compute backends.

Pipeline: host data -> backend upload -> Matrix -> dot -> backend gemm -> Matrix

Subpackages and modules:
    backends: Backend contract and kernels (CPUNaive, CPU, CPUSimd, GPU stub)
    matrix: Backend-bound Matrix container and the dot product operation
    textio: Plain-text matrix parsing and formatting
    tiling: Tile partition of the contraction axis
    golden: numpy reference product and tolerance check
    benchmark: Timing harness across backends
"""

from gemmkit.backends import CPU, GPU, HOST, Backend, CPUNaive, CPUSimd, DeviceContext, HostContext
from gemmkit.errors import BackendError, GemmError, ParseError, ShapeError
from gemmkit.matrix import Matrix, dot
from gemmkit.textio import format_matrix, parse_matrix, read_matrix

__version__ = "0.1.0"

__all__ = [
    "Backend",
    "CPUNaive",
    "CPU",
    "CPUSimd",
    "GPU",
    "HostContext",
    "DeviceContext",
    "HOST",
    "Matrix",
    "dot",
    "GemmError",
    "ParseError",
    "ShapeError",
    "BackendError",
    "parse_matrix",
    "format_matrix",
    "read_matrix",
]
