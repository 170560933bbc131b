# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import argparse

import numpy as np

from gemmkit.backends import CPU_BACKENDS
from gemmkit.benchmark import Benchmark
from gemmkit.golden import check_correctness, gemm_golden
from gemmkit.matrix import Matrix


def generate_shapes() -> list[tuple[int, int, int]]:
    """Generate (M, K, N) shapes, including inner dimensions that are not a multiple of the tile width."""
    shapes = []
    for size in (16, 24):
        shapes.append((size, size, size))
        shapes.append((size, size + 5, size))
    return shapes


def verify(shapes: list[tuple[int, int, int]], seed: int) -> None:
    """Check every CPU backend against the numpy reference on random operands."""
    rng = np.random.default_rng(seed)
    for M, K, N in shapes:
        lhs = rng.uniform(-1, 1, (M, K)).astype(np.float32)
        rhs = rng.uniform(-1, 1, (K, N)).astype(np.float32)
        golden = gemm_golden(lhs, rhs)
        for backend in CPU_BACKENDS:
            result = Matrix.from_host(lhs, backend=backend) @ Matrix.from_host(rhs, backend=backend)
            check_correctness(desired=golden, actual=result.to_host(), atol=1e-4, rtol=1e-4)
        print(f"{M}x{K}x{N}: {', '.join(b.name for b in CPU_BACKENDS)} match the reference")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Verify and time the CPU GEMM backends.")
    parser.add_argument("--iters", type=int, default=3, help="Number of timed runs per backend and shape.")
    parser.add_argument("--seed", type=int, default=0, help="Seed for the random operands.")
    args = parser.parse_args()

    shapes = generate_shapes()
    verify(shapes, args.seed)
    results = Benchmark(list(CPU_BACKENDS), shapes, warmup=1, iters=args.iters, seed=args.seed).run()
    print(results.summary())
