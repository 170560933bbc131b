# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Microbenchmark of the product operation across backends and shapes."""

from __future__ import annotations

import argparse
import logging
import time
from dataclasses import dataclass
from typing import Any

import numpy as np
from tabulate import tabulate
from tqdm import tqdm

from gemmkit.backends import Backend
from gemmkit.matrix import Matrix

logger = logging.getLogger(__name__)

WARMUP_ITER_DEFAULT = 1
BENCH_ITER_DEFAULT = 5


def mac_count(m: int, k: int, n: int) -> int:
    """Number of multiply-accumulate operations in an (m x k) @ (k x n) product."""
    return m * k * n


@dataclass(frozen=True)
class BenchmarkEntry:
    """Timing of one backend on one problem shape.

    Attributes:
        backend: Backend name.
        shape: ``(m, k, n)``.
        times_ms: Wall time of each timed iteration in milliseconds.
    """

    backend: str
    shape: tuple[int, int, int]
    times_ms: tuple[float, ...]

    @property
    def min_ms(self) -> float:
        return min(self.times_ms)

    @property
    def mean_ms(self) -> float:
        return sum(self.times_ms) / len(self.times_ms)

    @property
    def gflops(self) -> float:
        """Throughput of the fastest iteration, counting one MAC as 2 flops."""
        if self.min_ms == 0:
            return float("inf")
        return 2 * mac_count(*self.shape) / (self.min_ms / 1000) / 1e9


class BenchmarkResults:
    """Collection of benchmark entries with tabulated reporting."""

    def __init__(self, entries: list[BenchmarkEntry]) -> None:
        self.entries = entries

    def summary(self) -> str:
        """Return a tabulate-formatted table of all entries, sorted by shape then min time."""
        headers = ["backend", "m x k x n", "min_ms", "mean_ms", "GFLOP/s"]
        rows: list[list[Any]] = []
        for entry in sorted(self.entries, key=lambda e: (e.shape, e.min_ms)):
            m, k, n = entry.shape
            rows.append(
                [entry.backend, f"{m}x{k}x{n}", f"{entry.min_ms:.4f}", f"{entry.mean_ms:.4f}", f"{entry.gflops:.4f}"]
            )
        return tabulate(rows, headers=headers, tablefmt="simple")

    def best(self) -> dict[tuple[int, int, int], BenchmarkEntry]:
        """Return the fastest entry per shape."""
        results: dict[tuple[int, int, int], BenchmarkEntry] = {}
        for entry in self.entries:
            current = results.get(entry.shape)
            if current is None or entry.min_ms < current.min_ms:
                results[entry.shape] = entry
        return results


class Benchmark:
    """Times ``dot`` for every combination of backend and ``(m, k, n)`` shape."""

    def __init__(
        self,
        backends: list[type[Backend]],
        shapes: list[tuple[int, int, int]],
        warmup: int = WARMUP_ITER_DEFAULT,
        iters: int = BENCH_ITER_DEFAULT,
        seed: int = 0,
    ) -> None:
        """Initialize benchmark configuration.

        Args:
            backends: Backend classes to time.
            shapes: Problem sizes as ``(m, k, n)``.
            warmup: Untimed iterations before measuring.
            iters: Timed iterations per backend and shape.
            seed: Seed for the random operands.
        """
        if iters < 1:
            raise ValueError(f"iters must be at least 1, got {iters}")
        self.backends = backends
        self.shapes = shapes
        self.warmup = warmup
        self.iters = iters
        self.seed = seed

    def run(self) -> BenchmarkResults:
        """Execute every job and return the collected timings."""
        rng = np.random.default_rng(self.seed)
        entries = []
        jobs = [(shape, backend) for shape in self.shapes for backend in self.backends]
        for (m, k, n), backend in tqdm(jobs, desc=f"Benchmarking {len(jobs)} jobs", unit="jobs"):
            lhs_host = rng.random((m, k), dtype=np.float32)
            rhs_host = rng.random((k, n), dtype=np.float32)
            lhs = Matrix.from_host(lhs_host, backend=backend)
            rhs = Matrix.from_host(rhs_host, backend=backend)
            for _ in range(self.warmup):
                lhs.dot(rhs)
            times = []
            for _ in range(self.iters):
                start = time.perf_counter()
                lhs.dot(rhs)
                times.append((time.perf_counter() - start) * 1000)
            entry = BenchmarkEntry(backend.name, (m, k, n), tuple(times))
            logger.info("%s %dx%dx%d: min %.4f ms", backend.name, m, k, n, entry.min_ms)
            entries.append(entry)
        return BenchmarkResults(entries)


def _parse_shape(text: str) -> tuple[int, int, int]:
    try:
        m, k, n = (int(part) for part in text.lower().split("x"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected MxKxN, got {text!r}") from exc
    return m, k, n


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="gemmkit.benchmark", description="Time matrix products per backend.")
    parser.add_argument(
        "--backends",
        nargs="+",
        choices=sorted(Backend.all_backends()),
        default=["cpu-naive", "cpu", "cpu-simd"],
        help="Backends to compare.",
    )
    parser.add_argument("--shapes", nargs="+", type=_parse_shape, default=[(32, 32, 32)], help="Shapes as MxKxN.")
    parser.add_argument("--warmup", type=int, default=WARMUP_ITER_DEFAULT, help="Number of warmup runs.")
    parser.add_argument("--iters", type=int, default=BENCH_ITER_DEFAULT, help="Number of timed runs.")
    args = parser.parse_args(argv)

    backends = [Backend.get(name) for name in args.backends]
    results = Benchmark(backends, args.shapes, warmup=args.warmup, iters=args.iters).run()
    print(results.summary())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
