"""Shared test utilities and fixtures for pytest."""

import numpy as np
import pytest

from gemmkit.backends import CPU_BACKENDS


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so random operands are reproducible across runs."""
    return np.random.default_rng(1234)


@pytest.fixture
def worked_example() -> tuple[list[list[float]], list[list[float]], list[list[float]]]:
    """The 2x2 product [[1,2],[3,4]] @ [[5,6],[7,8]] and its expected result."""
    lhs = [[1.0, 2.0], [3.0, 4.0]]
    rhs = [[5.0, 6.0], [7.0, 8.0]]
    expected = [[19.0, 22.0], [43.0, 50.0]]
    return lhs, rhs, expected


@pytest.fixture(params=CPU_BACKENDS, ids=lambda backend: backend.name)
def cpu_backend(request: pytest.FixtureRequest) -> type:
    """Each CPU backend in turn."""
    return request.param
