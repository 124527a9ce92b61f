'''
Pytest configuration and fixtures for the MatLib test suite.

This module provides common fixtures used across the test suite: a seeded
random generator, the reference matrices with known decompositions, series
files for the driver, a configuration reset around every test, and
hypothesis strategies for property-based tests.
'''

from pathlib import Path
from typing import Callable, Dict

import numpy as np
import pytest
from hypothesis import strategies as st

from matlib.core.config import reset_config, set_config


# ---- Configuration Fixtures ----

@pytest.fixture(autouse=True)
def clean_config():
    """Restore the default configuration around every test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(params=[True, False], ids=["numba", "python"])
def kernel_mode(request) -> bool:
    """Run a test once with JIT kernels and once with their pure-Python originals."""
    set_config("performance", "enable_numba", request.param)
    return request.param


# ---- Basic Data Generation Fixtures ----

@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def random_square(rng: np.random.Generator) -> Callable[[int], np.ndarray]:
    """Factory for well-conditioned random square matrices."""
    def _make(n: int) -> np.ndarray:
        return rng.standard_normal((n, n)) + n * np.eye(n)
    return _make


@pytest.fixture
def random_symmetric(rng: np.random.Generator) -> Callable[[int], np.ndarray]:
    """Factory for random symmetric matrices."""
    def _make(n: int) -> np.ndarray:
        a = rng.standard_normal((n, n))
        return (a + a.T) / 2
    return _make


# ---- Reference Matrices ----

@pytest.fixture
def tridiagonal() -> np.ndarray:
    """Second-difference matrix with a closed-form inverse."""
    return np.array([[2.0, -1.0, 0.0], [-1.0, 2.0, -1.0], [0.0, -1.0, 2.0]])


@pytest.fixture
def tridiagonal_inverse() -> np.ndarray:
    return np.array([[0.75, 0.5, 0.25], [0.5, 1.0, 0.5], [0.25, 0.5, 0.75]])


@pytest.fixture
def gauss_jordan_system() -> Dict[str, np.ndarray]:
    """System with solution (3, 4, -2)."""
    return {
        "a": np.array([[1.0, 1.0, 1.0], [2.0, 3.0, 5.0], [4.0, 0.0, 5.0]]),
        "b": np.array([[5.0], [8.0], [2.0]]),
        "x": np.array([[3.0], [4.0], [-2.0]]),
    }


@pytest.fixture
def gaussian_system() -> Dict[str, np.ndarray]:
    """System whose pivoted triangular form is known exactly."""
    return {
        "a": np.array([[1.0, 0.0, 2.0], [2.0, -1.0, 3.0], [4.0, 1.0, 8.0]]),
        "b": np.array([[1.0], [-1.0], [2.0]]),
        "upper": np.array([[4.0, 1.0, 8.0], [0.0, -1.5, -1.0], [0.0, 0.0, 1.0 / 6.0]]),
        "rhs": np.array([[2.0], [-2.0], [5.0 / 6.0]]),
        "x": np.array([-9.0, -2.0, 5.0]),
    }


@pytest.fixture
def singular_matrix() -> np.ndarray:
    """Rank-2 matrix whose second row is twice the first; elimination meets an exact zero in column 2."""
    return np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [1.0, 0.0, 1.0]])


# ---- Temporary File Fixtures ----

@pytest.fixture
def write_series_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing newline-delimited series files into a temporary directory."""
    def _write(name: str, lines) -> Path:
        path = tmp_path / name
        path.write_text("\n".join(str(line) for line in lines) + "\n")
        return path
    return _write


# ---- Hypothesis Strategies for Property-Based Testing ----

finite_floats = st.floats(min_value=-100.0, max_value=100.0, allow_nan=False, allow_infinity=False)


def matrices(rows: int, cols: int) -> st.SearchStrategy:
    """Strategy for (rows x cols) float matrices with bounded entries."""
    return st.lists(
        st.lists(finite_floats, min_size=cols, max_size=cols),
        min_size=rows, max_size=rows
    ).map(np.array)


def power_of_two_signals(max_exponent: int = 6) -> st.SearchStrategy:
    """Strategy for real signals with power-of-two length."""
    return st.integers(min_value=0, max_value=max_exponent).flatmap(
        lambda k: st.lists(finite_floats, min_size=2 ** k, max_size=2 ** k).map(np.array)
    )
