# tests/test_matrix_ops.py
"""
Tests for the dense matrix primitives.

Covers shape checking, value semantics (inputs are never modified), the
copy-on-write row operations, pivot search and the off-diagonal search used
by Jacobi rotation.
"""

import numpy as np
import pandas as pd
import pytest
from numpy.testing import assert_allclose, assert_array_equal
from hypothesis import HealthCheck, given, settings, strategies as st

from matlib.core.exceptions import DimensionError, NumericError, ParameterError, ShapeMismatch
from matlib.linalg.primitives import (
    add, as_matrix, combine_row, compute_pivot, concatenate, identity,
    largest_off_diagonal, multiply, norm1, partition, scale, scale_row,
    subtract, swap_row, trace, transpose, zeros
)
from tests.conftest import matrices


class TestCoercion:
    """Tests for as_matrix and input validation."""

    def test_one_dimensional_becomes_column(self):
        result = as_matrix([1, 2, 3])
        assert result.shape == (3, 1)
        assert result.dtype == np.float64

    def test_returns_copy(self):
        a = np.eye(2)
        result = as_matrix(a)
        result[0, 0] = 99.0
        assert a[0, 0] == 1.0

    def test_ragged_input_rejected(self):
        with pytest.raises(DimensionError):
            as_matrix([[1, 2], [3]])

    def test_empty_input_rejected(self):
        with pytest.raises(DimensionError):
            as_matrix([])

    def test_dataframe_accepted(self):
        frame = pd.DataFrame([[1.0, 2.0], [3.0, 4.0]])
        assert_array_equal(as_matrix(frame), [[1.0, 2.0], [3.0, 4.0]])

    def test_non_finite_rejected(self):
        with pytest.raises(NumericError):
            as_matrix([[1.0, np.nan]])


class TestArithmetic:
    """Tests for add, subtract, scale, multiply and transpose."""

    def test_add(self):
        assert_array_equal(add([[1, 2], [3, 4]], [[10, 20], [30, 40]]), [[11, 22], [33, 44]])

    def test_subtract(self):
        assert_array_equal(subtract([[5, 5], [5, 5]], [[1, 2], [3, 4]]), [[4, 3], [2, 1]])

    def test_shape_mismatch_does_not_mutate(self):
        a = np.ones((2, 2))
        b = np.ones((3, 2))
        with pytest.raises(DimensionError):
            add(a, b)
        with pytest.raises(ShapeMismatch):
            subtract(a, b)
        assert_array_equal(a, np.ones((2, 2)))
        assert_array_equal(b, np.ones((3, 2)))

    def test_scale(self):
        assert_array_equal(scale(5, identity(2)), [[5, 0], [0, 5]])
        assert_array_equal(scale(-0.5, [[2, 4]]), [[-1, -2]])

    def test_multiply(self):
        result = multiply([[1, 2, 3], [4, 5, 6]], [[7, 8], [9, 10], [11, 12]])
        assert_array_equal(result, [[58, 64], [139, 154]])

    def test_multiply_inner_dimension_mismatch(self):
        with pytest.raises(DimensionError):
            multiply(np.ones((2, 3)), np.ones((2, 3)))

    def test_multiply_identity(self, rng):
        a = rng.standard_normal((3, 4))
        assert_allclose(multiply(identity(3), a), a)
        assert_allclose(multiply(a, identity(4)), a)

    def test_transpose(self):
        result = transpose([[1, 2, 3], [4, 5, 6]])
        assert_array_equal(result, [[1, 4], [2, 5], [3, 6]])
        assert result.flags["C_CONTIGUOUS"]


class TestConstructorsAndReductions:
    """Tests for identity, zeros, trace and norm1."""

    def test_identity(self):
        assert_array_equal(identity(3), np.eye(3))

    @pytest.mark.parametrize("n", [0, -1, 2.5, True])
    def test_identity_invalid_size(self, n):
        with pytest.raises(ParameterError):
            identity(n)

    def test_zeros(self):
        assert zeros(2).shape == (2, 2)
        assert zeros(2, 3).shape == (2, 3)
        assert not zeros(2, 3).any()

    def test_trace(self):
        assert trace([[1, 2], [3, 4]]) == 5.0

    def test_trace_requires_square(self):
        with pytest.raises(DimensionError):
            trace(np.ones((2, 3)))

    @pytest.mark.parametrize("matrix, expected", [
        ([[1, -7], [-2, -3]], 10.0),
        ([[5, -4, 2], [-1, 2, 3], [-2, 1, 0]], 8.0),
        ([[1], [2], [3]], 6.0),
    ])
    def test_norm1(self, matrix, expected):
        assert norm1(matrix) == expected


class TestConcatenateAndPartition:
    """Tests for horizontal joins and column splits."""

    def test_concatenate(self):
        result = concatenate(identity(2), identity(2))
        assert_array_equal(result, [[1, 0, 1, 0], [0, 1, 0, 1]])

    def test_concatenate_row_mismatch(self):
        with pytest.raises(DimensionError):
            concatenate(np.ones((2, 2)), np.ones((3, 1)))

    def test_partition(self):
        left, right = partition([[1, 2, 3], [4, 5, 6]], 1)
        assert_array_equal(left, [[1], [4]])
        assert_array_equal(right, [[2, 3], [5, 6]])

    @pytest.mark.parametrize("column", [0, 3])
    def test_partition_column_out_of_range(self, column):
        with pytest.raises(ParameterError):
            partition(np.ones((2, 3)), column)

    def test_partition_single_column(self):
        with pytest.raises(DimensionError):
            partition(np.ones((2, 1)), 1)

    @given(a=matrices(3, 2), b=matrices(3, 4))
    @settings(max_examples=20, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_partition_inverts_concatenate(self, a, b):
        left, right = partition(concatenate(a, b), a.shape[1])
        assert_array_equal(left, a)
        assert_array_equal(right, b)


class TestRowOperations:
    """Tests for the copy-on-write elementary row operations."""

    def test_swap_row(self):
        a = identity(2)
        result = swap_row(a, 0, 1)
        assert_array_equal(result, [[0, 1], [1, 0]])
        assert_array_equal(a, np.eye(2))

    def test_combine_row(self):
        a = identity(2)
        result = combine_row(a, 0, 1, 1)
        assert_array_equal(result, [[1, 0], [-1, 1]])
        assert_array_equal(a, np.eye(2))

    def test_scale_row_default_pivot(self):
        result = scale_row([[2, 4], [1, 3]], 0)
        assert_array_equal(result, [[1, 2], [1, 3]])

    def test_scale_row_explicit_pivot(self):
        result = scale_row([[2, 4], [1, 3]], 1, pivot=0.5)
        assert_array_equal(result, [[2, 4], [2, 6]])

    def test_scale_row_zero_pivot(self):
        with pytest.raises(NumericError):
            scale_row([[0, 1], [1, 0]], 0)

    def test_row_index_out_of_range(self):
        with pytest.raises(ParameterError):
            swap_row(identity(2), 0, 2)


class TestSearches:
    """Tests for pivot and off-diagonal searches."""

    def test_compute_pivot_identity(self, kernel_mode):
        assert compute_pivot(identity(2), 0) == 0

    def test_compute_pivot_largest_magnitude(self, kernel_mode):
        a = [[1, 0], [-7, 0], [3, 0]]
        assert compute_pivot(a, 0) == 1

    def test_compute_pivot_respects_start(self, kernel_mode):
        a = [[9, 0], [-7, 0], [3, 0]]
        assert compute_pivot(a, 0, start=1) == 1
        assert compute_pivot([[1, 0], [5, 2], [0, 8]], 1) == 2

    def test_compute_pivot_first_wins_on_ties(self, kernel_mode):
        assert compute_pivot([[2, 0], [-2, 0]], 0) == 0

    def test_largest_off_diagonal(self, kernel_mode):
        assert largest_off_diagonal([[-1, 2], [2, 2]]) == (0, 1)
        assert largest_off_diagonal([[1, 0.5, 0], [0.5, 1, -3], [0, -3, 1]]) == (1, 2)

    def test_largest_off_diagonal_too_small(self):
        with pytest.raises(DimensionError):
            largest_off_diagonal([[1.0]])


class TestAlgebraicProperties:
    """Property-based tests for the arithmetic primitives."""

    @given(a=matrices(3, 3), b=matrices(3, 3))
    @settings(max_examples=25, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_subtract_undoes_add(self, a, b):
        assert_allclose(subtract(add(a, b), b), a, atol=1e-9)

    @given(a=matrices(2, 3), b=matrices(3, 2))
    @settings(max_examples=25, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_transpose_of_product(self, a, b):
        assert_allclose(transpose(multiply(a, b)), multiply(transpose(b), transpose(a)), atol=1e-9)

    @given(k=st.floats(min_value=-10, max_value=10), a=matrices(2, 2))
    @settings(max_examples=25, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_norm1_scales_absolutely(self, k, a):
        assert_allclose(norm1(scale(k, a)), abs(k) * norm1(a), rtol=1e-12, atol=1e-12)
