# matlib/linalg/primitives.py
"""
Dense Matrix Primitives

Shape-checked building blocks for everything else in the kernel: arithmetic,
transposition, identity generation, trace, the L1 matrix norm, horizontal
concatenation and partitioning, and the elementary row operations used by
elimination.

Every function treats matrices as values. Inputs are validated and copied,
and a new float64 array is returned; caller buffers are never modified. The
row operations in particular are copy-on-write, so that a caller holding a
reference to a matrix never sees it change underneath an elimination.

Functions:
    as_matrix: Coerce array-like input to a validated float64 matrix
    add: Element-wise sum of two matrices of identical shape
    subtract: Element-wise difference of two matrices of identical shape
    scale: Multiply every entry by a scalar
    multiply: Matrix product
    transpose: Matrix transpose
    identity: n x n identity matrix
    zeros: Zero matrix
    trace: Sum of the diagonal of a square matrix
    norm1: Maximum absolute column sum
    concatenate: Horizontal join of two matrices with equal row counts
    partition: Split a matrix at a column boundary
    swap_row: Exchange two rows
    scale_row: Divide a row by a pivot value
    combine_row: Subtract a multiple of one row from another
    compute_pivot: Partial-pivot row search in a column
    largest_off_diagonal: Position of the largest off-diagonal entry
"""

import logging
from typing import Optional, Tuple

import numpy as np

from matlib.core.acceleration import select_kernel
from matlib.core.exceptions import raise_dimension_error, raise_numeric_error
from matlib.core.types import Matrix, MatrixLike, Partition, SquareMatrix
from matlib.core.validation import (
    validate_conformable, validate_matrix, validate_positive_int,
    validate_same_rows, validate_same_shape, validate_square_matrix
)
from matlib.linalg import _numba_core

# Set up module-level logger
logger = logging.getLogger("matlib.linalg.primitives")


def as_matrix(data: MatrixLike, name: str = "matrix") -> Matrix:
    """
    Coerce array-like input to a validated, owned float64 matrix.

    One-dimensional input becomes a column matrix.

    Examples:
        >>> from matlib.linalg.primitives import as_matrix
        >>> as_matrix([1, 2, 3]).shape
        (3, 1)
    """
    return validate_matrix(data, name)


def add(matrix_a: MatrixLike, matrix_b: MatrixLike) -> Matrix:
    """
    Add two matrices of identical shape.

    Args:
        matrix_a: First matrix
        matrix_b: Second matrix

    Returns:
        New matrix A + B

    Raises:
        DimensionError: If the shapes differ

    Examples:
        >>> from matlib.linalg.primitives import add, identity
        >>> add(identity(2), identity(2))
        array([[2., 0.],
               [0., 2.]])
    """
    a = validate_matrix(matrix_a, "matrix_a")
    b = validate_matrix(matrix_b, "matrix_b")
    validate_same_shape(a, b)
    return a + b


def subtract(matrix_a: MatrixLike, matrix_b: MatrixLike) -> Matrix:
    """
    Subtract matrix B from matrix A.

    Raises:
        DimensionError: If the shapes differ
    """
    a = validate_matrix(matrix_a, "matrix_a")
    b = validate_matrix(matrix_b, "matrix_b")
    validate_same_shape(a, b)
    return a - b


def scale(k: float, matrix: MatrixLike) -> Matrix:
    """
    Multiply every entry of a matrix by the scalar k.

    Examples:
        >>> from matlib.linalg.primitives import scale, identity
        >>> scale(5, identity(2))
        array([[5., 0.],
               [0., 5.]])
    """
    return float(k) * validate_matrix(matrix)


def multiply(matrix_a: MatrixLike, matrix_b: MatrixLike) -> Matrix:
    """
    Matrix product A B.

    Raises:
        DimensionError: If the number of columns of A differs from the rows of B

    Examples:
        >>> from matlib.linalg.primitives import multiply
        >>> multiply([[1, 2, 3], [4, 5, 6]], [[7, 8], [9, 10], [11, 12]])
        array([[ 58.,  64.],
               [139., 154.]])
    """
    a = validate_matrix(matrix_a, "matrix_a")
    b = validate_matrix(matrix_b, "matrix_b")
    validate_conformable(a, b)
    return a @ b


def transpose(matrix: MatrixLike) -> Matrix:
    """Return C with C[i][j] = A[j][i]."""
    return np.ascontiguousarray(validate_matrix(matrix).T)


def identity(n: int) -> SquareMatrix:
    """
    Generate an n x n identity matrix.

    Raises:
        ParameterError: If n is not a positive integer
    """
    n = validate_positive_int(n, "n")
    return np.eye(n, dtype=np.float64)


def zeros(rows: int, cols: Optional[int] = None) -> Matrix:
    """Generate a rows x cols zero matrix (square when cols is omitted)."""
    rows = validate_positive_int(rows, "rows")
    cols = rows if cols is None else validate_positive_int(cols, "cols")
    return np.zeros((rows, cols), dtype=np.float64)


def trace(matrix: MatrixLike) -> float:
    """
    Sum of the diagonal of a square matrix.

    Raises:
        DimensionError: If the matrix is not square
    """
    return float(np.trace(validate_square_matrix(matrix)))


def norm1(matrix: MatrixLike) -> float:
    """
    L1 matrix norm: the maximum absolute column sum.

    Examples:
        >>> from matlib.linalg.primitives import norm1
        >>> norm1([[1, -7], [-2, -3]])
        10.0
    """
    return float(np.max(np.sum(np.abs(validate_matrix(matrix)), axis=0)))


def concatenate(matrix_a: MatrixLike, matrix_b: MatrixLike) -> Matrix:
    """
    Join two matrices with equal row counts side by side into [A | B].

    Raises:
        DimensionError: If the row counts differ
    """
    a = validate_matrix(matrix_a, "matrix_a")
    b = validate_matrix(matrix_b, "matrix_b")
    validate_same_rows(a, b)
    return np.hstack((a, b))


def partition(matrix: MatrixLike, column: int) -> Partition:
    """
    Split a matrix into columns [0, column) and [column, end).

    Raises:
        ParameterError: If column is not in [1, cols - 1]
    """
    m = validate_matrix(matrix)
    if m.shape[1] < 2:
        raise_dimension_error(
            "A matrix needs at least two columns to be partitioned",
            array_name="matrix",
            expected_shape="(rows, cols >= 2)",
            actual_shape=m.shape
        )
    column = validate_positive_int(column, "column", minimum=1, maximum=m.shape[1] - 1)
    return m[:, :column].copy(), m[:, column:].copy()


def _check_row(m: Matrix, row: int, name: str) -> int:
    return validate_positive_int(row, name, minimum=0, maximum=m.shape[0] - 1)


def swap_row(matrix: MatrixLike, row1: int, row2: int) -> Matrix:
    """
    Return a copy of the matrix with two rows exchanged.

    Examples:
        >>> from matlib.linalg.primitives import swap_row, identity
        >>> swap_row(identity(2), 0, 1)
        array([[0., 1.],
               [1., 0.]])
    """
    m = validate_matrix(matrix)
    row1 = _check_row(m, row1, "row1")
    row2 = _check_row(m, row2, "row2")
    m[[row1, row2]] = m[[row2, row1]]
    return m


def scale_row(matrix: MatrixLike, row: int, pivot: Optional[float] = None) -> Matrix:
    """
    Return a copy of the matrix with one row divided by a pivot value.

    Args:
        matrix: Matrix being operated on
        row: Row being divided
        pivot: Divisor; defaults to the row's diagonal entry matrix[row][row]

    Raises:
        NumericError: If the pivot is zero
    """
    m = validate_matrix(matrix)
    row = _check_row(m, row, "row")
    if pivot is None:
        if row >= m.shape[1]:
            raise_dimension_error(
                f"Row {row} has no diagonal entry in a matrix with {m.shape[1]} columns",
                array_name="matrix",
                actual_shape=m.shape
            )
        pivot = m[row, row]
    pivot = float(pivot)
    if pivot == 0.0:
        raise_numeric_error(
            f"Cannot scale row {row} by a zero pivot",
            operation="scale_row",
            values=pivot,
            error_type="division_by_zero"
        )
    m[row] = m[row] / pivot
    return m


def combine_row(matrix: MatrixLike, source: int, target: int, times: float) -> Matrix:
    """
    Return a copy of the matrix with ``times`` x row ``source`` subtracted from row ``target``.

    Examples:
        >>> from matlib.linalg.primitives import combine_row, identity
        >>> combine_row(identity(2), 0, 1, 1)
        array([[ 1.,  0.],
               [-1.,  1.]])
    """
    m = validate_matrix(matrix)
    source = _check_row(m, source, "source")
    target = _check_row(m, target, "target")
    m[target] = m[target] - float(times) * m[source]
    return m


def compute_pivot(matrix: MatrixLike, column: int, start: Optional[int] = None) -> int:
    """
    Row with the largest-magnitude entry in a column, scanning from ``start``.

    Args:
        matrix: Matrix being checked
        column: Column to scan
        start: First row considered; defaults to ``column`` (partial pivoting)

    Returns:
        Row index of the pivot; the first one wins on ties
    """
    m = validate_matrix(matrix)
    column = validate_positive_int(column, "column", minimum=0, maximum=m.shape[1] - 1)
    if start is None:
        start = min(column, m.shape[0] - 1)
    start = _check_row(m, start, "start")
    return int(select_kernel(_numba_core.find_pivot)(m, column, start))


def largest_off_diagonal(matrix: MatrixLike) -> Tuple[int, int]:
    """
    Coordinates (p, q), p < q, of the largest-magnitude entry above the diagonal.

    Raises:
        DimensionError: If the matrix is not square or smaller than 2 x 2

    Examples:
        >>> from matlib.linalg.primitives import largest_off_diagonal
        >>> largest_off_diagonal([[-1, 2], [2, 2]])
        (0, 1)
    """
    m = validate_square_matrix(matrix)
    if m.shape[0] < 2:
        raise_dimension_error(
            "A 1 x 1 matrix has no off-diagonal entries",
            array_name="matrix",
            expected_shape="(n >= 2, n >= 2)",
            actual_shape=m.shape
        )
    p, q, _ = select_kernel(_numba_core.find_largest_off_diagonal)(m)
    return int(p), int(q)
