# matlib/linalg/elimination.py
"""
Elimination Engine

Gaussian and Gauss-Jordan elimination with partial pivoting over an augmented
matrix [A | B], plus the operations built on them: back substitution, linear
solve, determinant and inversion.

Elimination never raises on a singular system. It returns an
:class:`~matlib.core.results.EliminationResult` tagged SOLVED or SINGULAR,
carrying the partial partition and the column at which a numerically zero
pivot stopped the run. The convenience operations that need a usable answer
(:func:`back_substitution`, :func:`solve`, :func:`inverse`) turn a singular
result into a :class:`~matlib.core.exceptions.SingularMatrixError`.

A pivot is considered zero when its magnitude is at or below
``numerical.pivot_tolerance`` (default 1e-12), read from the configuration
manager unless a tolerance is passed explicitly.

Functions:
    gauss_jordan_elimination: Reduce [A | B] to [I | A^-1 B]
    gaussian_elimination: Reduce [A | B] to an upper-triangular left block
    back_substitution: Solve an upper-triangular system
    solve: Solve A x = b
    determinant: Determinant by triangularization
    invert_matrix: Gauss-Jordan on [A | I]
    inverse: Inverse of a non-singular matrix
"""

import logging
from typing import Optional, Union

import numpy as np

from matlib.core.acceleration import select_kernel
from matlib.core.config import get_config
from matlib.core.exceptions import raise_dimension_error, raise_singular_error
from matlib.core.results import EliminationResult, EliminationStatus
from matlib.core.types import ColumnMatrix, Matrix, MatrixLike, Partition, Vector
from matlib.core.validation import (
    validate_matrix, validate_pivot_tolerance, validate_same_rows,
    validate_square_matrix
)
from matlib.linalg import _numba_core

# Set up module-level logger
logger = logging.getLogger("matlib.linalg.elimination")


def _pivot_tolerance(tolerance: Optional[float]) -> float:
    if tolerance is None:
        return float(get_config("numerical", "pivot_tolerance", 1e-12))
    return validate_pivot_tolerance(tolerance, "tolerance")


def _eliminate(matrix_a: MatrixLike, matrix_b: MatrixLike, full_reduction: bool,
               tolerance: Optional[float]) -> EliminationResult:
    """Shared driver for both elimination variants."""
    method = "gauss_jordan" if full_reduction else "gaussian"
    a = validate_square_matrix(matrix_a, "matrix_a")
    b = validate_matrix(matrix_b, "matrix_b")
    validate_same_rows(a, b)
    tol = _pivot_tolerance(tolerance)

    n = a.shape[0]
    augmented = np.hstack((a, b))

    kernel = select_kernel(_numba_core.eliminate)
    singular_column, swaps, pivot = kernel(augmented, n, full_reduction, tol)
    singular_column = int(singular_column)
    swaps = int(swaps)

    coefficients = augmented[:, :n].copy()
    rhs = augmented[:, n:].copy()

    if singular_column >= 0:
        logger.info(
            f"{method} elimination stopped at column {singular_column}: "
            f"pivot {float(pivot):.3e} within tolerance {tol:.1e}"
        )
        return EliminationResult(
            status=EliminationStatus.SINGULAR,
            coefficients=coefficients,
            rhs=rhs,
            swaps=swaps,
            method=method,
            singular_column=singular_column,
            pivot=float(pivot),
            tolerance=tol
        )

    logger.debug(f"{method} elimination of a {n}x{n} system finished with {swaps} row swaps")
    return EliminationResult(
        status=EliminationStatus.SOLVED,
        coefficients=coefficients,
        rhs=rhs,
        swaps=swaps,
        method=method,
        tolerance=tol
    )


def gauss_jordan_elimination(matrix_a: MatrixLike, matrix_b: MatrixLike,
                             tolerance: Optional[float] = None) -> EliminationResult:
    """
    Reduce the augmented matrix [A | B] to reduced row-echelon form.

    For each column the row with the largest-magnitude entry at or below the
    diagonal is swapped into place, scaled to a unit pivot, and the column is
    cleared from every other row. On success the left block is the identity
    and the right block is A^-1 B.

    Args:
        matrix_a: Square coefficient matrix A (n x n)
        matrix_b: Right-hand side B with n rows and any number of columns;
                  1-D input is treated as a column
        tolerance: Pivot tolerance; defaults to ``numerical.pivot_tolerance``

    Returns:
        EliminationResult: SOLVED with the reduced blocks, or SINGULAR with the
        partial partition and the offending column

    Raises:
        DimensionError: If A is not square or B has a different row count

    Examples:
        >>> from matlib.linalg.elimination import gauss_jordan_elimination
        >>> result = gauss_jordan_elimination([[1, 1, 1], [2, 3, 5], [4, 0, 5]], [5, 8, 2])
        >>> result.is_solved
        True
        >>> result.rhs.ravel()
        array([ 3.,  4., -2.])
    """
    return _eliminate(matrix_a, matrix_b, True, tolerance)


def gaussian_elimination(matrix_a: MatrixLike, matrix_b: MatrixLike,
                         tolerance: Optional[float] = None) -> EliminationResult:
    """
    Forward elimination of [A | B] to an upper-triangular left block.

    Rows are exchanged by partial pivoting, then each pivot column is
    cleared below the diagonal only. The result is ready for
    :func:`back_substitution`.

    Args:
        matrix_a: Square coefficient matrix A
        matrix_b: Right-hand side with the same number of rows
        tolerance: Pivot tolerance; defaults to ``numerical.pivot_tolerance``

    Returns:
        EliminationResult: The triangular partition, tagged SOLVED or SINGULAR

    Raises:
        DimensionError: If A is not square or B has a different row count
    """
    return _eliminate(matrix_a, matrix_b, False, tolerance)


def back_substitution(system: Union[EliminationResult, Partition],
                      tolerance: Optional[float] = None) -> Vector:
    """
    Solve an upper-triangular system D x = b from the last row upwards.

    x[j] = (b[j] - sum_{i > j} D[j][i] x[i]) / D[j][j]

    Args:
        system: An EliminationResult or a ``(D, b)`` partition with D upper
                triangular and b a single column
        tolerance: Tolerance for rejecting zero diagonal entries of a raw
                   partition; defaults to ``numerical.pivot_tolerance``

    Returns:
        Vector: 1-D solution vector of length n

    Raises:
        SingularMatrixError: If the result is singular or D has a zero diagonal
        DimensionError: If D is not square, b has a different row count,
                        or b is wider than one column

    Examples:
        >>> from matlib.linalg.elimination import gaussian_elimination, back_substitution
        >>> result = gaussian_elimination([[1, 0, 2], [2, -1, 3], [4, 1, 8]], [1, -1, 2])
        >>> back_substitution(result)
        array([-9., -2.,  5.])
    """
    if isinstance(system, EliminationResult):
        upper, rhs = system.unwrap()
    else:
        try:
            upper, rhs = system
        except (TypeError, ValueError):
            raise_dimension_error(
                "back_substitution expects an EliminationResult or a (D, b) pair",
                array_name="system",
                actual_shape=np.shape(system)
            )
        upper = validate_square_matrix(upper, "upper")
        rhs = validate_matrix(rhs, "rhs")
        validate_same_rows(upper, rhs, ("upper", "rhs"))

    if rhs.shape[1] != 1:
        raise_dimension_error(
            f"Back substitution needs a single right-hand column, got {rhs.shape[1]}",
            array_name="rhs",
            expected_shape=(upper.shape[0], 1),
            actual_shape=rhs.shape
        )

    tol = _pivot_tolerance(tolerance)
    diagonal = np.abs(np.diag(upper))
    if np.any(diagonal <= tol):
        column = int(np.argmax(diagonal <= tol))
        raise_singular_error(
            f"Triangular system has a zero diagonal entry in column {column}",
            column=column,
            pivot=float(upper[column, column]),
            tolerance=tol
        )

    kernel = select_kernel(_numba_core.back_substitute)
    return kernel(np.ascontiguousarray(upper), np.ascontiguousarray(rhs[:, 0]))


def solve(matrix_a: MatrixLike, b: MatrixLike,
          tolerance: Optional[float] = None) -> ColumnMatrix:
    """
    Solve the linear system A x = b.

    Gaussian elimination with partial pivoting followed by back substitution.

    Returns:
        ColumnMatrix: Solution x as an (n, 1) matrix

    Raises:
        SingularMatrixError: If A is singular
        DimensionError: If the shapes are incompatible
    """
    result = gaussian_elimination(matrix_a, b, tolerance)
    return back_substitution(result, tolerance).reshape(-1, 1)


def determinant(matrix: MatrixLike, tolerance: Optional[float] = None) -> float:
    """
    Determinant of a square matrix.

    1x1 and 2x2 matrices use closed forms. Larger matrices are triangularized
    by forward elimination with partial pivoting; the determinant is the
    product of the diagonal with its sign flipped once per row swap. A zero
    pivot short-circuits to 0.0.

    Raises:
        DimensionError: If the matrix is not square

    Examples:
        >>> from matlib.linalg.elimination import determinant
        >>> determinant([[3, 2], [5, 2]])
        -4.0
        >>> round(determinant([[1, 4, 0], [0, 2, 6], [-1, 0, 1]]), 10)
        -22.0
    """
    m = validate_square_matrix(matrix)
    n = m.shape[0]

    if n == 1:
        return float(m[0, 0])
    if n == 2:
        return float(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])

    tol = _pivot_tolerance(tolerance)
    det = float(select_kernel(_numba_core.triangular_determinant)(m, tol))
    logger.debug(f"Determinant of a {n}x{n} matrix: {det}")
    return det


def invert_matrix(matrix: MatrixLike, tolerance: Optional[float] = None) -> EliminationResult:
    """
    Gauss-Jordan elimination on [A | I].

    The ``coefficients`` block of the result is the should-be identity and the
    ``rhs`` block is the inverse.

    Returns:
        EliminationResult: Tagged SOLVED or SINGULAR
    """
    m = validate_square_matrix(matrix)
    return gauss_jordan_elimination(m, np.eye(m.shape[0]), tolerance)


def inverse(matrix: MatrixLike, tolerance: Optional[float] = None) -> Matrix:
    """
    Inverse of a non-singular square matrix.

    Raises:
        SingularMatrixError: If the matrix is singular
        DimensionError: If the matrix is not square

    Examples:
        >>> from matlib.linalg.elimination import inverse
        >>> inverse([[2, -1, 0], [-1, 2, -1], [0, -1, 2]])
        array([[0.75, 0.5 , 0.25],
               [0.5 , 1.  , 0.5 ],
               [0.25, 0.5 , 0.75]])
    """
    _, inv = invert_matrix(matrix, tolerance).unwrap()
    return inv
