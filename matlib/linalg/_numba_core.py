"""
Numba-accelerated core functions for dense linear algebra.

This module provides the inner loops of the elimination engine and of the
eigen-analysis search steps. They work in place on arrays owned by the
calling engine function, never on caller-supplied buffers; the public
functions in :mod:`matlib.linalg.primitives` and
:mod:`matlib.linalg.elimination` make the working copies.

The module includes:
- Partial-pivot search over a column
- Forward elimination (Gaussian) and full reduction (Gauss-Jordan)
- Back substitution on an upper-triangular system
- Largest off-diagonal search for Jacobi rotation
"""

import logging
from typing import Tuple

import numpy as np
from numba import jit

# Set up module-level logger
logger = logging.getLogger("matlib.linalg._numba_core")

# ============================================================================
# Pivoting and search
# ============================================================================

@jit(nopython=True, cache=True)
def find_pivot(matrix: np.ndarray, column: int, start: int) -> int:
    """
    Locate the largest-magnitude entry of a column at or below a row.

    Args:
        matrix: Matrix to scan
        column: Column to scan
        start: First row considered

    Returns:
        int: Row index of the pivot; the first one wins on ties
    """
    pivot_row = start
    best = abs(matrix[start, column])
    for i in range(start + 1, matrix.shape[0]):
        value = abs(matrix[i, column])
        if value > best:
            best = value
            pivot_row = i
    return pivot_row


@jit(nopython=True, cache=True)
def find_largest_off_diagonal(matrix: np.ndarray) -> Tuple[int, int, float]:
    """
    Locate the largest-magnitude entry above the diagonal of a square matrix.

    Only the upper triangle is scanned; for the symmetric input Jacobi
    rotation works on, that covers every off-diagonal pair.

    Returns:
        Tuple[int, int, float]: (p, q, |matrix[p, q]|) with p < q
    """
    n = matrix.shape[0]
    p = 0
    q = 1
    best = -1.0
    for i in range(n):
        for j in range(i + 1, n):
            value = abs(matrix[i, j])
            if value > best:
                best = value
                p = i
                q = j
    return p, q, best


# ============================================================================
# Elimination
# ============================================================================

@jit(nopython=True, cache=True)
def eliminate(augmented: np.ndarray, n: int, full_reduction: bool,
              tolerance: float) -> Tuple[int, int, float]:
    """
    Row-reduce the first n columns of an augmented matrix in place.

    With ``full_reduction`` each pivot row is scaled to a unit pivot and the
    pivot column is cleared from every other row (Gauss-Jordan). Otherwise
    the column is only cleared below the pivot (Gaussian elimination),
    leaving an upper-triangular left block.

    Args:
        augmented: Working copy of [A | B], modified in place
        n: Number of coefficient columns (rows of A)
        full_reduction: Gauss-Jordan when True, Gaussian when False
        tolerance: Pivots with magnitude at or below this stop elimination

    Returns:
        Tuple[int, int, float]: (singular column or -1, row swaps, last pivot)
    """
    width = augmented.shape[1]
    swaps = 0
    pivot = 0.0

    for j in range(n):
        p = find_pivot(augmented, j, j)
        pivot = augmented[p, j]

        if abs(pivot) <= tolerance:
            return j, swaps, pivot

        if p != j:
            for k in range(width):
                tmp = augmented[j, k]
                augmented[j, k] = augmented[p, k]
                augmented[p, k] = tmp
            swaps += 1

        if full_reduction:
            for k in range(width):
                augmented[j, k] /= pivot
            augmented[j, j] = 1.0

            for i in range(n):
                if i == j:
                    continue
                factor = augmented[i, j]
                if factor == 0.0:
                    continue
                for k in range(width):
                    augmented[i, k] -= factor * augmented[j, k]
                augmented[i, j] = 0.0
        else:
            for i in range(j + 1, n):
                factor = augmented[i, j] / pivot
                if factor == 0.0:
                    continue
                for k in range(j, width):
                    augmented[i, k] -= factor * augmented[j, k]
                augmented[i, j] = 0.0

    return -1, swaps, pivot


@jit(nopython=True, cache=True)
def back_substitute(upper: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    """
    Solve an upper-triangular system by walking rows from the bottom up.

    x[j] = (rhs[j] - sum_{i > j} upper[j, i] * x[i]) / upper[j, j]

    Args:
        upper: Upper-triangular (n, n) matrix with non-zero diagonal
        rhs: Right-hand side of length n

    Returns:
        np.ndarray: Solution vector of length n
    """
    n = upper.shape[0]
    x = np.zeros(n)
    for j in range(n - 1, -1, -1):
        total = rhs[j]
        for i in range(j + 1, n):
            total -= upper[j, i] * x[i]
        x[j] = total / upper[j, j]
    return x


@jit(nopython=True, cache=True)
def triangular_determinant(matrix: np.ndarray, tolerance: float) -> float:
    """
    Determinant by forward elimination with partial pivoting.

    Works in place on a working copy. Returns 0.0 as soon as a pivot is
    numerically zero; otherwise (-1)^swaps times the product of the diagonal.
    """
    n = matrix.shape[0]
    singular, swaps, _ = eliminate(matrix, n, False, tolerance)
    if singular >= 0:
        return 0.0
    det = 1.0
    for i in range(n):
        det *= matrix[i, i]
    if swaps % 2 == 1:
        det = -det
    return det
