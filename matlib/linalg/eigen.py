# matlib/linalg/eigen.py
"""
Eigen Analysis

Three classical eigen-analysis routines composed from the matrix primitives
and the elimination engine:

- Power iteration for the dominant eigenvalue and its eigenvector
- Cyclic Jacobi rotation for the full eigen-decomposition of a symmetric matrix
- The Faddeev-LeVerrier recursion for the characteristic polynomial

Iterative methods read their tolerances and iteration caps from the
``numerical`` configuration section unless they are passed explicitly.
Reaching the cap without convergence is not an error: a
:class:`~matlib.core.exceptions.ConvergenceWarning` is issued and the result
is returned with ``converged=False``.
"""

import logging
import math
from typing import Any, Optional

import numpy as np

from matlib.core.acceleration import select_kernel
from matlib.core.config import get_config
from matlib.core.exceptions import (
    raise_dimension_error, raise_numeric_error, warn_convergence, warn_numeric
)
from matlib.core.results import JacobiResult, PowerIterationResult
from matlib.core.types import ColumnMatrix, MatrixLike, Vector
from matlib.core.validation import (
    validate_matrix, validate_positive_float, validate_positive_int,
    validate_square_matrix
)
from matlib.linalg import _numba_core
from matlib.linalg.elimination import inverse
from matlib.linalg.primitives import identity, multiply, norm1, scale, subtract, trace, transpose

# Set up module-level logger
logger = logging.getLogger("matlib.linalg.eigen")


def _numerical_setting(value: Any, option: str, default: Any, integer: bool = False) -> Any:
    if value is None:
        value = get_config("numerical", option, default)
    if integer:
        return validate_positive_int(value, option)
    return validate_positive_float(value, option)


def normalize_vector(vector: Any) -> ColumnMatrix:
    """
    Scale a vector to unit Euclidean length.

    Args:
        vector: A point pair (anything exposing ``matrix()``), a 1-D array or
                a column matrix

    Returns:
        ColumnMatrix: v / ||v||_2 as an (n, 1) matrix

    Raises:
        NumericError: If the vector has zero length
        DimensionError: If the input is a matrix with more than one column

    Examples:
        >>> from matlib.linalg.eigen import normalize_vector
        >>> normalize_vector([8, -6])
        array([[ 0.8],
               [-0.6]])
    """
    if hasattr(vector, "matrix") and callable(vector.matrix):
        vector = vector.matrix()
    v = validate_matrix(vector, "vector")
    if v.shape[1] != 1:
        raise_dimension_error(
            f"Expected a column vector, got shape {v.shape}",
            array_name="vector",
            expected_shape="(n, 1)",
            actual_shape=v.shape
        )

    length = float(np.sqrt(np.sum(v * v)))
    if length == 0.0:
        raise_numeric_error(
            "Cannot normalize a zero-length vector",
            operation="normalize_vector",
            values=length,
            error_type="division_by_zero"
        )
    return v / length


def power_iteration(matrix: MatrixLike,
                    seed: Optional[MatrixLike] = None,
                    tolerance: Optional[float] = None,
                    max_iterations: Optional[int] = None) -> PowerIterationResult:
    """
    Estimate the dominant eigenvalue of a square matrix by power iteration.

    Starting from ``seed`` (the all-ones column by default), each step
    normalizes the current vector y = x / ||x||, maps it x = A y, and forms
    the Rayleigh quotient lambda = (y^T x)(y^T y)^-1, where the 1x1 inverse
    goes through the elimination engine. The residual r = lambda y - x is
    measured with the L1 matrix norm and iteration stops once it falls below
    tolerance * max(1, |lambda|), so the test scales with the eigenvalue.

    Args:
        matrix: Square matrix A
        seed: Starting vector of length n; defaults to all ones
        tolerance: Relative residual threshold; defaults to ``numerical.power_tolerance``
        max_iterations: Iteration cap; defaults to ``numerical.power_max_iterations``

    Returns:
        PowerIterationResult: Eigenvalue, unit eigenvector, iteration count,
        convergence flag and final residual

    Raises:
        DimensionError: If A is not square or the seed has the wrong shape
        NumericError: If the seed is the zero vector

    Warns:
        ConvergenceWarning: If the cap is reached before the residual is small enough

    Examples:
        >>> from matlib.linalg.eigen import power_iteration
        >>> result = power_iteration([[2, 0], [0, 1]])
        >>> round(result.eigenvalue, 6)
        2.0
    """
    a = validate_square_matrix(matrix)
    n = a.shape[0]
    tol = _numerical_setting(tolerance, "power_tolerance", 1e-10)
    cap = _numerical_setting(max_iterations, "power_max_iterations", 1000, integer=True)

    if seed is None:
        x = np.ones((n, 1))
    else:
        x = validate_matrix(seed, "seed")
        if x.shape != (n, 1):
            raise_dimension_error(
                f"Seed must have shape ({n}, 1), got {x.shape}",
                array_name="seed",
                expected_shape=(n, 1),
                actual_shape=x.shape
            )

    eigenvalue = 0.0
    residual = float("inf")
    y = normalize_vector(x)
    converged = False
    iterations = 0

    while iterations < cap:
        iterations += 1
        y = normalize_vector(x)
        x = multiply(a, y)
        y_t = transpose(y)
        eigenvalue = float(multiply(multiply(y_t, x), inverse(multiply(y_t, y)))[0, 0])
        residual = norm1(subtract(scale(eigenvalue, y), x))
        if residual < tol * max(1.0, abs(eigenvalue)):
            converged = True
            break

    if converged:
        logger.debug(f"Power iteration converged in {iterations} iterations, lambda={eigenvalue}")
    else:
        warn_convergence(
            f"Power iteration did not converge in {cap} iterations",
            iterations=iterations,
            tolerance=tol,
            final_value=residual
        )

    return PowerIterationResult(
        eigenvalue=eigenvalue,
        eigenvector=y,
        iterations=iterations,
        converged=converged,
        residual_norm=residual,
        tolerance=tol
    )


def power_method(matrix: MatrixLike,
                 seed: Optional[MatrixLike] = None,
                 tolerance: Optional[float] = None,
                 max_iterations: Optional[int] = None) -> float:
    """Dominant eigenvalue estimate from :func:`power_iteration`."""
    return power_iteration(matrix, seed, tolerance, max_iterations).eigenvalue


def _rotation_angle(app: float, aqq: float, apq: float) -> float:
    denominator = app - aqq
    if denominator == 0.0:
        return math.copysign(math.pi / 4.0, apq)
    return 0.5 * math.atan(2.0 * apq / denominator)


def jacobi_method(matrix: MatrixLike,
                  tolerance: Optional[float] = None,
                  max_iterations: Optional[int] = None) -> JacobiResult:
    """
    Eigen-decomposition of a symmetric matrix by cyclic Jacobi rotation.

    Each step finds the largest off-diagonal entry A[p][q]. If its magnitude
    is below the tolerance the matrix is considered diagonal. Otherwise the
    rotation angle

        phi = 1/2 atan(2 A[p][q] / (A[p][p] - A[q][q]))

    (or sign(A[p][q]) pi/4 when the diagonal entries are equal) defines a
    plane rotation R that zeroes A[p][q]; the rotations are accumulated in
    P = P R and the matrix is updated to R^T A R.

    Args:
        matrix: Symmetric square matrix
        tolerance: Off-diagonal threshold; defaults to ``numerical.jacobi_tolerance``
        max_iterations: Rotation cap; defaults to ``numerical.jacobi_max_iterations``

    Returns:
        JacobiResult: Diagonal of the converged matrix as eigenvalues and the
        columns of P as eigenvectors, in matching order

    Raises:
        DimensionError: If the matrix is not square

    Warns:
        NumericWarning: If the matrix is not symmetric
        ConvergenceWarning: If the cap is reached first

    Examples:
        >>> import numpy as np
        >>> from matlib.linalg.eigen import jacobi_method
        >>> result = jacobi_method([[-1, 2], [2, 2]])
        >>> np.round(result.eigenvalues, 6)
        array([-2.,  3.])
    """
    a = validate_square_matrix(matrix)
    n = a.shape[0]
    tol = _numerical_setting(tolerance, "jacobi_tolerance", 1e-4)
    cap = _numerical_setting(max_iterations, "jacobi_max_iterations", 1000, integer=True)
    symmetry_tol = float(get_config("numerical", "symmetry_tolerance", 1e-8))

    if not np.allclose(a, a.T, rtol=0.0, atol=symmetry_tol):
        warn_numeric(
            "Jacobi rotation assumes a symmetric matrix; results for this input are not eigenpairs",
            operation="jacobi_method",
            issue="asymmetric input",
            value=float(np.max(np.abs(a - a.T)))
        )

    p_matrix = np.eye(n)
    if n == 1:
        return JacobiResult(
            eigenvalues=np.diag(a).copy(),
            eigenvectors=p_matrix,
            iterations=0,
            converged=True,
            off_diagonal=0.0,
            tolerance=tol,
            diagonalized=a
        )

    search = select_kernel(_numba_core.find_largest_off_diagonal)
    iterations = 0
    converged = False

    while True:
        p, q, off_diagonal = search(a)
        off_diagonal = float(off_diagonal)
        if off_diagonal < tol:
            converged = True
            break
        if iterations >= cap:
            break

        phi = _rotation_angle(a[p, p], a[q, q], a[p, q])
        c = math.cos(phi)
        s = math.sin(phi)
        rotation = np.eye(n)
        rotation[p, p] = c
        rotation[q, q] = c
        rotation[p, q] = -s
        rotation[q, p] = s

        p_matrix = p_matrix @ rotation
        a = rotation.T @ a @ rotation
        iterations += 1

    if converged:
        logger.debug(f"Jacobi rotation converged after {iterations} rotations")
    else:
        warn_convergence(
            f"Jacobi rotation did not converge in {cap} rotations",
            iterations=iterations,
            tolerance=tol,
            final_value=off_diagonal
        )

    return JacobiResult(
        eigenvalues=np.diag(a).copy(),
        eigenvectors=p_matrix,
        iterations=iterations,
        converged=converged,
        off_diagonal=off_diagonal,
        tolerance=tol,
        diagonalized=a
    )


def leverriers_method(matrix: MatrixLike) -> Vector:
    """
    Characteristic polynomial coefficients by the Faddeev-LeVerrier recursion.

    For an (n+1) x (n+1) matrix A, with B_n = A and a_n = -trace(B_n):

        B_k = A (B_{k+1} + a_{k+1} I)
        a_k = -trace(B_k) / (n - k + 1)

    for k = n-1 down to 0. The characteristic polynomial is then
    lambda^(n+1) + a_n lambda^n + ... + a_1 lambda + a_0.

    Returns:
        Vector: [a_0, a_1, ..., a_n], indexed by power of lambda; the leading
        unit coefficient is not included

    Examples:
        >>> from matlib.linalg.eigen import leverriers_method
        >>> leverriers_method([[2, -1, 1], [-1, 2, 1], [1, -1, 2]])
        array([-6., 11., -6.])
    """
    a = validate_square_matrix(matrix)
    size = a.shape[0]
    n = size - 1
    eye = identity(size)

    coefficients = np.zeros(size)
    b = a.copy()
    coefficients[n] = -trace(b)
    for k in range(n - 1, -1, -1):
        b = multiply(a, b + coefficients[k + 1] * eye)
        coefficients[k] = -trace(b) / (n - k + 1)

    logger.debug(f"Characteristic polynomial coefficients: {coefficients}")
    return coefficients
