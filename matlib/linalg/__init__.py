"""
MatLib Linear Algebra Module

Dense matrix primitives, elimination-based solvers and eigen-analysis over
float64 NumPy arrays.
"""

import logging

# Set up module-level logger
logger = logging.getLogger("matlib.linalg")

from .primitives import (
    as_matrix,
    add,
    subtract,
    scale,
    multiply,
    transpose,
    identity,
    zeros,
    trace,
    norm1,
    concatenate,
    partition,
    swap_row,
    scale_row,
    combine_row,
    compute_pivot,
    largest_off_diagonal,
)

from .elimination import (
    gauss_jordan_elimination,
    gaussian_elimination,
    back_substitution,
    solve,
    determinant,
    invert_matrix,
    inverse,
)

from .eigen import (
    normalize_vector,
    power_iteration,
    power_method,
    jacobi_method,
    leverriers_method,
)

__all__ = [
    # Primitives
    'as_matrix',
    'add',
    'subtract',
    'scale',
    'multiply',
    'transpose',
    'identity',
    'zeros',
    'trace',
    'norm1',
    'concatenate',
    'partition',
    'swap_row',
    'scale_row',
    'combine_row',
    'compute_pivot',
    'largest_off_diagonal',

    # Elimination
    'gauss_jordan_elimination',
    'gaussian_elimination',
    'back_substitution',
    'solve',
    'determinant',
    'invert_matrix',
    'inverse',

    # Eigen analysis
    'normalize_vector',
    'power_iteration',
    'power_method',
    'jacobi_method',
    'leverriers_method',
]
