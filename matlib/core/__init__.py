"""
MatLib Core Module

Foundation shared by the linear-algebra and spectral packages: the exception
hierarchy, type aliases, input validation, layered configuration, result
containers and kernel dispatch.
"""

import logging

# Set up module-level logger
logger = logging.getLogger("matlib.core")

from .exceptions import (
    MatLibError,
    DimensionError,
    SingularMatrixError,
    TransformLengthError,
    ParameterError,
    ConvergenceError,
    NumericError,
    DataError,
    ConfigurationError,
    ShapeMismatch,
    SingularSystem,
    InvalidTransformLength,
    MatLibWarning,
    ConvergenceWarning,
    NumericWarning,
)

from .config import (
    get_config,
    set_config,
    reset_config,
    save_config,
    get_config_manager,
    get_numerical_config,
)

from .results import (
    EliminationStatus,
    EliminationResult,
    PowerIterationResult,
    JacobiResult,
)

from .acceleration import numba_enabled, select_kernel

__all__ = [
    # Exceptions
    'MatLibError',
    'DimensionError',
    'SingularMatrixError',
    'TransformLengthError',
    'ParameterError',
    'ConvergenceError',
    'NumericError',
    'DataError',
    'ConfigurationError',
    'ShapeMismatch',
    'SingularSystem',
    'InvalidTransformLength',
    'MatLibWarning',
    'ConvergenceWarning',
    'NumericWarning',

    # Configuration
    'get_config',
    'set_config',
    'reset_config',
    'save_config',
    'get_config_manager',
    'get_numerical_config',

    # Results
    'EliminationStatus',
    'EliminationResult',
    'PowerIterationResult',
    'JacobiResult',

    # Acceleration
    'numba_enabled',
    'select_kernel',
]
