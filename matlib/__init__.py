# matlib/__init__.py
"""
MatLib - Dense Numerical Kernel for Python

Matrix algebra, linear-system solving, eigen-analysis and discrete spectral
transforms over double-precision NumPy arrays, for downstream
signal-processing and statistics code such as pulse detection by
cross-correlation and covariance estimation for classification.

The kernel provides:
- Dense matrix primitives and copy-on-write row operations
- Gaussian and Gauss-Jordan elimination, inversion and determinants
- Power iteration, cyclic Jacobi rotation and the Faddeev-LeVerrier recursion
- Radix-2 FFT, inverse FFT, power spectral density and FFT convolution
- Direct-summation auto, cross and normalized correlation
"""

import logging
from typing import Union

# Set up package-wide logger; handlers are installed by the configuration manager
logger = logging.getLogger("matlib")

from .version import __version__, __title__, __description__, __license__

from . import core
from . import linalg
from . import spectral
from . import utils

from .core.config import initialize_config, set_config

from .linalg import (
    add,
    subtract,
    scale,
    multiply,
    transpose,
    identity,
    trace,
    norm1,
    concatenate,
    partition,
    gauss_jordan_elimination,
    gaussian_elimination,
    back_substitution,
    solve,
    determinant,
    invert_matrix,
    inverse,
    normalize_vector,
    power_iteration,
    power_method,
    jacobi_method,
    leverriers_method,
)

from .spectral import (
    ComplexScalar,
    fast_fourier_transform,
    inverse_fast_fourier_transform,
    power_spectral_density,
    fft_convolution,
    cross_correlation,
    auto_correlation,
    normalized_cross_correlation,
)

from .utils import PointPair, covariance


def get_version() -> str:
    """
    Return the version of MatLib.

    Returns:
        str: Version string in format MAJOR.MINOR.PATCH
    """
    return __version__


def set_log_level(level: Union[str, int]) -> None:
    """
    Set the logging level for MatLib.

    Args:
        level: Logging level, either as string ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
               or as an integer constant from the logging module
    """
    if isinstance(level, int):
        level = logging.getLevelName(level)
    set_config("logging", "log_level", level)
    logger.info(f"Log level set to {level}")


def enable_numba(enabled: bool = True) -> None:
    """
    Switch JIT-compiled kernels on or off.

    When disabled, the same kernel functions run as pure Python.
    """
    set_config("performance", "enable_numba", bool(enabled))
    logger.info(f"Numba acceleration {'enabled' if enabled else 'disabled'}")


# Initialize the package
initialize_config()

__all__ = [
    # Subpackages
    'core',
    'linalg',
    'spectral',
    'utils',

    # Linear algebra
    'add',
    'subtract',
    'scale',
    'multiply',
    'transpose',
    'identity',
    'trace',
    'norm1',
    'concatenate',
    'partition',
    'gauss_jordan_elimination',
    'gaussian_elimination',
    'back_substitution',
    'solve',
    'determinant',
    'invert_matrix',
    'inverse',
    'normalize_vector',
    'power_iteration',
    'power_method',
    'jacobi_method',
    'leverriers_method',

    # Spectral
    'ComplexScalar',
    'fast_fourier_transform',
    'inverse_fast_fourier_transform',
    'power_spectral_density',
    'fft_convolution',
    'cross_correlation',
    'auto_correlation',
    'normalized_cross_correlation',

    # Utilities
    'PointPair',
    'covariance',

    # Public functions
    'get_version',
    'set_log_level',
    'enable_numba',

    # Version info
    '__version__',
]

logger.debug(f"MatLib v{__version__} initialized")
