# matlib/core/types.py

"""
Core type annotations for the MatLib kernel.

Type aliases establish a consistent contract across the kernel: matrices are
two-dimensional float64 arrays, signals are one-dimensional arrays, and
spectra are complex128 arrays.
"""

from pathlib import Path
from typing import Literal, Sequence, Tuple, Union

import numpy as np

# NumPy array type aliases
Vector = np.ndarray  # 1D array
Matrix = np.ndarray  # 2D float64 array
ColumnMatrix = np.ndarray  # (n, 1) array
ComplexArray = np.ndarray  # 1D complex128 array

# Specialized matrix types
SquareMatrix = np.ndarray
SymmetricMatrix = np.ndarray
TriangularMatrix = np.ndarray

# Inputs accepted by the coercion helpers
MatrixLike = Union[np.ndarray, Sequence[Sequence[float]]]
SignalLike = Union[np.ndarray, Sequence[float]]

# A pair of matrices produced by splitting at a column boundary
Partition = Tuple[np.ndarray, np.ndarray]

# Transform direction: +1 forward, -1 inverse
TransformDirection = Literal[1, -1]

# File path types
FilePath = Union[str, Path]

# Logging level names accepted by the configuration system
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
