# matlib/core/validation.py

"""
Validation utilities for the MatLib kernel.

Every public kernel operation validates its inputs here before computing
anything, so shape and length violations surface at the point of the call
with no partial computation. The coercion helpers always return a fresh
float64 (or complex128) array, which is what lets the kernel treat matrices
as value types: callers' buffers are never aliased.
"""

from collections.abc import Sequence
from typing import Any, Optional, Tuple

import numpy as np
import pandas as pd

from matlib.core.exceptions import (
    raise_data_error, raise_dimension_error, raise_numeric_error,
    raise_parameter_error
)
from matlib.core.types import ComplexArray, Matrix, Vector


def _check_ragged(data: Any, name: str) -> None:
    """Reject nested sequences whose rows differ in length."""
    if isinstance(data, (np.ndarray, pd.DataFrame, pd.Series, str)):
        return
    if not isinstance(data, Sequence) or len(data) == 0:
        return
    rows = [row for row in data if isinstance(row, (Sequence, np.ndarray)) and not isinstance(row, str)]
    if not rows:
        return
    if len(rows) != len(data):
        raise_dimension_error(
            f"{name} mixes scalars and rows",
            array_name=name,
            expected_shape="(rows, cols)"
        )
    lengths = sorted({len(row) for row in rows})
    if len(lengths) > 1:
        raise_dimension_error(
            f"{name} is ragged: row lengths {lengths}",
            array_name=name,
            expected_shape="(rows, cols) with equal row lengths"
        )


def _to_array(data: Any, name: str, dtype: type) -> np.ndarray:
    if data is None:
        raise TypeError(f"{name} cannot be None")
    _check_ragged(data, name)
    if isinstance(data, (pd.Series, pd.DataFrame)):
        data = data.to_numpy()
    try:
        return np.array(data, dtype=dtype)
    except (TypeError, ValueError) as e:
        raise_data_error(
            f"{name} could not be converted to a {np.dtype(dtype).name} array",
            data_name=name,
            issue=str(e)
        )


def _check_finite(array: np.ndarray, name: str) -> None:
    if not np.all(np.isfinite(array)):
        raise_numeric_error(
            f"{name} contains NaN or infinite values",
            operation="validation",
            values=array,
            error_type="non_finite"
        )


def validate_matrix(data: Any, matrix_name: str = "matrix") -> Matrix:
    """Coerce input to a validated, owned float64 matrix.

    One-dimensional input is treated as a column matrix.

    Args:
        data: Array-like input (ndarray, nested sequence or DataFrame)
        matrix_name: Name of the matrix for error messages

    Returns:
        np.ndarray: A new (rows, cols) float64 array

    Raises:
        DimensionError: If the input is ragged, empty or more than 2D
        DataError: If the input is not numeric
        NumericError: If the input contains NaN or infinite values
    """
    matrix = _to_array(data, matrix_name, np.float64)

    if matrix.ndim == 1:
        matrix = matrix.reshape(-1, 1)

    if matrix.ndim != 2:
        raise_dimension_error(
            f"{matrix_name} must be 2-dimensional, got {matrix.ndim} dimensions",
            array_name=matrix_name,
            expected_shape="(rows, cols)",
            actual_shape=matrix.shape
        )

    if matrix.shape[0] < 1 or matrix.shape[1] < 1:
        raise_dimension_error(
            f"{matrix_name} must have at least one row and one column",
            array_name=matrix_name,
            expected_shape="(rows >= 1, cols >= 1)",
            actual_shape=matrix.shape
        )

    _check_finite(matrix, matrix_name)
    return matrix


def validate_square_matrix(data: Any, matrix_name: str = "matrix") -> Matrix:
    """Coerce input to a matrix and require it to be square.

    Raises:
        DimensionError: If the matrix is not square
    """
    matrix = validate_matrix(data, matrix_name)

    if matrix.shape[0] != matrix.shape[1]:
        raise_dimension_error(
            f"{matrix_name} must be square, got shape {matrix.shape}",
            array_name=matrix_name,
            expected_shape=f"({matrix.shape[0]}, {matrix.shape[0]})",
            actual_shape=matrix.shape
        )

    return matrix


def validate_same_shape(a: Matrix, b: Matrix,
                        names: Tuple[str, str] = ("matrix_a", "matrix_b")) -> None:
    """Require two matrices to have identical shape.

    Raises:
        DimensionError: If the shapes differ
    """
    if a.shape != b.shape:
        raise_dimension_error(
            f"{names[0]} and {names[1]} must have the same shape, got {a.shape} and {b.shape}",
            array_name=names[1],
            expected_shape=a.shape,
            actual_shape=b.shape
        )


def validate_conformable(a: Matrix, b: Matrix,
                         names: Tuple[str, str] = ("matrix_a", "matrix_b")) -> None:
    """Require the inner dimensions of a matrix product to agree.

    Raises:
        DimensionError: If a.shape[1] != b.shape[0]
    """
    if a.shape[1] != b.shape[0]:
        raise_dimension_error(
            f"Cannot multiply {names[0]} {a.shape} by {names[1]} {b.shape}: inner dimensions differ",
            array_name=names[1],
            expected_shape=f"({a.shape[1]}, any)",
            actual_shape=b.shape
        )


def validate_same_rows(a: Matrix, b: Matrix,
                       names: Tuple[str, str] = ("matrix_a", "matrix_b")) -> None:
    """Require two matrices to have the same number of rows.

    Raises:
        DimensionError: If the row counts differ
    """
    if a.shape[0] != b.shape[0]:
        raise_dimension_error(
            f"{names[0]} has {a.shape[0]} rows but {names[1]} has {b.shape[0]}",
            array_name=names[1],
            expected_shape=f"({a.shape[0]}, any)",
            actual_shape=b.shape
        )


def validate_signal(data: Any, signal_name: str = "signal") -> Vector:
    """Coerce input to a non-empty, owned 1D float64 array.

    Column and row matrices are flattened; pandas Series are accepted.

    Raises:
        DimensionError: If the input is empty or genuinely 2D
    """
    signal = _to_array(data, signal_name, np.float64)

    if signal.ndim == 2 and 1 in signal.shape:
        signal = signal.ravel()

    if signal.ndim != 1:
        raise_dimension_error(
            f"{signal_name} must be 1-dimensional, got shape {signal.shape}",
            array_name=signal_name,
            expected_shape="(n,)",
            actual_shape=signal.shape
        )

    if signal.shape[0] == 0:
        raise_dimension_error(
            f"{signal_name} must not be empty",
            array_name=signal_name,
            expected_shape="(n >= 1,)",
            actual_shape=signal.shape
        )

    _check_finite(signal, signal_name)
    return signal


def validate_complex_signal(data: Any, signal_name: str = "z") -> ComplexArray:
    """Coerce input to an owned 1D complex128 array.

    Elements may be Python numbers, NumPy scalars or any object implementing
    ``__complex__`` (such as :class:`~matlib.spectral.complex_scalar.ComplexScalar`).
    Empty input is allowed here; the transform rejects it as a length error.
    """
    if isinstance(data, np.ndarray):
        signal = data.astype(np.complex128, copy=True)
    elif isinstance(data, pd.Series):
        signal = data.to_numpy().astype(np.complex128)
    else:
        _check_ragged(data, signal_name)
        rows = list(data)
        try:
            if rows and all(isinstance(row, (list, tuple, np.ndarray)) for row in rows):
                # nested rows; a single column or row is flattened below
                signal = np.array([[complex(value) for value in row] for row in rows],
                                  dtype=np.complex128)
            else:
                signal = np.array([complex(value) for value in rows], dtype=np.complex128)
        except (TypeError, ValueError) as e:
            raise_data_error(
                f"{signal_name} could not be converted to a complex128 array",
                data_name=signal_name,
                issue=str(e)
            )

    if signal.ndim == 2 and 1 in signal.shape:
        signal = signal.ravel()

    if signal.ndim != 1:
        raise_dimension_error(
            f"{signal_name} must be 1-dimensional, got shape {signal.shape}",
            array_name=signal_name,
            expected_shape="(n,)",
            actual_shape=signal.shape
        )

    _check_finite(signal, signal_name)
    return signal


def is_power_of_two(n: int) -> bool:
    """Return True if n is a positive integer power of two (1 included)."""
    return n > 0 and (n & (n - 1)) == 0


def validate_positive_int(value: Any, param_name: str, minimum: int = 1,
                          maximum: Optional[int] = None) -> int:
    """Validate an integer argument within [minimum, maximum].

    Raises:
        ParameterError: If value is not an integer in range
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise_parameter_error(
            f"{param_name} must be an integer, got {type(value).__name__}",
            param_name=param_name,
            param_value=value,
            constraint="integer"
        )
    value = int(value)
    if value < minimum or (maximum is not None and value > maximum):
        bounds = f">= {minimum}" if maximum is None else f"in [{minimum}, {maximum}]"
        raise_parameter_error(
            f"{param_name} must be {bounds}, got {value}",
            param_name=param_name,
            param_value=value,
            constraint=bounds
        )
    return value


def validate_positive_float(value: Any, param_name: str) -> float:
    """Validate a strictly positive, finite float argument.

    Raises:
        ParameterError: If value is not a positive finite number
    """
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise_parameter_error(
            f"{param_name} must be a number, got {type(value).__name__}",
            param_name=param_name,
            param_value=value,
            constraint="> 0"
        )
    if not np.isfinite(value) or value <= 0:
        raise_parameter_error(
            f"{param_name} must be positive and finite, got {value}",
            param_name=param_name,
            param_value=value,
            constraint="> 0"
        )
    return value


def is_valid_pivot_tolerance(value: Any) -> bool:
    """Return True if value is a usable pivot tolerance, a number in [0, 1)."""
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        return False
    return 0 <= value < 1


def validate_pivot_tolerance(value: Any, param_name: str = "tolerance") -> float:
    """Validate a pivot tolerance; zero means only exact zeros are singular.

    Raises:
        ParameterError: If value is not a number in [0, 1)
    """
    if not is_valid_pivot_tolerance(value):
        raise_parameter_error(
            f"{param_name} must be a number in [0, 1), got {value!r}",
            param_name=param_name,
            param_value=value,
            constraint="0 <= tolerance < 1"
        )
    return float(value)
