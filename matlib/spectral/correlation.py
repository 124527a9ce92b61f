# matlib/spectral/correlation.py
"""
Direct-summation correlation.

Cross-correlation is computed lag by lag in the time domain, for lags
0 .. len(x) - 1. The template ``y`` may be shorter than the signal ``x``;
terms that would index past the end of ``y`` are omitted, which is what lets
a short pulse template be slid along a longer recording.
"""

import logging

import numpy as np

from matlib.core.acceleration import select_kernel
from matlib.core.exceptions import raise_numeric_error
from matlib.core.types import SignalLike, Vector
from matlib.core.validation import validate_signal
from matlib.spectral import _numba_core

# Set up module-level logger
logger = logging.getLogger("matlib.spectral.correlation")


def cross_correlation(y: SignalLike, x: SignalLike) -> Vector:
    """
    Cross-correlation of template y against signal x.

    out[i] = sum_{k=i}^{len(x)-1} x[k] y[k-i], for i = 0 .. len(x)-1

    Args:
        y: Template
        x: Signal; its length sets the number of lags

    Returns:
        Vector: Correlation at each lag, length len(x)

    Examples:
        >>> from matlib.spectral.correlation import cross_correlation
        >>> cross_correlation([1, 1], [1, 2, 3])
        array([3., 5., 3.])
    """
    template = validate_signal(y, "y")
    signal = validate_signal(x, "x")
    return select_kernel(_numba_core.direct_correlation)(template, signal)


def auto_correlation(x: SignalLike) -> Vector:
    """Auto-correlation, the cross-correlation of x with itself."""
    signal = validate_signal(x, "x")
    return select_kernel(_numba_core.direct_correlation)(signal, signal)


def normalized_cross_correlation(y: SignalLike, x: SignalLike) -> Vector:
    """
    Cross-correlation scaled by the geometric mean of the signal energies.

    The raw correlation is divided by sqrt(Rxx[0] Ryy[0]), where R[0] is the
    zero-lag auto-correlation (the energy) of each input. Correlating a
    signal with itself therefore gives 1 at lag 0.

    Args:
        y: Template
        x: Signal

    Returns:
        Vector: Normalized correlation, length len(x)

    Raises:
        NumericError: If either input has zero energy
    """
    template = validate_signal(y, "y")
    signal = validate_signal(x, "x")

    energy_x = float(np.dot(signal, signal))
    energy_y = float(np.dot(template, template))
    if energy_x == 0.0 or energy_y == 0.0:
        raise_numeric_error(
            "Cannot normalize correlation of a zero-energy signal",
            operation="normalized_cross_correlation",
            values={"energy_x": energy_x, "energy_y": energy_y},
            error_type="division_by_zero"
        )

    raw = select_kernel(_numba_core.direct_correlation)(template, signal)
    logger.debug(f"Normalized correlation over {signal.shape[0]} lags")
    return raw / np.sqrt(energy_x * energy_y)
