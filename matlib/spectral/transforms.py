# matlib/spectral/transforms.py
"""
Spectral Transform Engine

Iterative radix-2 fast Fourier transform and the operations built on it:
inverse transform, power spectral density and FFT-based moving-average
convolution.

The transform runs log2(n) decimation-in-frequency butterfly stages and then
a bit-reversal pass to restore natural order. The forward kernel is
exp(-2 pi i k m / n), the same convention as :func:`numpy.fft.fft`; the
inverse uses the conjugate kernel and is scaled by 1/n so that a round trip
returns the input.

Functions:
    fast_fourier_transform: Forward or inverse FFT of a power-of-two length signal
    inverse_fast_fourier_transform: Inverse FFT
    fft_scalars: FFT returning ComplexScalar values
    power_spectral_density: Squared magnitude of each FFT bin
    fft_convolution: Circular moving-average filter through the frequency domain
"""

import logging
from typing import Any, List

import numpy as np

from matlib.core.acceleration import select_kernel
from matlib.core.exceptions import raise_parameter_error, raise_transform_length_error
from matlib.core.types import ComplexArray, SignalLike, Vector
from matlib.core.validation import (
    is_power_of_two, validate_complex_signal, validate_positive_int, validate_signal
)
from matlib.spectral import _numba_core
from matlib.spectral.complex_scalar import ComplexScalar

# Set up module-level logger
logger = logging.getLogger("matlib.spectral.transforms")


def _validate_direction(direction: Any) -> int:
    if isinstance(direction, bool) or direction not in (1, -1):
        raise_parameter_error(
            f"Transform direction must be 1 (forward) or -1 (inverse), got {direction!r}",
            param_name="direction",
            param_value=direction,
            constraint="1 or -1"
        )
    return int(direction)


def fast_fourier_transform(z: Any, direction: int = 1) -> ComplexArray:
    """
    Discrete Fourier transform of a power-of-two length sequence.

    Args:
        z: Real or complex array-like, or a sequence of ComplexScalar
        direction: +1 for the forward transform, -1 for the inverse (scaled by 1/n)

    Returns:
        ComplexArray: New complex128 array of the same length; the input is
        not modified

    Raises:
        TransformLengthError: If the length is not a power of two (0 included)
        ParameterError: If direction is not +1 or -1

    Examples:
        >>> from matlib.spectral.transforms import fast_fourier_transform
        >>> fast_fourier_transform([1, 0, 0, 0])
        array([1.+0.j, 1.+0.j, 1.+0.j, 1.+0.j])
    """
    direction = _validate_direction(direction)
    data = validate_complex_signal(z, "z")
    n = data.shape[0]

    if not is_power_of_two(n):
        raise_transform_length_error(
            f"FFT length must be a power of two, got {n}",
            length=n
        )

    select_kernel(_numba_core.dif_butterflies)(data, direction)
    select_kernel(_numba_core.bit_reverse)(data)

    if direction == -1:
        data /= n

    logger.debug(f"{'Forward' if direction == 1 else 'Inverse'} FFT of length {n}")
    return data


def inverse_fast_fourier_transform(z: Any) -> ComplexArray:
    """Inverse FFT, scaled by 1/n."""
    return fast_fourier_transform(z, -1)


def fft_scalars(z: Any, direction: int = 1) -> List[ComplexScalar]:
    """
    FFT returning one :class:`ComplexScalar` per bin.

    Examples:
        >>> from matlib.spectral.transforms import fft_scalars
        >>> fft_scalars([1, 1])[1]
        ComplexScalar(real=0.0, imag=0.0)
    """
    return [ComplexScalar.from_complex(v) for v in fast_fourier_transform(z, direction)]


def power_spectral_density(z: Any) -> Vector:
    """
    Power spectral density |FFT(z)_k|^2 per bin.

    Returns:
        Vector: Real float64 array of the same length as z

    Raises:
        TransformLengthError: If the length is not a power of two
    """
    spectrum = fast_fourier_transform(z, 1)
    return spectrum.real ** 2 + spectrum.imag ** 2


def fft_convolution(signal: SignalLike, window_width: int) -> Vector:
    """
    Moving-average filter applied by pointwise multiplication in the frequency domain.

    The kernel has the same length as the signal, with 1/p in its first p
    taps and zeros elsewhere. Both are transformed, multiplied bin by bin
    and transformed back. The convolution is circular, so the first p - 1
    outputs wrap around to the end of the signal.

    Args:
        signal: Real signal of power-of-two length n
        window_width: Averaging width p, 1 <= p <= n

    Returns:
        Vector: Real part of the filtered signal

    Raises:
        ParameterError: If p is outside [1, n]
        TransformLengthError: If n is not a power of two

    Examples:
        >>> from matlib.spectral.transforms import fft_convolution
        >>> fft_convolution([4, 4, 4, 4], 2).round(10)
        array([4., 4., 4., 4.])
    """
    x = validate_signal(signal, "signal")
    n = x.shape[0]
    p = validate_positive_int(window_width, "window_width", minimum=1, maximum=n)

    kernel = np.zeros(n)
    kernel[:p] = 1.0 / p

    product = fast_fourier_transform(x, 1) * fast_fourier_transform(kernel, 1)
    logger.debug(f"FFT convolution of length {n} with window {p}")
    return inverse_fast_fourier_transform(product).real.copy()
