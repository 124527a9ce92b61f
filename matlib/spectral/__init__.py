"""
MatLib Spectral Module

Radix-2 FFT, inverse FFT, power spectral density, FFT convolution and
direct-summation correlation.
"""

import logging

# Set up module-level logger
logger = logging.getLogger("matlib.spectral")

from .complex_scalar import ComplexScalar

from .transforms import (
    fast_fourier_transform,
    inverse_fast_fourier_transform,
    fft_scalars,
    power_spectral_density,
    fft_convolution,
)

from .correlation import (
    cross_correlation,
    auto_correlation,
    normalized_cross_correlation,
)

__all__ = [
    'ComplexScalar',

    # Transforms
    'fast_fourier_transform',
    'inverse_fast_fourier_transform',
    'fft_scalars',
    'power_spectral_density',
    'fft_convolution',

    # Correlation
    'cross_correlation',
    'auto_correlation',
    'normalized_cross_correlation',
]
