"""
Numba-accelerated core functions for spectral transforms.

This module provides the inner loops of the spectral engine:
- Radix-2 decimation-in-frequency butterflies
- The bit-reversal permutation that restores natural output order
- Direct-summation correlation

All functions operate in place on, or allocate from, arrays owned by the
calling engine function.
"""

import logging
import math

import numpy as np
from numba import jit

# Set up module-level logger
logger = logging.getLogger("matlib.spectral._numba_core")


@jit(nopython=True, cache=True)
def dif_butterflies(data: np.ndarray, direction: int) -> None:
    """
    Run the log2(n) decimation-in-frequency stages over a complex array in place.

    At each stage with half-width ``span`` the pair (u, v) = (a[s+k], a[s+k+span])
    becomes (u + v, (u - v) w^k) with w = exp(-direction i pi / span). The
    output is left in bit-reversed order.

    Args:
        data: complex128 array whose length is a power of two
        direction: +1 for the forward kernel, -1 for the inverse
    """
    n = data.shape[0]
    span = n >> 1
    while span >= 1:
        theta = -direction * math.pi / span
        for start in range(0, n, 2 * span):
            for k in range(span):
                twiddle = complex(math.cos(theta * k), math.sin(theta * k))
                u = data[start + k]
                v = data[start + k + span]
                data[start + k] = u + v
                data[start + k + span] = (u - v) * twiddle
        span >>= 1


@jit(nopython=True, cache=True)
def bit_reverse(data: np.ndarray) -> None:
    """Permute a power-of-two length array into bit-reversed index order in place."""
    n = data.shape[0]
    j = 0
    for i in range(1, n):
        bit = n >> 1
        while j & bit:
            j ^= bit
            bit >>= 1
        j ^= bit
        if i < j:
            tmp = data[i]
            data[i] = data[j]
            data[j] = tmp


@jit(nopython=True, cache=True)
def direct_correlation(y: np.ndarray, x: np.ndarray) -> np.ndarray:
    """
    Cross-correlation by direct summation.

    out[i] = sum_{k=i}^{len(x)-1} x[k] y[k-i], skipping terms with k - i >= len(y).

    Returns:
        np.ndarray: Array of length len(x)
    """
    nx = x.shape[0]
    ny = y.shape[0]
    out = np.zeros(nx)
    for i in range(nx):
        total = 0.0
        upper = min(nx, i + ny)
        for k in range(i, upper):
            total += x[k] * y[k - i]
        out[i] = total
    return out
