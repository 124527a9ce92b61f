"""
Kernel dispatch between JIT-compiled and pure-Python execution.

Performance-critical loops live in the ``_numba_core`` modules as Numba
``@jit`` functions. Each compiled dispatcher keeps the original Python
function as ``py_func``; when ``performance.enable_numba`` is switched off
that function is called instead, so results are identical either way and
only the speed changes.
"""

import logging
from typing import Callable

from matlib.core.config import get_config

# Set up module-level logger
logger = logging.getLogger("matlib.core.acceleration")


def numba_enabled() -> bool:
    """Return True if JIT-compiled kernels are enabled."""
    return bool(get_config("performance", "enable_numba", True))


def select_kernel(dispatcher: Callable) -> Callable:
    """
    Return the compiled kernel or its pure-Python original.

    Args:
        dispatcher: A function decorated with ``numba.jit``

    Returns:
        The dispatcher itself, or ``dispatcher.py_func`` when Numba is disabled
    """
    if numba_enabled():
        return dispatcher
    logger.debug(f"Numba disabled, running {dispatcher.__name__} as pure Python")
    return dispatcher.py_func
