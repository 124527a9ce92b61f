"""
MatLib Utilities Module

Boundary helpers around the numerical kernel: the point pair carrier with
sample covariance, and newline-delimited series input and output for the
command-line driver.
"""

import logging

# Set up module-level logger
logger = logging.getLogger("matlib.utils")

from .point import PointPair, covariance

from .data_io import read_series, write_series

__all__ = [
    'PointPair',
    'covariance',
    'read_series',
    'write_series',
]
