# matlib/utils/point.py
"""
Point pair carrier and sample covariance.

:class:`PointPair` is the two-field value downstream classification code uses
to move (x, y) observations into and out of the kernel. It converts to a 2x1
column matrix, which is what :func:`matlib.linalg.eigen.normalize_vector` and
the matrix primitives work on.

Functions:
    covariance: 2x2 sample covariance matrix of a set of point pairs
"""

import logging
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from matlib.core.exceptions import raise_dimension_error
from matlib.core.types import ColumnMatrix, MatrixLike, SquareMatrix
from matlib.core.validation import validate_matrix
from matlib.linalg.primitives import multiply, scale, transpose

# Set up module-level logger
logger = logging.getLogger("matlib.utils.point")


@dataclass(frozen=True)
class PointPair:
    """Immutable (x, y) observation."""
    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def matrix(self) -> ColumnMatrix:
        """Return the point as the 2x1 column matrix [[x], [y]]."""
        return np.array([[self.x], [self.y]])

    @classmethod
    def from_matrix(cls, matrix: MatrixLike) -> "PointPair":
        """
        Build a point from a 2x1 matrix or a length-2 vector.

        Raises:
            DimensionError: If the input does not hold exactly two values
        """
        m = validate_matrix(matrix, "matrix")
        if m.size != 2 or 1 not in m.shape:
            raise_dimension_error(
                f"A point pair needs a 2x1 matrix, got shape {m.shape}",
                array_name="matrix",
                expected_shape=(2, 1),
                actual_shape=m.shape
            )
        values = m.ravel()
        return cls(values[0], values[1])


def covariance(points: Iterable[PointPair]) -> SquareMatrix:
    """
    Sample covariance matrix of a set of point pairs.

    The points are stacked as the columns of a 2xN matrix X, centred on their
    mean, and the covariance is (X_c X_c^T) / (N - 1).

    Args:
        points: At least two PointPair observations

    Returns:
        SquareMatrix: 2x2 covariance matrix [[var_x, cov_xy], [cov_xy, var_y]]

    Raises:
        DimensionError: If fewer than two points are given

    Examples:
        >>> from matlib.utils.point import PointPair, covariance
        >>> covariance([PointPair(0, 0), PointPair(2, 2)])
        array([[2., 2.],
               [2., 2.]])
    """
    columns = [point.matrix() for point in points]
    if len(columns) < 2:
        raise_dimension_error(
            f"Sample covariance needs at least two points, got {len(columns)}",
            array_name="points",
            expected_shape="(N >= 2,)",
            actual_shape=(len(columns),)
        )

    data = np.hstack(columns)
    centred = data - data.mean(axis=1, keepdims=True)
    logger.debug(f"Covariance of {len(columns)} points")
    return scale(1.0 / (len(columns) - 1), multiply(centred, transpose(centred)))
