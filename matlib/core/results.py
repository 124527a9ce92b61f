'''
Result containers for the MatLib kernel.

Elimination, power iteration and Jacobi rotation return dataclass results
rather than bare arrays, so that callers can tell a solved system from a
singular one, and a converged iteration from one stopped by its iteration
cap, without inspecting the shape or values of the matrices.
'''

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import numpy as np

from matlib.core.exceptions import raise_singular_error


class EliminationStatus(Enum):
    """Outcome of an elimination run."""
    SOLVED = "solved"
    SINGULAR = "singular"


@dataclass(frozen=True, eq=False)
class KernelResult:
    """Base class for kernel results.

    Provides dictionary conversion and a text summary shared by all results.
    """

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a JSON-friendly dictionary.

        Returns:
            Dict[str, Any]: Field names mapped to values, arrays as lists
        """
        result_dict = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, np.ndarray):
                value = value.tolist()
            elif isinstance(value, Enum):
                value = value.value
            result_dict[f.name] = value
        return result_dict

    def summary(self) -> str:
        """Generate a text summary of the result."""
        header = f"{self.__class__.__name__}\n"
        header += "=" * (len(header) - 1) + "\n"
        lines = []
        for key, value in self.to_dict().items():
            lines.append(f"  {key}: {value}")
        return header + "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.summary()


@dataclass(frozen=True, eq=False)
class EliminationResult(KernelResult):
    """Outcome of Gaussian or Gauss-Jordan elimination on [A | B].

    Attributes:
        status: SOLVED when every column had a usable pivot, SINGULAR otherwise
        coefficients: Left block of the augmented matrix (reduced or triangular)
        rhs: Right block of the augmented matrix
        swaps: Number of row swaps performed
        method: "gauss_jordan" or "gaussian"
        singular_column: Column at which a zero pivot stopped elimination
        pivot: The rejected pivot value when singular
        tolerance: Pivot tolerance in force
    """
    status: EliminationStatus
    coefficients: np.ndarray
    rhs: np.ndarray
    swaps: int = 0
    method: str = "gauss_jordan"
    singular_column: Optional[int] = None
    pivot: Optional[float] = None
    tolerance: float = 0.0

    @property
    def is_solved(self) -> bool:
        return self.status is EliminationStatus.SOLVED

    @property
    def is_singular(self) -> bool:
        return self.status is EliminationStatus.SINGULAR

    def partition(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return the (left, right) blocks regardless of status."""
        return self.coefficients.copy(), self.rhs.copy()

    def unwrap(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return the (left, right) blocks of a solved system.

        Raises:
            SingularMatrixError: If elimination met a zero pivot
        """
        if self.is_singular:
            raise_singular_error(
                f"Matrix is singular: zero pivot in column {self.singular_column}",
                column=self.singular_column,
                pivot=self.pivot,
                tolerance=self.tolerance,
                details=f"Detected during {self.method.replace('_', '-')} elimination"
            )
        return self.partition()


@dataclass(frozen=True, eq=False)
class PowerIterationResult(KernelResult):
    """Outcome of power iteration.

    Attributes:
        eigenvalue: Estimate of the dominant eigenvalue
        eigenvector: Unit-norm column estimate of the dominant eigenvector
        iterations: Number of iterations performed
        converged: Whether the residual fell below the tolerance
        residual_norm: L1 norm of the final residual
        tolerance: Convergence threshold in force
    """
    eigenvalue: float
    eigenvector: np.ndarray
    iterations: int
    converged: bool
    residual_norm: float
    tolerance: float


@dataclass(frozen=True, eq=False)
class JacobiResult(KernelResult):
    """Outcome of the cyclic Jacobi eigenvalue method.

    Attributes:
        eigenvalues: Diagonal of the converged matrix
        eigenvectors: Accumulated rotations; column k pairs with eigenvalues[k]
        iterations: Number of rotations applied
        converged: Whether the largest off-diagonal entry fell below the tolerance
        off_diagonal: Largest off-diagonal magnitude at exit
        tolerance: Convergence threshold in force
        diagonalized: The final rotated matrix
    """
    eigenvalues: np.ndarray
    eigenvectors: np.ndarray
    iterations: int
    converged: bool
    off_diagonal: float
    tolerance: float
    diagonalized: np.ndarray = field(repr=False, default_factory=lambda: np.empty((0, 0)))
