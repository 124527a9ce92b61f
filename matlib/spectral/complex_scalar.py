"""
Complex scalar value type.

A small immutable ``(real, imag)`` pair used where a caller wants to build a
transform input element by element or inspect the output bin by bin. The
transforms themselves work on complex128 arrays; :class:`ComplexScalar`
implements ``__complex__`` so sequences of it are accepted wherever a complex
array-like is.
"""

import math
from dataclasses import dataclass
from typing import Union

Number = Union[int, float]


@dataclass(frozen=True)
class ComplexScalar:
    """Immutable complex number.

    Attributes:
        real: Real part
        imag: Imaginary part
    """
    real: float = 0.0
    imag: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "real", float(self.real))
        object.__setattr__(self, "imag", float(self.imag))

    @classmethod
    def from_complex(cls, value: complex) -> "ComplexScalar":
        """Build a ComplexScalar from a Python or NumPy complex value."""
        value = complex(value)
        return cls(value.real, value.imag)

    def __complex__(self) -> complex:
        return complex(self.real, self.imag)

    def add(self, other: "ComplexScalar") -> "ComplexScalar":
        return ComplexScalar(self.real + other.real, self.imag + other.imag)

    def subtract(self, other: "ComplexScalar") -> "ComplexScalar":
        return ComplexScalar(self.real - other.real, self.imag - other.imag)

    def multiply(self, other: "ComplexScalar") -> "ComplexScalar":
        """(a + bi)(c + di) = (ac - bd) + (ad + bc)i"""
        return ComplexScalar(
            self.real * other.real - self.imag * other.imag,
            self.real * other.imag + self.imag * other.real
        )

    def scale(self, k: Number) -> "ComplexScalar":
        return ComplexScalar(k * self.real, k * self.imag)

    def magnitude(self) -> float:
        return math.hypot(self.real, self.imag)

    def conjugate(self) -> "ComplexScalar":
        return ComplexScalar(self.real, -self.imag)

    def __rsub__(self, other: Union[Number, complex]) -> "ComplexScalar":
        return ComplexScalar(other.real - self.real, other.imag - self.imag)

    # plain numbers expose .real and .imag, so they mix in from either side
    __add__ = add
    __radd__ = add
    __sub__ = subtract
    __mul__ = multiply
    __rmul__ = multiply
    __abs__ = magnitude
