"""
Minimal complex-number value type.

Amplitudes coming off a demo slider are (magnitude, phase) pairs; the
kernel carries them as ``ComplexScalar`` so that every conversion between
polar and Cartesian form happens in one place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from qviz.constants import MATH_TOL, TWO_PI


@dataclass(frozen=True)
class ComplexScalar:
    """
    Immutable complex number ``re + i·im``.

    Attributes
    ----------
    re : float
        Real part.
    im : float
        Imaginary part.
    """

    re: float = 0.0
    im: float = 0.0

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_polar(cls, magnitude: float, phase: float) -> ComplexScalar:
        """Build ``magnitude · e^(i·phase)``."""
        return cls(magnitude * math.cos(phase), magnitude * math.sin(phase))

    @classmethod
    def from_complex(cls, value: complex) -> ComplexScalar:
        value = complex(value)
        return cls(value.real, value.imag)

    # ------------------------------------------------------------------
    # Derived quantities
    # ------------------------------------------------------------------

    @property
    def magnitude(self) -> float:
        return math.hypot(self.re, self.im)

    @property
    def phase(self) -> float:
        """Argument in (-π, π]; the phase of zero is 0."""
        return math.atan2(self.im, self.re)

    @property
    def magnitude_squared(self) -> float:
        return self.re * self.re + self.im * self.im

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: ComplexScalar) -> ComplexScalar:
        return ComplexScalar(self.re + other.re, self.im + other.im)

    def multiply(self, other: ComplexScalar) -> ComplexScalar:
        return ComplexScalar(
            self.re * other.re - self.im * other.im,
            self.re * other.im + self.im * other.re,
        )

    def conjugate(self) -> ComplexScalar:
        return ComplexScalar(self.re, -self.im)

    def scale(self, factor: float) -> ComplexScalar:
        return ComplexScalar(self.re * factor, self.im * factor)

    def is_close(self, other: ComplexScalar, tol: float = MATH_TOL) -> bool:
        """Component-wise comparison with absolute tolerance."""
        return abs(self.re - other.re) <= tol and abs(self.im - other.im) <= tol

    def __add__(self, other: ComplexScalar) -> ComplexScalar:
        if not isinstance(other, ComplexScalar):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: ComplexScalar) -> ComplexScalar:
        if not isinstance(other, ComplexScalar):
            return NotImplemented
        return ComplexScalar(self.re - other.re, self.im - other.im)

    def __mul__(self, other):
        if isinstance(other, ComplexScalar):
            return self.multiply(other)
        if isinstance(other, (int, float)):
            return self.scale(float(other))
        return NotImplemented

    __rmul__ = __mul__

    def __neg__(self) -> ComplexScalar:
        return ComplexScalar(-self.re, -self.im)

    def __abs__(self) -> float:
        return self.magnitude

    def __complex__(self) -> complex:
        return complex(self.re, self.im)

    def __repr__(self) -> str:
        return f"ComplexScalar(re={self.re!r}, im={self.im!r})"


ZERO = ComplexScalar(0.0, 0.0)
ONE = ComplexScalar(1.0, 0.0)


def wrap_phase(angle: float) -> float:
    """Map an angle into [0, 2π)."""
    wrapped = math.fmod(angle, TWO_PI)
    if wrapped < 0.0:
        wrapped += TWO_PI
    # -1e-17 + 2π rounds back up to 2π
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped
