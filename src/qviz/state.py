"""
Single-qubit state |ψ⟩ = α|0⟩ + β|1⟩.

A demo page builds a fresh ``QubitState`` from its slider values on every
input event, usually through :func:`normalize`, then reads probabilities
and Bloch-sphere angles back out of it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy import ndarray

from qviz.complex_scalar import ONE, ZERO, ComplexScalar, wrap_phase
from qviz.constants import NORMALIZATION_TOL, ZERO_NORM_EPS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlochAngles:
    """
    Spherical coordinates of a state on the Bloch sphere.

    Attributes
    ----------
    theta : float
        Polar angle in [0, π]; 0 is |0⟩, π is |1⟩.
    phi : float
        Azimuthal angle in [0, 2π).
    """

    theta: float
    phi: float

    def to_cartesian(self) -> tuple[float, float, float]:
        """Unit vector (x, y, z) for these angles."""
        sin_t = math.sin(self.theta)
        return (
            sin_t * math.cos(self.phi),
            sin_t * math.sin(self.phi),
            math.cos(self.theta),
        )


@dataclass(frozen=True)
class QubitState:
    """
    Amplitude pair of a two-level system.

    Construction does not normalize; use :func:`normalize` or
    :meth:`normalized` for that.

    Attributes
    ----------
    alpha : ComplexScalar
        Amplitude of |0⟩.
    beta : ComplexScalar
        Amplitude of |1⟩.
    """

    alpha: ComplexScalar
    beta: ComplexScalar

    def __post_init__(self) -> None:
        parts = (self.alpha.re, self.alpha.im, self.beta.re, self.beta.im)
        if not all(math.isfinite(p) for p in parts):
            raise ValueError(f"Amplitudes must be finite, got {self!r}")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def ground(cls) -> QubitState:
        """|0⟩"""
        return cls(ONE, ZERO)

    @classmethod
    def excited(cls) -> QubitState:
        """|1⟩"""
        return cls(ZERO, ONE)

    @classmethod
    def basis(cls, index: int) -> QubitState:
        if index not in (0, 1):
            raise ValueError(f"Basis index must be 0 or 1, got {index}")
        return cls.ground() if index == 0 else cls.excited()

    @classmethod
    def from_polar(
        cls,
        alpha_mag: float,
        alpha_phase: float,
        beta_mag: float,
        beta_phase: float,
    ) -> QubitState:
        return cls(
            ComplexScalar.from_polar(alpha_mag, alpha_phase),
            ComplexScalar.from_polar(beta_mag, beta_phase),
        )

    @classmethod
    def from_bloch(cls, theta: float, phi: float) -> QubitState:
        """
        State at polar angle ``theta`` and azimuth ``phi`` on the Bloch sphere.

        |ψ⟩ = cos(θ/2)|0⟩ + e^(iφ)·sin(θ/2)|1⟩, inverse of :func:`bloch_angles`.
        """
        return cls.from_polar(math.cos(theta / 2.0), 0.0, math.sin(theta / 2.0), phi)

    @classmethod
    def from_amplitudes(cls, alpha: complex, beta: complex) -> QubitState:
        return cls(ComplexScalar.from_complex(alpha), ComplexScalar.from_complex(beta))

    @classmethod
    def from_vector(cls, vector) -> QubitState:
        """Build from a length-2 array-like of complex amplitudes."""
        vec = np.asarray(vector, dtype=np.complex128)
        if vec.shape != (2,):
            raise ValueError(f"Qubit state vector must have shape (2,), got {vec.shape}")
        return cls.from_amplitudes(vec[0], vec[1])

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def vector(self) -> ndarray:
        """State as a complex128 column [α, β]."""
        return np.array([complex(self.alpha), complex(self.beta)], dtype=np.complex128)

    @property
    def norm_squared(self) -> float:
        return self.alpha.magnitude_squared + self.beta.magnitude_squared

    @property
    def relative_phase(self) -> float:
        """phase(β) - phase(α), not wrapped."""
        return self.beta.phase - self.alpha.phase

    def is_normalized(self, tol: float = NORMALIZATION_TOL) -> bool:
        return abs(self.norm_squared - 1.0) <= tol

    def normalized(self) -> QubitState:
        """
        Return the state scaled to unit norm.

        A (near) zero vector has no direction and falls back to |0⟩.
        """
        norm_sq = self.norm_squared
        if norm_sq <= ZERO_NORM_EPS:
            logger.debug("zero-norm state %r, falling back to |0⟩", self)
            return QubitState.ground()
        inv = 1.0 / math.sqrt(norm_sq)
        return QubitState(self.alpha.scale(inv), self.beta.scale(inv))

    def probabilities(self) -> tuple[float, float]:
        return probabilities(self)

    def is_close(self, other: QubitState, tol: float) -> bool:
        return self.alpha.is_close(other.alpha, tol) and self.beta.is_close(other.beta, tol)


# ---------------------------------------------------------------------------
# Kernel operations
# ---------------------------------------------------------------------------

def normalize(
    alpha_mag: float,
    beta_mag: float,
    alpha_phase: float = 0.0,
    beta_phase: float = 0.0,
) -> QubitState:
    """
    Build a unit-norm state from slider magnitudes (and optional phases).

    Both magnitudes are divided by sqrt(alpha_mag² + beta_mag²). When that
    sum is at or below ``ZERO_NORM_EPS`` the ground state |0⟩ is returned
    instead of dividing by zero.

    Parameters
    ----------
    alpha_mag, beta_mag : float
        Unnormalized amplitude magnitudes of |0⟩ and |1⟩.
    alpha_phase, beta_phase : float
        Phases in radians.

    Returns
    -------
    QubitState
        Normalized state.
    """
    if not (math.isfinite(alpha_mag) and math.isfinite(beta_mag)):
        raise ValueError(f"Magnitudes must be finite, got ({alpha_mag}, {beta_mag})")
    norm_sq = alpha_mag * alpha_mag + beta_mag * beta_mag
    if norm_sq <= ZERO_NORM_EPS:
        logger.debug("zero-length amplitudes (%g, %g), falling back to |0⟩", alpha_mag, beta_mag)
        return QubitState.ground()
    norm = math.sqrt(norm_sq)
    return QubitState.from_polar(
        alpha_mag / norm, alpha_phase, beta_mag / norm, beta_phase
    )


def probabilities(state: QubitState) -> tuple[float, float]:
    """Born-rule probabilities (|α|², |β|²)."""
    return (state.alpha.magnitude_squared, state.beta.magnitude_squared)


def bloch_angles(state: QubitState) -> BlochAngles:
    """
    Bloch-sphere angles of a state.

    theta = 2·acos(|α|) with |α| clamped to [0, 1];
    phi = phase(β) - phase(α), wrapped into [0, 2π).
    The state is normalized first, so slider drift never leaves the sphere.
    """
    state = state.normalized()
    alpha_mag = min(1.0, max(0.0, state.alpha.magnitude))
    theta = 2.0 * math.acos(alpha_mag)
    phi = wrap_phase(state.relative_phase)
    return BlochAngles(theta, phi)


def bloch_vector(state: QubitState) -> tuple[float, float, float]:
    """Convert qubit amplitudes to Bloch sphere coordinates."""
    state = state.normalized()
    overlap = state.alpha.conjugate() * state.beta
    x = 2.0 * overlap.re
    y = 2.0 * overlap.im
    z = state.alpha.magnitude_squared - state.beta.magnitude_squared
    return (x, y, z)


def from_bloch_angles(angles: BlochAngles) -> QubitState:
    """Normalized state pointing at ``angles``; inverse of :func:`bloch_angles`."""
    return QubitState.from_bloch(angles.theta, angles.phi)
