"""
Two-qubit composite states.

|Ψ⟩ = c00|00⟩ + c01|01⟩ + c10|10⟩ + c11|11⟩, where the first label is
qubit 1. The flat vector ordering is index = 2*i + j, which is exactly what
``np.kron(q1, q2)`` produces.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy import ndarray

from qviz import gates
from qviz.complex_scalar import ZERO, ComplexScalar
from qviz.constants import MATH_TOL, NORMALIZATION_TOL, SQRT2_INV
from qviz.state import QubitState


class BellKind(str, Enum):
    """The four maximally entangled Bell states."""

    PHI_PLUS = "phi-plus"
    PHI_MINUS = "phi-minus"
    PSI_PLUS = "psi-plus"
    PSI_MINUS = "psi-minus"


@dataclass(frozen=True)
class TwoQubitState:
    """Amplitudes of the four two-qubit basis states."""

    c00: ComplexScalar
    c01: ComplexScalar
    c10: ComplexScalar
    c11: ComplexScalar

    @classmethod
    def from_vector(cls, vector) -> TwoQubitState:
        vec = np.asarray(vector, dtype=np.complex128)
        if vec.shape != (4,):
            raise ValueError(f"Two-qubit state vector must have shape (4,), got {vec.shape}")
        return cls(*(ComplexScalar.from_complex(v) for v in vec))

    @property
    def amplitudes(self) -> tuple[ComplexScalar, ComplexScalar, ComplexScalar, ComplexScalar]:
        return (self.c00, self.c01, self.c10, self.c11)

    @property
    def vector(self) -> ndarray:
        return np.array([complex(c) for c in self.amplitudes], dtype=np.complex128)

    @property
    def amplitude_matrix(self) -> ndarray:
        """2x2 matrix C with C[i, j] = c_ij."""
        return self.vector.reshape(2, 2)

    @property
    def norm_squared(self) -> float:
        return sum(c.magnitude_squared for c in self.amplitudes)

    def is_normalized(self, tol: float = NORMALIZATION_TOL) -> bool:
        return abs(self.norm_squared - 1.0) <= tol


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def tensor_product(q1: QubitState, q2: QubitState) -> TwoQubitState:
    """
    Separable joint state |ψ₁⟩ ⊗ |ψ₂⟩: c_ij = amp_i(q1) · amp_j(q2).

    Normalized whenever both inputs are.
    """
    a = (q1.alpha, q1.beta)
    b = (q2.alpha, q2.beta)
    return TwoQubitState(a[0] * b[0], a[0] * b[1], a[1] * b[0], a[1] * b[1])


_H = ComplexScalar(SQRT2_INV, 0.0)

_BELL_STATES = {
    BellKind.PHI_PLUS: TwoQubitState(_H, ZERO, ZERO, _H),
    BellKind.PHI_MINUS: TwoQubitState(_H, ZERO, ZERO, -_H),
    BellKind.PSI_PLUS: TwoQubitState(ZERO, _H, _H, ZERO),
    BellKind.PSI_MINUS: TwoQubitState(ZERO, _H, -_H, ZERO),
}


def bell_state(kind: BellKind | str) -> TwoQubitState:
    """
    Fixed Bell-state literal.

    Accepts a :class:`BellKind` or its string value (``"phi-plus"`` ...).

    Raises
    ------
    KeyError
        For an unknown name.
    """
    try:
        key = BellKind(kind)
    except ValueError:
        raise KeyError(
            f"Unknown Bell state: '{kind}'. Available: {[k.value for k in BellKind]}"
        ) from None
    return _BELL_STATES[key]


# ---------------------------------------------------------------------------
# Measurement
# ---------------------------------------------------------------------------

def measurement_probabilities(state: TwoQubitState) -> tuple[float, float, float, float]:
    """(p00, p01, p10, p11) as squared amplitude magnitudes."""
    return tuple(c.magnitude_squared for c in state.amplitudes)


def correlation_coefficient(probs) -> float:
    """
    Same-basis outcome correlation: p00 + p11 - p01 - p10.

    +1 means the two qubits always agree, -1 always disagree.
    """
    p00, p01, p10, p11 = probs
    return p00 + p11 - p01 - p10


# Rotations taking each basis' +1/-1 eigenstates to |0⟩/|1⟩
_TO_COMPUTATIONAL = {
    "z": gates.I,
    "x": gates.H,
    "y": gates.H @ gates.S.conj().T,
}


def _basis_rotation(basis: str) -> ndarray:
    key = basis.lower()
    if key not in _TO_COMPUTATIONAL:
        raise KeyError(f"Unknown measurement basis: '{basis}'. Available: {sorted(_TO_COMPUTATIONAL)}")
    return _TO_COMPUTATIONAL[key]


def basis_measurement_probabilities(
    state: TwoQubitState,
    basis_a: str = "z",
    basis_b: str = "z",
) -> tuple[float, float, float, float]:
    """
    Joint outcome probabilities when qubit 1 is measured in ``basis_a`` and
    qubit 2 in ``basis_b`` (each one of "x", "y", "z").

    Outcome 0 is the +1 eigenstate of the chosen Pauli basis.
    """
    rotation = np.kron(_basis_rotation(basis_a), _basis_rotation(basis_b))
    rotated = rotation @ state.vector
    return tuple(float(p) for p in np.abs(rotated) ** 2)


# ---------------------------------------------------------------------------
# Entanglement
# ---------------------------------------------------------------------------

def concurrence(state: TwoQubitState) -> float:
    """Pure-state concurrence 2|c00·c11 - c01·c10|; 0 for products, 1 for Bell states."""
    det = state.c00 * state.c11 - state.c01 * state.c10
    return 2.0 * det.magnitude


def is_separable(state: TwoQubitState, tolerance: float = MATH_TOL) -> bool:
    """
    True when the state factors as |ψ₁⟩ ⊗ |ψ₂⟩.

    That is the case exactly when the 2x2 amplitude matrix has rank 1,
    i.e. its determinant vanishes.
    """
    return concurrence(state) / 2.0 <= tolerance


def reduced_probabilities(state: TwoQubitState) -> tuple[tuple[float, float], tuple[float, float]]:
    """Marginal Z-basis probabilities of qubit 1 and qubit 2."""
    p00, p01, p10, p11 = measurement_probabilities(state)
    return ((p00 + p01, p10 + p11), (p00 + p10, p01 + p11))


def factor(state: TwoQubitState, tolerance: float = MATH_TOL) -> tuple[QubitState, QubitState] | None:
    """
    Split a separable state into its two factors, or return None if it is entangled
    (or the zero vector).

    Factors are normalized; the global phase is carried by the first one.
    """
    if not is_separable(state, tolerance):
        return None
    c = state.amplitude_matrix
    # Any non-zero row of a rank-1 matrix is proportional to q2.
    row = int(np.argmax(np.linalg.norm(c, axis=1)))
    q2 = c[row]
    q2_norm = np.linalg.norm(q2)
    if q2_norm <= MATH_TOL:
        return None
    q2 = q2 / q2_norm
    q1 = c @ q2.conj()
    q1 = q1 / np.linalg.norm(q1)
    return QubitState.from_vector(q1), QubitState.from_vector(q2)
