"""
2x2 operator algebra: gate application, unitarity/hermiticity checks,
commutators and eigen decomposition.

Properties are always computed from the conjugate transpose, never read
from catalogue flags, so arbitrary user matrices classify the same way the
presets do.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy import ndarray

from qviz.constants import COMMUTATOR_TOL, MATH_TOL
from qviz.state import QubitState

logger = logging.getLogger(__name__)

Matrix = ndarray

_DEGENERACY_TOL = 1e-9


def _as_square(matrix, name: str = "matrix") -> Matrix:
    m = np.asarray(matrix, dtype=np.complex128)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        raise ValueError(f"{name} must be square, got shape {m.shape}")
    return m


def _as_2x2(matrix, name: str = "matrix") -> Matrix:
    m = _as_square(matrix, name)
    if m.shape != (2, 2):
        raise ValueError(f"{name} must be 2x2, got shape {m.shape}")
    return m


# ---------------------------------------------------------------------------
# Gate application
# ---------------------------------------------------------------------------

def apply(matrix, state: QubitState) -> QubitState:
    """
    Apply a 2x2 operator to a qubit state: |ψ'⟩ = M|ψ⟩.

    The output is not renormalized; for a unitary ``matrix`` the norm of
    ``state`` is preserved.
    """
    m = _as_2x2(matrix)
    return QubitState.from_vector(m @ state.vector)


def apply_sequence(matrices, state: QubitState) -> QubitState:
    """Apply operators left to right (first element acts first)."""
    for m in matrices:
        state = apply(m, state)
    return state


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

def dagger(matrix) -> Matrix:
    """Conjugate transpose M†."""
    return _as_square(matrix).conj().T


def is_unitary(matrix, tolerance: float = MATH_TOL) -> bool:
    """Check if a matrix is unitary: M†M = I"""
    m = _as_square(matrix)
    product = m.conj().T @ m
    return bool(np.allclose(product, np.eye(m.shape[0]), atol=tolerance, rtol=0.0))


def is_hermitian(matrix, tolerance: float = MATH_TOL) -> bool:
    """Check if a matrix equals its conjugate transpose: M = M†"""
    m = _as_square(matrix)
    return bool(np.allclose(m, m.conj().T, atol=tolerance, rtol=0.0))


def commutator(a, b) -> Matrix:
    """[A, B] = AB - BA"""
    a = _as_square(a, "a")
    b = _as_square(b, "b")
    return a @ b - b @ a


def anticommutator(a, b) -> Matrix:
    """{A, B} = AB + BA"""
    a = _as_square(a, "a")
    b = _as_square(b, "b")
    return a @ b + b @ a


def commutes(a, b, tolerance: float = COMMUTATOR_TOL) -> bool:
    """True when every entry of [A, B] is within ``tolerance`` of zero."""
    return bool(np.all(np.abs(commutator(a, b)) < tolerance))


def is_normal(matrix, tolerance: float = MATH_TOL) -> bool:
    """M commutes with M†, i.e. M has an orthonormal eigenbasis."""
    m = _as_square(matrix)
    # [M, M†] grows with the square of the entries
    scale = max(1.0, float(np.linalg.norm(m)) ** 2)
    return commutes(m, m.conj().T, tolerance * scale)


# ---------------------------------------------------------------------------
# Eigen decomposition
# ---------------------------------------------------------------------------

def eigen_decomposition(matrix) -> tuple[ndarray, ndarray]:
    """
    Orthonormal eigen decomposition of a normal operator.

    Returns
    -------
    eigenvalues : ndarray
        Complex eigenvalues, sorted by descending real then imaginary part
        (so Pauli operators list +1 before -1).
    eigenvectors : ndarray
        Matching unit eigenvectors as columns.

    Raises
    ------
    ValueError
        If the operator is not normal and therefore has no orthonormal
        eigenbasis to measure in.
    """
    m = _as_square(matrix)
    if is_hermitian(m):
        values, vectors = np.linalg.eigh(m)
        values = values.astype(np.complex128)
    elif is_normal(m):
        values, vectors = np.linalg.eig(m)
    else:
        logger.debug("rejecting non-normal operator %s", m.tolist())
        raise ValueError("Operator is not normal; it has no orthonormal eigenbasis")

    order = sorted(
        range(len(values)),
        key=lambda k: (-round(values[k].real, 9), -round(values[k].imag, 9)),
    )
    return values[order], vectors[:, order]


@dataclass(frozen=True)
class Outcome:
    """
    One possible result of measuring an observable.

    Attributes
    ----------
    eigenvalue : complex
        Value read out.
    probability : float
        Born-rule probability of this eigenvalue.
    state : QubitState
        Post-measurement state (projection onto the eigenspace).
    """

    eigenvalue: complex
    probability: float
    state: QubitState


def measurement_distribution(state: QubitState, operator) -> list[Outcome]:
    """
    Outcome probabilities of measuring ``operator`` on ``state``.

    Degenerate eigenvalues are merged into a single outcome whose
    probability is the squared norm of the projection onto that eigenspace.
    """
    values, vectors = eigen_decomposition(_as_2x2(operator, "operator"))
    psi = state.normalized().vector

    outcomes: list[Outcome] = []
    used = [False] * len(values)
    for k, value in enumerate(values):
        if used[k]:
            continue
        group = [j for j in range(k, len(values))
                 if not used[j] and abs(values[j] - value) <= _DEGENERACY_TOL]
        for j in group:
            used[j] = True

        basis = vectors[:, group]
        projected = basis @ (basis.conj().T @ psi)
        prob = float(np.real(np.vdot(projected, projected)))
        if prob > MATH_TOL:
            post = QubitState.from_vector(projected / np.sqrt(prob))
        else:
            post = QubitState.from_vector(vectors[:, group[0]])
        outcomes.append(Outcome(complex(value), prob, post))
    return outcomes
