"""
Projective measurement of a single qubit.

Randomness is always injected: any object with a ``random()`` method
returning a float in [0, 1) works, e.g. ``numpy.random.default_rng(seed)``
or ``random.Random(seed)``. Passing a fixed-sequence source makes collapse
fully deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol

import numpy as np

from qviz import gates
from qviz.constants import EIGENSTATE_TOL
from qviz.operators import Outcome, measurement_distribution
from qviz.state import QubitState, probabilities as born_probabilities


class RandomSource(Protocol):
    def random(self) -> float: ...


BASES = MappingProxyType({
    "x": gates.X,
    "y": gates.Y,
    "z": gates.Z,
})
"""Measurement basis name → Pauli observable whose eigenbasis it is."""


def _basis_operator(basis: str):
    key = basis.lower()
    if key not in BASES:
        raise KeyError(f"Unknown measurement basis: '{basis}'. Available: {sorted(BASES)}")
    return BASES[key]


@dataclass(frozen=True)
class MeasurementResult:
    """
    Single-shot measurement.

    Attributes
    ----------
    outcome : int
        Index of the outcome (0 for the first listed eigenvalue).
    eigenvalue : complex
        Eigenvalue read out.
    state : QubitState
        Collapsed state.
    probabilities : tuple[float, ...]
        Probability of every outcome before collapse.
    """

    outcome: int
    eigenvalue: complex
    state: QubitState
    probabilities: tuple[float, ...]


@dataclass(frozen=True)
class MeasurementStatistics:
    """Outcome counts from repeated measurement of identically prepared states."""

    shots: int
    counts: tuple[int, int]
    probabilities: tuple[float, float]
    history: tuple[int, ...] = field(repr=False, default=())

    def frequencies(self) -> tuple[float, float]:
        if self.shots == 0:
            return (0.0, 0.0)
        return (self.counts[0] / self.shots, self.counts[1] / self.shots)


def _pick(cumulative: list[float], sample: float) -> int:
    for index, bound in enumerate(cumulative):
        if sample < bound:
            return index
    return len(cumulative) - 1


def _cumulative(probs) -> list[float]:
    total = 0.0
    bounds = []
    for p in probs:
        total += p
        bounds.append(total)
    return bounds


def collapse(
    state: QubitState,
    probabilities: tuple[float, float] | None,
    random_source: RandomSource,
) -> tuple[int, QubitState]:
    """
    Simulate one computational-basis measurement.

    Draws one sample ``u`` in [0, 1) from ``random_source``; the outcome is
    0 if ``u < p0`` and 1 otherwise.

    Parameters
    ----------
    state : QubitState
        State being measured.
    probabilities : tuple of float or None
        (p0, p1). Computed from the normalized ``state`` by the Born rule
        when None.
    random_source : RandomSource
        Object with a ``random()`` method.

    Returns
    -------
    tuple[int, QubitState]
        Outcome index and the basis state it collapsed to.
    """
    if probabilities is None:
        probabilities = born_probabilities(state.normalized())
    outcome = 0 if random_source.random() < probabilities[0] else 1
    return outcome, QubitState.basis(outcome)


def is_eigenstate_of(
    state: QubitState,
    operator,
    tolerance: float = EIGENSTATE_TOL,
) -> bool:
    """
    True when measuring ``operator`` on ``state`` is (nearly) deterministic.

    The state counts as an eigenstate when one outcome has probability
    at least ``1 - tolerance``.
    """
    outcomes = measurement_distribution(state, operator)
    return max(o.probability for o in outcomes) >= 1.0 - tolerance


def eigenstate_index(
    state: QubitState,
    operator,
    tolerance: float = EIGENSTATE_TOL,
) -> int | None:
    """Index of the outcome the state is an eigenstate of, or None."""
    for index, o in enumerate(measurement_distribution(state, operator)):
        if o.probability >= 1.0 - tolerance:
            return index
    return None


def measure(state: QubitState, operator, random_source: RandomSource) -> MeasurementResult:
    """Measure an observable: sample an eigenvalue and collapse onto its eigenspace."""
    outcomes: list[Outcome] = measurement_distribution(state, operator)
    probs = tuple(o.probability for o in outcomes)
    index = _pick(_cumulative(probs), random_source.random())
    chosen = outcomes[index]
    return MeasurementResult(index, chosen.eigenvalue, chosen.state, probs)


def basis_probabilities(state: QubitState, basis: str = "z") -> tuple[float, float]:
    """
    Outcome probabilities in the X, Y or Z basis.

    The first entry is the +1 eigenstate (|0⟩, |+⟩ or |+i⟩).
    """
    outcomes = measurement_distribution(state, _basis_operator(basis))
    return (outcomes[0].probability, outcomes[1].probability)


def sample(
    state: QubitState,
    shots: int,
    random_source: RandomSource,
    basis: str = "z",
) -> MeasurementStatistics:
    """
    Repeat a basis measurement ``shots`` times on fresh copies of ``state``.

    Each shot draws one value from ``random_source`` and uses the same
    ``u < p0`` rule as :func:`collapse`.
    """
    if shots < 0:
        raise ValueError(f"shots must be non-negative, got {shots}")
    probs = basis_probabilities(state, basis)
    history = tuple(
        0 if random_source.random() < probs[0] else 1 for _ in range(shots)
    )
    ones = sum(history)
    return MeasurementStatistics(
        shots=shots,
        counts=(shots - ones, ones),
        probabilities=probs,
        history=history,
    )


def expectation(state: QubitState, operator) -> float:
    """Expectation value ⟨ψ|O|ψ⟩ (real part)."""
    psi = state.normalized().vector
    op = np.asarray(operator, dtype=np.complex128)
    return float(np.real(np.vdot(psi, op @ psi)))
