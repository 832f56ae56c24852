"""Tests for measurement collapse, eigenstate detection and sampling."""

import math
import random

import numpy as np
import pytest

from qviz import gates as g
from qviz.measurement import (
    BASES,
    basis_probabilities,
    collapse,
    eigenstate_index,
    expectation,
    is_eigenstate_of,
    measure,
    sample,
)
from qviz.state import QubitState, normalize


# ---------------------------------------------------------------------------
# Collapse
# ---------------------------------------------------------------------------

def test_collapse_fixed_sequence(fixed_sequence):
    source = fixed_sequence([0.1, 0.5, 0.9])
    psi = normalize(math.sqrt(0.3), math.sqrt(0.7))
    results = [collapse(psi, (0.3, 0.7), source) for _ in range(3)]
    assert [outcome for outcome, _ in results] == [0, 1, 1]
    assert results[0][1] == QubitState.ground()
    assert results[1][1] == QubitState.excited()


def test_collapse_boundary_sample_goes_to_one(fixed_sequence):
    outcome, _ = collapse(QubitState.ground(), (0.3, 0.7), fixed_sequence([0.3]))
    assert outcome == 1


def test_collapse_computes_born_probabilities(fixed_sequence):
    psi = normalize(1, 1)
    assert collapse(psi, None, fixed_sequence([0.49]))[0] == 0
    assert collapse(psi, None, fixed_sequence([0.51]))[0] == 1


def test_collapse_normalizes_before_born_rule(fixed_sequence):
    psi = QubitState.from_amplitudes(1.0, 1.0)
    outcome, collapsed = collapse(psi, None, fixed_sequence([0.9]))
    assert outcome == 1
    assert collapsed == QubitState.excited()
    assert sample(psi, 1, fixed_sequence([0.9])).history == (outcome,)


def test_collapse_accepts_stdlib_and_numpy_sources():
    psi = QubitState.ground()
    assert collapse(psi, None, random.Random(1))[0] == 0
    assert collapse(psi, None, np.random.default_rng(1))[0] == 0


# ---------------------------------------------------------------------------
# Eigenstates
# ---------------------------------------------------------------------------

def test_ground_is_eigenstate_of_pauli_z():
    assert is_eigenstate_of(QubitState.ground(), g.Z)
    assert eigenstate_index(QubitState.ground(), g.Z) == 0


def test_demo_rounded_plus_is_eigenstate_of_x():
    psi = QubitState.from_amplitudes(0.707, 0.707)
    assert is_eigenstate_of(psi, g.X)


def test_minus_is_second_eigenstate_of_x():
    psi = normalize(1, 1, 0, math.pi)
    assert eigenstate_index(psi, g.X) == 1


def test_plus_i_is_eigenstate_of_y():
    psi = normalize(1, 1, 0, math.pi / 2)
    assert is_eigenstate_of(psi, g.Y)
    assert not is_eigenstate_of(psi, g.X)


def test_superposition_is_not_eigenstate():
    psi = normalize(0.6, 0.8, 0.0, math.pi / 4)
    assert not is_eigenstate_of(psi, g.Z)
    assert eigenstate_index(psi, g.Z) is None


def test_eigenstate_tolerance():
    psi = normalize(0.995, math.sqrt(1 - 0.995 ** 2))
    assert is_eigenstate_of(psi, g.Z)
    assert not is_eigenstate_of(psi, g.Z, tolerance=1e-3)


def test_every_state_is_eigenstate_of_identity():
    assert is_eigenstate_of(normalize(0.3, 0.9, 0.1, 2.0), g.I)


# ---------------------------------------------------------------------------
# Observable measurement
# ---------------------------------------------------------------------------

def test_measure_eigenstate_is_deterministic(rng):
    psi = normalize(1, 1)
    for _ in range(20):
        result = measure(psi, g.X, rng)
        assert result.outcome == 0
        assert result.eigenvalue == pytest.approx(1.0)


def test_measure_collapses_to_eigenstate(fixed_sequence):
    psi = normalize(1, 1)
    result = measure(psi, g.Z, fixed_sequence([0.75]))
    assert result.outcome == 1
    assert result.eigenvalue == pytest.approx(-1.0)
    assert result.probabilities == pytest.approx((0.5, 0.5))
    np.testing.assert_allclose(np.abs(result.state.vector), [0, 1], atol=1e-12)


def test_measure_result_is_eigenstate_of_observable(rng):
    psi = normalize(0.3, 0.8, 0.0, 1.0)
    for spec in g.list_gates():
        result = measure(psi, spec.matrix, rng)
        assert is_eigenstate_of(result.state, spec.matrix)


# ---------------------------------------------------------------------------
# Basis measurement and sampling
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("psi,basis,expected", [
    (QubitState.ground(), "z", (1.0, 0.0)),
    (QubitState.ground(), "x", (0.5, 0.5)),
    (normalize(1, 1), "x", (1.0, 0.0)),
    (normalize(1, 1, 0, math.pi), "x", (0.0, 1.0)),
    (normalize(1, 1, 0, math.pi / 2), "y", (1.0, 0.0)),
    (normalize(1, 1, 0, -math.pi / 2), "y", (0.0, 1.0)),
])
def test_basis_probabilities(psi, basis, expected):
    assert basis_probabilities(psi, basis) == pytest.approx(expected, abs=1e-12)


def test_bases_are_read_only():
    with pytest.raises(TypeError):
        BASES["w"] = g.I


def test_basis_probabilities_unknown_basis():
    with pytest.raises(KeyError, match="basis"):
        basis_probabilities(QubitState.ground(), "w")


def test_sample_fixed_sequence(fixed_sequence):
    psi = normalize(math.sqrt(0.3), math.sqrt(0.7))
    stats = sample(psi, 3, fixed_sequence([0.1, 0.5, 0.9]))
    assert stats.history == (0, 1, 1)
    assert stats.counts == (1, 2)
    assert stats.frequencies() == pytest.approx((1 / 3, 2 / 3))


def test_sample_statistics_approach_probabilities():
    psi = normalize(0.6, 0.8)
    stats = sample(psi, 10_000, np.random.default_rng(42))
    assert stats.shots == 10_000
    assert sum(stats.counts) == 10_000
    assert stats.frequencies()[0] == pytest.approx(0.36, abs=0.03)


def test_sample_zero_shots():
    stats = sample(QubitState.ground(), 0, random.Random(0))
    assert stats.counts == (0, 0)
    assert stats.frequencies() == (0.0, 0.0)


def test_sample_rejects_negative_shots():
    with pytest.raises(ValueError):
        sample(QubitState.ground(), -1, random.Random(0))


# ---------------------------------------------------------------------------
# Expectation values
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("psi,op,expected", [
    (QubitState.ground(), g.Z, 1.0),
    (QubitState.excited(), g.Z, -1.0),
    (normalize(1, 1), g.X, 1.0),
    (normalize(1, 1), g.Z, 0.0),
])
def test_expectation(psi, op, expected):
    assert expectation(psi, op) == pytest.approx(expected, abs=1e-12)
