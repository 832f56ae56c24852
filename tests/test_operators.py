"""Tests for operator application and algebra."""

import math

import numpy as np
import pytest

from qviz import gates as g
from qviz.operators import (
    anticommutator,
    apply,
    apply_sequence,
    commutator,
    commutes,
    dagger,
    eigen_decomposition,
    is_hermitian,
    is_normal,
    is_unitary,
    measurement_distribution,
)
from qviz.state import QubitState, normalize, probabilities

PRESETS = g.list_gates()


# ---------------------------------------------------------------------------
# Gate application
# ---------------------------------------------------------------------------

def test_x_flips_ground_to_excited():
    out = apply(g.X, QubitState.ground())
    np.testing.assert_allclose(out.vector, [0, 1], atol=1e-12)


def test_hadamard_superposition():
    out = apply(g.H, QubitState.ground())
    np.testing.assert_allclose(out.vector, np.array([1, 1]) / np.sqrt(2), atol=1e-12)
    assert probabilities(out) == pytest.approx((0.5, 0.5))


def test_z_on_plus_gives_minus():
    """Z|+⟩ = |−⟩"""
    out = apply(g.Z, normalize(1, 1))
    np.testing.assert_allclose(out.vector, np.array([1, -1]) / np.sqrt(2), atol=1e-12)


def test_s_on_plus_gives_plus_i():
    out = apply(g.S, normalize(1, 1))
    assert out.relative_phase == pytest.approx(math.pi / 2)


def test_y_on_ground():
    """Y|0⟩ = i|1⟩"""
    out = apply(g.Y, QubitState.ground())
    np.testing.assert_allclose(out.vector, [0, 1j], atol=1e-12)


def test_phase_gate_leaves_probabilities_unchanged():
    psi = normalize(0.6, 0.8, 0.0, 0.3)
    for key in ("pauli-z", "phase", "t-gate"):
        out = apply(g.get_gate(key).matrix, psi)
        assert probabilities(out) == pytest.approx(probabilities(psi), abs=1e-12)


@pytest.mark.parametrize("spec", PRESETS, ids=lambda s: s.key)
def test_unitary_preserves_norm(spec, rng):
    for _ in range(100):
        a, b = rng.uniform(0, 1, size=2)
        pa, pb = rng.uniform(-np.pi, np.pi, size=2)
        out = apply(spec.matrix, normalize(a, b, pa, pb))
        p0, p1 = probabilities(out)
        assert p0 + p1 == pytest.approx(1.0, abs=1e-6)


def test_apply_does_not_renormalize_non_unitary():
    out = apply(2 * np.eye(2), QubitState.ground())
    assert out.norm_squared == pytest.approx(4.0)


def test_apply_sequence_order():
    # H then Z then H == X
    out = apply_sequence([g.H, g.Z, g.H], QubitState.ground())
    np.testing.assert_allclose(np.abs(out.vector), [0, 1], atol=1e-12)


def test_apply_rejects_wrong_shape():
    with pytest.raises(ValueError, match="2x2"):
        apply(np.eye(4), QubitState.ground())


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("key,unitary,hermitian", [
    ("hadamard", True, True),
    ("pauli-x", True, True),
    ("pauli-y", True, True),
    ("pauli-z", True, True),
    ("phase", True, False),
    ("t-gate", True, False),
])
def test_classification_matches_catalogue(key, unitary, hermitian):
    m = g.get_gate(key).matrix
    assert is_unitary(m) is unitary
    assert is_hermitian(m) is hermitian


def test_demo_rounded_hadamard_is_unitary_only_loosely():
    rounded = np.array([[0.707, 0.707], [0.707, -0.707]])
    assert not is_unitary(rounded)
    assert is_unitary(rounded, tolerance=1e-2)


def test_non_unitary_non_hermitian_matrix():
    m = np.array([[1, 1], [0, 1]])
    assert not is_unitary(m)
    assert not is_hermitian(m)
    assert not is_normal(m)


def test_hermitian_non_unitary_matrix():
    m = np.array([[2, 1j], [-1j, 3]])
    assert is_hermitian(m)
    assert not is_unitary(m)


def test_dagger():
    np.testing.assert_allclose(dagger(g.S), np.array([[1, 0], [0, -1j]]), atol=1e-12)


def test_is_unitary_rejects_non_square():
    with pytest.raises(ValueError, match="square"):
        is_unitary(np.ones((2, 3)))


# ---------------------------------------------------------------------------
# Commutators
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("a,b,c", [
    (g.X, g.Y, g.Z),
    (g.Y, g.Z, g.X),
    (g.Z, g.X, g.Y),
])
def test_pauli_commutators(a, b, c):
    """[σa, σb] = 2iσc for cyclic (a, b, c)."""
    np.testing.assert_allclose(commutator(a, b), 2j * c, atol=1e-12)
    np.testing.assert_allclose(commutator(b, a), -2j * c, atol=1e-12)
    assert not commutes(a, b)


def test_pauli_anticommutator_vanishes():
    np.testing.assert_allclose(anticommutator(g.X, g.Z), np.zeros((2, 2)), atol=1e-12)


def test_operator_commutes_with_itself():
    for m in (g.X, g.H, g.T):
        assert commutes(m, m)


def test_diagonal_gates_commute():
    assert commutes(g.Z, g.S)
    assert commutes(g.S, g.T)


# ---------------------------------------------------------------------------
# Eigen decomposition
# ---------------------------------------------------------------------------

def test_pauli_z_eigenvalues_ordered_plus_first():
    values, vectors = eigen_decomposition(g.Z)
    np.testing.assert_allclose(values, [1, -1], atol=1e-12)
    np.testing.assert_allclose(np.abs(vectors[:, 0]), [1, 0], atol=1e-12)


def test_phase_gate_eigenvalues():
    values, _ = eigen_decomposition(g.S)
    np.testing.assert_allclose(values, [1, 1j], atol=1e-12)


def test_scaled_normal_operator_is_normal():
    assert is_normal(1e6 * g.Ry(0.3))
    assert not is_normal(1e6 * np.array([[1, 1], [0, 1]]))


def test_distribution_for_large_normal_operator():
    outcomes = measurement_distribution(normalize(0.6, 0.8), 1e6 * g.Ry(0.3))
    assert len(outcomes) == 2
    assert sum(o.probability for o in outcomes) == pytest.approx(1.0, abs=1e-9)


def test_eigen_decomposition_rejects_non_normal():
    with pytest.raises(ValueError, match="not normal"):
        eigen_decomposition(np.array([[1, 1], [0, 1]]))


@pytest.mark.parametrize("spec", PRESETS, ids=lambda s: s.key)
def test_eigenvectors_are_orthonormal(spec):
    _, vectors = eigen_decomposition(spec.matrix)
    np.testing.assert_allclose(vectors.conj().T @ vectors, np.eye(2), atol=1e-9)


def test_distribution_on_plus_state_for_x():
    outcomes = measurement_distribution(normalize(1, 1), g.X)
    assert [o.eigenvalue for o in outcomes] == pytest.approx([1, -1])
    assert outcomes[0].probability == pytest.approx(1.0)
    assert outcomes[1].probability == pytest.approx(0.0, abs=1e-12)


def test_distribution_merges_degenerate_eigenvalues():
    outcomes = measurement_distribution(normalize(0.6, 0.8), g.I)
    assert len(outcomes) == 1
    assert outcomes[0].probability == pytest.approx(1.0)
    assert outcomes[0].state.is_close(normalize(0.6, 0.8), 1e-9)


def test_distribution_probabilities_sum_to_one(rng):
    for _ in range(20):
        a, b = rng.uniform(0, 1, size=2)
        psi = normalize(a, b, 0.0, rng.uniform(-np.pi, np.pi))
        for spec in PRESETS:
            total = sum(o.probability for o in measurement_distribution(psi, spec.matrix))
            assert total == pytest.approx(1.0, abs=1e-9)
