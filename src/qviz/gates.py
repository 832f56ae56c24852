"""
Single-qubit gate catalogue.

Every gate is a 2x2 complex matrix (numpy array). The named presets the
demo pages offer are collected in ``GATE_REGISTRY`` together with the
properties each page declares for them; those declarations are catalogue
data only, the kernel always computes unitarity/hermiticity itself
(see :mod:`qviz.operators`).

Gate categories:
    - Presets: Hadamard, Pauli-X/Y/Z, Phase (S), T
    - Extra fixed: I
    - Rotations: Rx, Ry, Rz, P (phase)
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

import numpy as np
from numpy import ndarray

from qviz.constants import SQRT2_INV

# Type alias
Matrix = ndarray


def _frozen(rows) -> Matrix:
    m = np.array(rows, dtype=np.complex128)
    m.setflags(write=False)
    return m


# ---------------------------------------------------------------------------
# Fixed gates
# ---------------------------------------------------------------------------

I = _frozen([[1, 0], [0, 1]])
"""Identity gate."""

H = _frozen([[SQRT2_INV, SQRT2_INV], [SQRT2_INV, -SQRT2_INV]])
"""Hadamard gate."""

X = _frozen([[0, 1], [1, 0]])
"""Pauli-X (NOT) gate."""

Y = _frozen([[0, -1j], [1j, 0]])
"""Pauli-Y gate."""

Z = _frozen([[1, 0], [0, -1]])
"""Pauli-Z gate."""

S = _frozen([[1, 0], [0, 1j]])
"""S (phase) gate: sqrt(Z)."""

T = _frozen([[1, 0], [0, np.exp(1j * np.pi / 4)]])
"""T gate: sqrt(S)."""

# ---------------------------------------------------------------------------
# Parameterized gates
# ---------------------------------------------------------------------------

def Rx(theta: float) -> Matrix:
    """Rotation around X-axis by angle theta."""
    c = np.cos(theta / 2)
    s = np.sin(theta / 2)
    return np.array([[c, -1j * s], [-1j * s, c]], dtype=np.complex128)


def Ry(theta: float) -> Matrix:
    """Rotation around Y-axis by angle theta."""
    c = np.cos(theta / 2)
    s = np.sin(theta / 2)
    return np.array([[c, -s], [s, c]], dtype=np.complex128)


def Rz(phi: float) -> Matrix:
    """Rotation around Z-axis by angle phi."""
    return np.array(
        [[np.exp(-1j * phi / 2), 0], [0, np.exp(1j * phi / 2)]],
        dtype=np.complex128,
    )


def P(lam: float) -> Matrix:
    """Phase gate: diagonal with entries [1, exp(i*lam)]."""
    return np.array([[1, 0], [0, np.exp(1j * lam)]], dtype=np.complex128)


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GateSpec:
    """
    One catalogue entry.

    ``declared_unitary`` / ``declared_hermitian`` are what the demos print
    next to the gate; tests check them against the computed properties.
    """

    key: str
    name: str
    matrix: Matrix
    description: str
    declared_unitary: bool = True
    declared_hermitian: bool = False


_PRESETS = (
    GateSpec("hadamard", "Hadamard (H)", H,
             "Creates superposition from basis states",
             declared_hermitian=True),
    GateSpec("pauli-x", "Pauli-X (NOT)", X,
             "Bit flip: |0⟩ ↔ |1⟩",
             declared_hermitian=True),
    GateSpec("pauli-y", "Pauli-Y", Y,
             "Bit flip with phase: |0⟩ → i|1⟩, |1⟩ → -i|0⟩",
             declared_hermitian=True),
    GateSpec("pauli-z", "Pauli-Z", Z,
             "Phase flip: |1⟩ → -|1⟩",
             declared_hermitian=True),
    GateSpec("phase", "Phase (S)", S,
             "π/2 phase shift on |1⟩"),
    GateSpec("t-gate", "T Gate", T,
             "π/4 phase shift on |1⟩"),
)

PRESET_KEYS: tuple[str, ...] = tuple(spec.key for spec in _PRESETS)

_ALIASES = {
    "h": "hadamard",
    "x": "pauli-x",
    "y": "pauli-y",
    "z": "pauli-z",
    "s": "phase",
    "t": "t-gate",
}

_IDENTITY = GateSpec("i", "Identity (I)", I, "Leaves every state unchanged",
                     declared_hermitian=True)

_BY_KEY = {spec.key: spec for spec in _PRESETS}

GATE_REGISTRY: Mapping[str, GateSpec] = MappingProxyType({
    **_BY_KEY,
    **{alias: _BY_KEY[key] for alias, key in _ALIASES.items()},
    "i": _IDENTITY,
})
"""Gate name → catalogue entry. Read-only."""

PARAMETRIC_GATES: Mapping[str, Callable[[float], Matrix]] = MappingProxyType({
    "rx": Rx,
    "ry": Ry,
    "rz": Rz,
    "p": P,
})


def get_gate(name: str) -> GateSpec:
    """
    Look up a fixed gate by catalogue key or alias (case-insensitive).

    Raises
    ------
    KeyError
        If the gate name is not found.
    """
    key = name.lower()
    if key not in GATE_REGISTRY:
        raise KeyError(f"Unknown gate: '{name}'. Available: {sorted(GATE_REGISTRY)}")
    return GATE_REGISTRY[key]


def get_matrix(name: str, params: tuple[float, ...] = ()) -> Matrix:
    """
    Look up a gate matrix by name, with optional parameters.

    Parameters
    ----------
    name : str
        Gate name (case-insensitive).
    params : tuple of float
        Parameters for parameterized gates.

    Returns
    -------
    numpy.ndarray
        2x2 matrix for the gate.

    Raises
    ------
    KeyError
        If gate name is not found.
    ValueError
        If wrong number of parameters provided.
    """
    key = name.lower()
    if key in PARAMETRIC_GATES:
        if len(params) != 1:
            raise ValueError(f"Gate '{name}' requires 1 parameter, got {len(params)}")
        return PARAMETRIC_GATES[key](*params)
    if key in GATE_REGISTRY:
        if params:
            raise ValueError(f"Gate '{name}' takes no parameters, got {len(params)}")
        return GATE_REGISTRY[key].matrix
    raise KeyError(
        f"Unknown gate: '{name}'. "
        f"Available: {sorted(set(GATE_REGISTRY) | set(PARAMETRIC_GATES))}"
    )


def list_gates() -> list[GateSpec]:
    """Preset gates in the order the demos list them."""
    return list(_PRESETS)
