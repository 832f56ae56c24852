"""
qviz: numeric kernel for interactive quantum-mechanics demos.

Features:
- Amplitude normalization with a defined zero-vector fallback
- Born-rule probabilities, Bloch angles and Bloch vectors
- Gate catalogue, unitary application, hermiticity/unitarity checks
- Two-qubit tensor products, Bell states and correlations
- Deterministic text formatting of amplitudes and state equations

Quick Start:
    >>> from qviz import normalize, probabilities, bloch_angles, format_state
    >>> psi = normalize(1.0, 1.0)
    >>> probabilities(psi)              # (0.5, 0.5) up to rounding
    >>> print(format_state(psi))        # |ψ⟩ = 0.707|0⟩ + 0.707|1⟩

Gates:
    >>> from qviz import apply, get_gate
    >>> apply(get_gate("hadamard").matrix, psi)
"""
__version__ = "1.0.0"

from .complex_scalar import ComplexScalar, wrap_phase
from .state import (
    BlochAngles,
    QubitState,
    bloch_angles,
    bloch_vector,
    from_bloch_angles,
    normalize,
    probabilities,
)
from .gates import GATE_REGISTRY, GateSpec, get_gate, get_matrix, list_gates
from .operators import (
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
from .measurement import (
    MeasurementResult,
    MeasurementStatistics,
    basis_probabilities,
    collapse,
    eigenstate_index,
    expectation,
    is_eigenstate_of,
    measure,
    sample,
)
from .two_qubit import (
    BellKind,
    TwoQubitState,
    basis_measurement_probabilities,
    bell_state,
    concurrence,
    correlation_coefficient,
    factor,
    is_separable,
    measurement_probabilities,
    reduced_probabilities,
    tensor_product,
)
from .formatting import (
    bell_state_label,
    format_complex,
    format_correlation,
    format_percent,
    format_state,
    format_state_equation,
    format_two_qubit_equation,
)

__all__ = [
    # Complex numbers
    'ComplexScalar',
    'wrap_phase',
    # Single qubit
    'QubitState',
    'BlochAngles',
    'normalize',
    'probabilities',
    'bloch_angles',
    'bloch_vector',
    'from_bloch_angles',
    # Gates and operators
    'GATE_REGISTRY',
    'GateSpec',
    'get_gate',
    'get_matrix',
    'list_gates',
    'apply',
    'apply_sequence',
    'dagger',
    'is_unitary',
    'is_hermitian',
    'is_normal',
    'commutator',
    'anticommutator',
    'commutes',
    'eigen_decomposition',
    'measurement_distribution',
    # Measurement
    'MeasurementResult',
    'MeasurementStatistics',
    'collapse',
    'is_eigenstate_of',
    'eigenstate_index',
    'measure',
    'basis_probabilities',
    'sample',
    'expectation',
    # Two qubits
    'TwoQubitState',
    'BellKind',
    'tensor_product',
    'bell_state',
    'measurement_probabilities',
    'correlation_coefficient',
    'basis_measurement_probabilities',
    'concurrence',
    'is_separable',
    'factor',
    'reduced_probabilities',
    # Formatting
    'format_complex',
    'format_state_equation',
    'format_state',
    'format_two_qubit_equation',
    'format_percent',
    'format_correlation',
    'bell_state_label',
]
