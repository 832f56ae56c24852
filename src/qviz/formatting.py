"""
Deterministic text rendering of amplitudes and states.

Every number goes through :func:`format_fixed`, which rounds the exact
binary value half away from zero, so the same floats always produce the
same string.
"""

from __future__ import annotations

import cmath
import math
from decimal import ROUND_HALF_UP, Decimal

from qviz.complex_scalar import ComplexScalar
from qviz.constants import DISPLAY_DECIMALS, DISPLAY_TOL, PERCENT_DECIMALS
from qviz.state import BlochAngles, QubitState
from qviz.two_qubit import BellKind, TwoQubitState


def format_fixed(value: float, decimals: int = DISPLAY_DECIMALS) -> str:
    """
    Fixed-point string with round-half-away-from-zero.

    Negative zero is printed without its sign, unlike the demo pages,
    which show "-0.000".
    """
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = rounded.copy_abs()
    return format(rounded, "f")


def format_complex(magnitude: float, phase: float) -> str:
    """
    Render magnitude·e^(i·phase) for display.

    Returns the bare real part when the phase or the imaginary part is
    below ``DISPLAY_TOL``, otherwise ``"(re+imi)"`` with an explicit sign
    on the imaginary part.

    Examples
    --------
    >>> format_complex(0.707, 0.0)
    '0.707'
    >>> format_complex(0.707, math.pi / 2)
    '(0.000+0.707i)'
    """
    if abs(phase) < DISPLAY_TOL:
        return format_fixed(magnitude)

    real = magnitude * math.cos(phase)
    imag = magnitude * math.sin(phase)

    if abs(imag) < DISPLAY_TOL:
        return format_fixed(real)

    imag_str = f"+{format_fixed(imag)}i" if imag >= 0 else f"{format_fixed(imag)}i"
    return f"({format_fixed(real)}{imag_str})"


def format_scalar(value: ComplexScalar) -> str:
    return format_complex(value.magnitude, value.phase)


def format_state_equation(
    alpha: float,
    alpha_phase: float,
    beta: float,
    beta_phase: float,
) -> str:
    """``|ψ⟩ = {α}|0⟩ + {β}|1⟩`` from amplitude magnitudes and phases."""
    alpha_str = format_complex(alpha, alpha_phase)
    beta_str = format_complex(beta, beta_phase)
    return f"|ψ⟩ = {alpha_str}|0⟩ + {beta_str}|1⟩"


def format_state(state: QubitState) -> str:
    return format_state_equation(
        state.alpha.magnitude, state.alpha.phase,
        state.beta.magnitude, state.beta.phase,
    )


def format_two_qubit_equation(state: TwoQubitState) -> str:
    terms = [
        f"{format_scalar(c)}|{label}⟩"
        for c, label in zip(state.amplitudes, ("00", "01", "10", "11"))
    ]
    return "|Ψ⟩ = " + " + ".join(terms)


def format_percent(probability: float, decimals: int = PERCENT_DECIMALS) -> str:
    """0.5 -> '50.0%'"""
    return f"{format_fixed(probability * 100.0, decimals)}%"


def format_correlation(value: float) -> str:
    """Signed correlation, e.g. '+1.000' or '-0.500'."""
    text = format_fixed(value)
    return text if text.startswith("-") else f"+{text}"


def format_bloch_angles(angles: BlochAngles) -> str:
    return f"θ = {format_fixed(angles.theta)} rad, φ = {format_fixed(angles.phi)} rad"


def format_matrix(matrix) -> str:
    """One line per row, entries rendered with :func:`format_complex`."""
    rows = []
    for row in matrix:
        cells = [format_complex(abs(v), cmath.phase(v)) for v in map(complex, row)]
        rows.append("[" + ", ".join(cells) + "]")
    return "\n".join(rows)


_BELL_LABELS = {
    BellKind.PHI_PLUS: "|Φ⁺⟩ = (|00⟩ + |11⟩)/√2",
    BellKind.PHI_MINUS: "|Φ⁻⟩ = (|00⟩ − |11⟩)/√2",
    BellKind.PSI_PLUS: "|Ψ⁺⟩ = (|01⟩ + |10⟩)/√2",
    BellKind.PSI_MINUS: "|Ψ⁻⟩ = (|01⟩ − |10⟩)/√2",
}


def bell_state_label(kind: BellKind | str) -> str:
    try:
        return _BELL_LABELS[BellKind(kind)]
    except ValueError:
        raise KeyError(f"Unknown Bell state: '{kind}'") from None
