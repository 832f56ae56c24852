"""
Command-line interface for qviz.

Usage:
    qviz state --alpha 0.6 --beta 0.8 --beta-phase 1.57
    qviz gate hadamard --alpha 1 --beta 0
    qviz measure --alpha 0.707 --beta 0.707 --basis x --shots 100 --seed 7
    qviz bell phi-plus --basis-a x --basis-b x
    qviz gates
"""
import argparse
import logging
import sys

import numpy as np

logger = logging.getLogger(__name__)


def _bar(probability: float, width: int = 40) -> str:
    return '█' * int(probability * width)


def _state_from_args(args):
    from ..state import normalize
    return normalize(args.alpha, args.beta, args.alpha_phase, args.beta_phase)


def _print_probabilities(labels, probs):
    from ..formatting import format_percent
    for label, p in zip(labels, probs):
        print(f"  |{label}⟩: {format_percent(p):>6} {_bar(p)}")


def cmd_state(args):
    """Normalize slider amplitudes and show the derived quantities."""
    from ..formatting import format_bloch_angles, format_fixed, format_state
    from ..state import bloch_angles, bloch_vector, probabilities

    psi = _state_from_args(args)
    p0, p1 = probabilities(psi)
    x, y, z = bloch_vector(psi)

    print(format_state(psi))
    print(f"Normalization: |α|² + |β|² = {format_fixed(p0 + p1)}")
    print("\nProbabilities:")
    _print_probabilities(("0", "1"), (p0, p1))
    print(f"\nBloch angles: {format_bloch_angles(bloch_angles(psi))}")
    print(f"Bloch vector: x={format_fixed(x)}, y={format_fixed(y)}, z={format_fixed(z)}")


def cmd_gate(args):
    """Apply a catalogue gate to a state."""
    from ..formatting import format_matrix, format_state
    from ..gates import get_gate
    from ..operators import apply, is_hermitian, is_unitary
    from ..state import probabilities

    spec = get_gate(args.name)
    psi_in = _state_from_args(args)
    psi_out = apply(spec.matrix, psi_in)

    print(f"Gate: {spec.name}")
    print(f"  {spec.description}")
    print(format_matrix(spec.matrix))
    print(f"  unitary={is_unitary(spec.matrix)} hermitian={is_hermitian(spec.matrix)}")
    print(f"\nInput:  {format_state(psi_in)}")
    _print_probabilities(("0", "1"), probabilities(psi_in))
    print(f"\nOutput: {format_state(psi_out)}")
    _print_probabilities(("0", "1"), probabilities(psi_out))


def cmd_measure(args):
    """Repeatedly measure a state in the X, Y or Z basis."""
    from ..formatting import format_percent, format_state
    from ..measurement import sample

    psi = _state_from_args(args)
    rng = np.random.default_rng(args.seed)
    stats = sample(psi, args.shots, rng, basis=args.basis)
    freq0, freq1 = stats.frequencies()

    logger.debug("measured %d shots in %s basis", stats.shots, args.basis)
    print(format_state(psi))
    print(f"\nMeasurement Statistics ({stats.shots} measurements, {args.basis.upper()} basis):")
    print(f"  Outcome 0: {stats.counts[0]} times ({format_percent(freq0)})")
    print(f"  Outcome 1: {stats.counts[1]} times ({format_percent(freq1)})")
    print("\nTheoretical Probabilities:")
    _print_probabilities(("0", "1"), stats.probabilities)


def cmd_bell(args):
    """Show a Bell state's joint measurement statistics."""
    from ..formatting import bell_state_label, format_correlation, format_fixed
    from ..two_qubit import (
        basis_measurement_probabilities,
        bell_state,
        concurrence,
        correlation_coefficient,
    )

    state = bell_state(args.kind)
    probs = basis_measurement_probabilities(state, args.basis_a, args.basis_b)

    print(bell_state_label(args.kind))
    print(f"\nBases: A={args.basis_a.upper()}, B={args.basis_b.upper()}")
    _print_probabilities(("00", "01", "10", "11"), probs)
    print(f"\nCorrelation: {format_correlation(correlation_coefficient(probs))}")
    print(f"Concurrence: {format_fixed(concurrence(state))}")


def cmd_gates(args):
    """List the gate catalogue."""
    from ..gates import list_gates
    from ..operators import is_hermitian, is_unitary

    for spec in list_gates():
        print(f"{spec.key:10s} {spec.name:16s} "
              f"unitary={is_unitary(spec.matrix)!s:5s} hermitian={is_hermitian(spec.matrix)!s:5s} "
              f"{spec.description}")


def cmd_info(args):
    """Show qviz information."""
    from .. import __version__

    print(f"""
qviz v{__version__}
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

Numeric kernel for interactive quantum-mechanics demos.

Usage:
  qviz state --alpha 0.6 --beta 0.8
  qviz gate hadamard --alpha 1 --beta 0
  qviz measure --alpha 0.707 --beta 0.707 --basis x --shots 100
  qviz bell psi-minus --basis-a x --basis-b x
  qviz gates
""")


def _add_state_args(parser):
    parser.add_argument('--alpha', type=float, default=1.0, help='Amplitude magnitude of |0⟩')
    parser.add_argument('--beta', type=float, default=0.0, help='Amplitude magnitude of |1⟩')
    parser.add_argument('--alpha-phase', type=float, default=0.0, help='Phase of α (radians)')
    parser.add_argument('--beta-phase', type=float, default=0.0, help='Phase of β (radians)')


def build_parser():
    parser = argparse.ArgumentParser(
        prog='qviz',
        description='Quantum state kernel for teaching demos'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    state_parser = subparsers.add_parser('state', help='Inspect a single-qubit state')
    _add_state_args(state_parser)
    state_parser.set_defaults(func=cmd_state)

    gate_parser = subparsers.add_parser('gate', help='Apply a gate to a state')
    gate_parser.add_argument('name', help='Gate name, e.g. hadamard, pauli-x, t-gate')
    _add_state_args(gate_parser)
    gate_parser.set_defaults(func=cmd_gate)

    measure_parser = subparsers.add_parser('measure', help='Simulate repeated measurement')
    _add_state_args(measure_parser)
    measure_parser.add_argument('--basis', choices=['x', 'y', 'z'], default='z', help='Measurement basis')
    measure_parser.add_argument('--shots', type=int, default=100, help='Number of measurements')
    measure_parser.add_argument('--seed', type=int, help='Random seed')
    measure_parser.set_defaults(func=cmd_measure)

    bell_parser = subparsers.add_parser('bell', help='Bell state correlations')
    bell_parser.add_argument('kind', nargs='?', default='phi-plus',
                             choices=['phi-plus', 'phi-minus', 'psi-plus', 'psi-minus'])
    bell_parser.add_argument('--basis-a', choices=['x', 'y', 'z'], default='z')
    bell_parser.add_argument('--basis-b', choices=['x', 'y', 'z'], default='z')
    bell_parser.set_defaults(func=cmd_bell)

    gates_parser = subparsers.add_parser('gates', help='List the gate catalogue')
    gates_parser.set_defaults(func=cmd_gates)

    info_parser = subparsers.add_parser('info', help='Show qviz info')
    info_parser.set_defaults(func=cmd_info)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except (KeyError, ValueError) as exc:
        message = exc.args[0] if exc.args else exc
        print(f"error: {message}", file=sys.stderr)
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
