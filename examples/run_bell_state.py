"""Example: Bell state correlations with qviz."""
import sys
sys.path.insert(0, 'src')

from qviz import BellKind, basis_measurement_probabilities, bell_state, correlation_coefficient
from qviz.formatting import bell_state_label, format_correlation, format_percent

print("=" * 50)
print("qviz: Bell State Example")
print("=" * 50)

for kind in BellKind:
    state = bell_state(kind)
    print(f"\n{bell_state_label(kind)}")
    for basis in ("z", "x", "y"):
        probs = basis_measurement_probabilities(state, basis, basis)
        cells = "  ".join(
            f"|{label}⟩ {format_percent(p):>6}"
            for label, p in zip(("00", "01", "10", "11"), probs)
        )
        print(f"  {basis.upper()}{basis.upper()}: {cells}  "
              f"corr {format_correlation(correlation_coefficient(probs))}")

print("\nExpected: |Φ⁺⟩ agrees in Z and X, disagrees in Y")
