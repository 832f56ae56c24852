"""Tolerances and display constants shared by every kernel module."""

import math

# Normalization / measurement classification
NORMALIZATION_TOL = 1e-2  # |α|² + |β|² = 1 check
EIGENSTATE_TOL = 1e-2  # one outcome probability ≥ 1 - tol
ZERO_NORM_EPS = 1e-12  # below this a vector has no direction

# Pure-math comparisons (round trips, unitarity, hermiticity)
MATH_TOL = 1e-9
COMMUTATOR_TOL = 1e-3

# Display
DISPLAY_TOL = 1e-2  # phases/imaginary parts below this print as real
DISPLAY_DECIMALS = 3
PERCENT_DECIMALS = 1

TWO_PI = 2.0 * math.pi
SQRT2_INV = 1.0 / math.sqrt(2.0)
