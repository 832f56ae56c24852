"""Shared fixtures for the qviz test suite."""

import numpy as np
import pytest


class FixedSequence:
    """Random source replaying a fixed list of samples."""

    def __init__(self, values):
        self._values = list(values)
        self._index = 0

    def random(self) -> float:
        value = self._values[self._index]
        self._index += 1
        return value


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def fixed_sequence():
    return FixedSequence
