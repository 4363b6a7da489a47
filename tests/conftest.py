"""
pytest configuration and shared fixtures.
"""

from dataclasses import dataclass

import numpy as np
import pytest

from pysimstudy.dgp import freeze_sample


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def normal_sample(rng):
    """n = 30 draws from N(1, 2^2)."""
    return rng.normal(1.0, 2.0, size=30)


@pytest.fixture
def paired_rows():
    """Rows [y, x] with y == x == row index; pairing survives resampling iff y == x."""
    idx = np.arange(25, dtype=np.float64)
    return np.column_stack([idx, idx])


@dataclass(frozen=True)
class ConstantGenerator:
    """Every sample is constant: the t statistic is always undefined."""
    value: float = 3.0

    @property
    def label(self) -> str:
        return f"Constant({self.value:g})"

    @property
    def heavy_tailed(self) -> bool:
        return False

    def generate(self, n, rng):
        rng.random()
        return freeze_sample(np.full(n, self.value))


@dataclass(frozen=True)
class SometimesConstantGenerator:
    """Normal draws, replaced by a constant sample with probability p."""
    p: float = 0.2

    @property
    def label(self) -> str:
        return f"SometimesConstant({self.p:g})"

    @property
    def heavy_tailed(self) -> bool:
        return False

    def generate(self, n, rng):
        if rng.random() < self.p:
            return freeze_sample(np.zeros(n))
        return freeze_sample(rng.standard_normal(n))


@pytest.fixture
def constant_generator():
    return ConstantGenerator()


@pytest.fixture
def sometimes_constant_generator():
    return SometimesConstantGenerator()
