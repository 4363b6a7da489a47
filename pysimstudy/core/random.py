"""
Seeded random source shared by every sampling call.

A RandomSource owns one numpy Generator. It replaces a process-wide
random state: each experiment creates one instance and re-seeds it per
configuration, and each Monte Carlo replication draws from its own
substream.

Substreams are keyed by (seed, index) through numpy's SeedSequence
spawn keys. They depend only on the seed and the replication index,
never on how much of the parent stream has been consumed, so
replication i produces identical draws whether replications run in
order, in chunks, or on separate workers.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pysimstudy.core.validation import check_nonnegative_int


class RandomSource:
    """
    Deterministic pseudo-random stream.

    Usage:
        source = RandomSource(111)
        u = source.draw_uniform(5)

        source.seed(111)             # reset: the same five values again
        rep = source.substream(17)   # independent stream for replication 17
        x = rep.generator.standard_t(3, size=20)
    """

    def __init__(self, seed: int = 0):
        self._seed: int = 0
        self._generator: np.random.Generator
        self.seed(seed)

    def seed(self, value: int) -> None:
        """
        Reset to the deterministic stream for value.

        Raises:
            ConfigurationError: If value is not a non-negative integer
        """
        value = check_nonnegative_int(value, 'seed')
        self._seed = value
        self._generator = np.random.Generator(
            np.random.PCG64(np.random.SeedSequence(value))
        )

    @property
    def current_seed(self) -> int:
        return self._seed

    @property
    def generator(self) -> np.random.Generator:
        """Underlying numpy Generator, handed to samplers."""
        return self._generator

    def substream(self, index: int) -> RandomSource:
        """
        Independent child stream for unit of work `index`.

        The child is a function of (seed, index) only.
        """
        index = check_nonnegative_int(index, 'index')
        child = RandomSource.__new__(RandomSource)
        child._seed = self._seed
        child._generator = np.random.Generator(
            np.random.PCG64(
                np.random.SeedSequence(self._seed, spawn_key=(index,))
            )
        )
        return child

    def draw_uniform(self, count: int) -> NDArray[np.floating[Any]]:
        """count draws from U[0, 1)."""
        return self._generator.random(count)

    def draw_normal(self, count: int) -> NDArray[np.floating[Any]]:
        """count draws from N(0, 1)."""
        return self._generator.standard_normal(count)

    def draw_integers(self, high: int, size) -> NDArray[np.integer[Any]]:
        """Integers uniform on {0, ..., high - 1}."""
        return self._generator.integers(0, high, size=size)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self._seed})"
