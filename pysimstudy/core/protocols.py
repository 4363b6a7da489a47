"""
Core protocols for pysimstudy.

These define the structural interfaces the simulation engine consumes.
We use Protocol (structural typing) rather than ABC (nominal typing) so
that any object with the right methods can be plugged in: a new data
generating process or test statistic never requires touching the engine.

Design Principles:
    - Minimal contracts: prescribe only what the engine calls
    - Runtime-checkable: SimulationConfig rejects non-conforming objects
      up front instead of failing mid-run
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

import numpy as np
from numpy.typing import NDArray

P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class SampleGenerator(Protocol):
    """
    Produces one synthetic sample per call.

    Implementations return a read-only array of length n: 1D for scalar
    observations, 2D (n, k) when each row is a joint observation.
    """

    @property
    def label(self) -> str:
        """Short description used as a report column (e.g. 'Normal(0, 1)')."""
        ...

    @property
    def heavy_tailed(self) -> bool:
        """True if any component distribution has infinite variance."""
        ...

    def generate(self, n: int, rng: np.random.Generator) -> NDArray[np.floating[Any]]:
        """Draw a sample of size n from the data generating process."""
        ...


@runtime_checkable
class StatisticFunction(Protocol):
    """
    Pure function from (sample, hypothesized value) to a StatisticResult.

    The hypothesized value is a parameter, not a constant, so the same
    function serves both the test under the null and the re-centred
    bootstrap statistic.

    Optional attribute has_exact_distribution (default True): set it to
    False when compute() never reports df, so that the exact rule is
    rejected at configuration time.
    """

    @property
    def min_sample_size(self) -> int:
        """Smallest n for which the statistic is defined."""
        ...

    def compute(self, sample: NDArray[np.floating[Any]], hypothesized: float) -> Any:
        """
        Compute the estimate and test statistic.

        Raises:
            DegenerateSampleError: If the statistic is undefined on sample
        """
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Backends are stateless: all configuration is passed via the design.
    Convention for name: '{device}_{algorithm}', e.g. 'cpu_bootstrap'.
    """

    @property
    def name(self) -> str:
        ...

    def solve(self, design: D) -> 'Result[P]':
        ...
