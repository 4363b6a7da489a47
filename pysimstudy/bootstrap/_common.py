"""
Common data structures for the bootstrap.

BootstrapDistribution is the parameter payload wrapped by
Result[BootstrapDistribution] and exposed through BootstrapSolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class BootstrapDistribution:
    """
    Bootstrap replicates of one sample.

    - anchor: the original sample's point estimate; every replicate
      statistic is centred here, never at the null value
    - statistics: t*_b = statistic(resample_b, anchor), shape (B,)
    - estimates: point estimate on each resample, shape (B,)
    - B: number of bootstrap replicates (== len(statistics))
    """
    anchor: float
    statistics: NDArray[np.floating[Any]]    # shape (B,)
    estimates: NDArray[np.floating[Any]]     # shape (B,)
    B: int

    def __post_init__(self):
        if len(self.statistics) != self.B or len(self.estimates) != self.B:
            raise ValueError(
                f"Bootstrap distribution must hold exactly B={self.B} replicates, "
                f"got {len(self.statistics)} statistics and "
                f"{len(self.estimates)} estimates"
            )
