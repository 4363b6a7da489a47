"""
Common data structures for data generating processes and statistics.

StatisticResult is what every statistic returns; freeze_sample marks
generated arrays read-only so that no downstream stage can mutate a
sample it consumes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pysimstudy.core.exceptions import DegenerateSampleError

# Read-only float64 array: (n,) for scalar designs, (n, k) for row designs
Sample = NDArray[np.float64]


@dataclass(frozen=True)
class StatisticResult:
    """
    Output of a statistic on one sample.

    - estimate: point estimate of the parameter of interest
    - statistic: (estimate - hypothesized) / std_error
    - std_error: conventional (analytic) standard error
    - df: degrees of freedom of the exact reference distribution,
      or None if the statistic has none
    """
    estimate: float
    statistic: float
    std_error: float
    df: float | None = None

    def is_finite(self) -> bool:
        return bool(
            np.isfinite(self.estimate)
            and np.isfinite(self.statistic)
            and np.isfinite(self.std_error)
        )


def freeze_sample(arr: NDArray[np.floating[Any]]) -> Sample:
    """
    Make a freshly generated sample immutable.

    Raises:
        DegenerateSampleError: If any draw is NaN or Inf
    """
    arr = np.ascontiguousarray(arr, dtype=np.float64)
    if not np.all(np.isfinite(arr)):
        raise DegenerateSampleError(
            "Generated sample contains non-finite values",
            reason='non_finite',
        )
    arr.flags.writeable = False
    return arr
