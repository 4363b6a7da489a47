"""
Design class for the bootstrap.

BootstrapDesign encapsulates all inputs the backend needs. Immutable,
validated at construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pysimstudy.bootstrap.resampling import Resampler
from pysimstudy.core.exceptions import ValidationError
from pysimstudy.core.protocols import StatisticFunction
from pysimstudy.core.validation import (
    check_array,
    check_finite,
    check_min_samples,
    check_sample_shape,
)


@dataclass(frozen=True)
class BootstrapDesign:
    """
    Frozen design for bootstrap resampling.

    Attributes:
        sample: Original sample, shape (n,) or (n, k). Read-only.
        statistic: StatisticFunction; called as statistic.compute(sample, h).
        B: Number of bootstrap replicates.
        resampler: Resampling scheme.
        rng: Generator the indices are drawn from. The Monte Carlo engine
            passes the replication's own stream; the public API seeds one.
    """
    sample: NDArray[np.floating[Any]]
    statistic: Any
    B: int
    resampler: Resampler
    rng: np.random.Generator = field(repr=False)

    @classmethod
    def for_bootstrap(
        cls,
        sample,
        statistic,
        B: int = 999,
        *,
        resampler: Resampler | None = None,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> BootstrapDesign:
        """
        Create a bootstrap design with validation.

        Args:
            sample: Input data, 1D or 2D array-like.
            statistic: Object implementing StatisticFunction.
            B: Number of bootstrap replicates. Must be >= 1.
            resampler: Resampling scheme (default: ordinary).
            seed: Random seed, used when rng is not given.
            rng: Existing Generator to draw from.

        Raises:
            ValidationError: If inputs are invalid.
        """
        arr = check_array(sample, 'sample')
        check_sample_shape(arr, 'sample')
        check_finite(arr, 'sample')

        if not isinstance(statistic, StatisticFunction):
            raise ValidationError(
                f"statistic must implement compute(sample, hypothesized) and "
                f"min_sample_size, got {type(statistic).__name__}"
            )
        check_min_samples(arr, statistic.min_sample_size, 'sample')

        if isinstance(B, bool) or not isinstance(B, (int, np.integer)) or B < 1:
            raise ValidationError(f"B must be a positive integer, got {B!r}")

        if resampler is None:
            resampler = Resampler()
        elif not isinstance(resampler, Resampler):
            raise ValidationError(
                f"resampler must be a Resampler, got {type(resampler).__name__}"
            )

        if rng is None:
            rng = np.random.default_rng(seed)

        if arr.flags.writeable:
            arr = arr.copy()
            arr.flags.writeable = False

        return cls(
            sample=arr,
            statistic=statistic,
            B=int(B),
            resampler=resampler,
            rng=rng,
        )
