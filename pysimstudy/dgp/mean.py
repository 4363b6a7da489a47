"""
Mean-test design: i.i.d. draws and the one-sample t statistic.

    t = sqrt(n) * (mean(Y) - h) / sd(Y)

with sd the ddof=1 sample standard deviation and exact reference
distribution Student-t with n - 1 degrees of freedom.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pysimstudy.core.exceptions import DegenerateSampleError, ValidationError
from pysimstudy.distributions.families import Distribution
from pysimstudy.dgp._common import StatisticResult, freeze_sample


@dataclass(frozen=True)
class MeanSampleGenerator:
    """i.i.d. sample of size n from a single distribution."""
    distribution: Distribution

    def __post_init__(self):
        if not isinstance(self.distribution, Distribution):
            raise ValidationError(
                f"distribution must be a Distribution, got "
                f"{type(self.distribution).__name__}"
            )

    @property
    def label(self) -> str:
        return self.distribution.label

    @property
    def heavy_tailed(self) -> bool:
        return not self.distribution.has_finite_variance

    def generate(self, n: int, rng: np.random.Generator) -> NDArray[np.floating[Any]]:
        return freeze_sample(self.distribution.sample(n, rng))


class MeanTStatistic:
    """
    One-sample t statistic for H0: E[Y] = h.

    compute_batch evaluates a stack of B resamples at once; the
    bootstrap backend uses it for the inner loop.
    """

    @property
    def min_sample_size(self) -> int:
        return 2

    def compute(self, sample: NDArray[np.floating[Any]], hypothesized: float) -> StatisticResult:
        y = np.asarray(sample)
        n = y.shape[0]
        with np.errstate(over='ignore', invalid='ignore'):
            mean = float(np.mean(y))
            sd = float(np.std(y, ddof=1))

        if not np.isfinite(sd):
            raise DegenerateSampleError(
                f"Sample standard deviation overflowed to {sd}",
                reason='non_finite',
            )
        if sd == 0.0:
            raise DegenerateSampleError(
                "Sample standard deviation is 0; t statistic undefined",
                reason='zero_variance',
            )

        se = sd / np.sqrt(n)
        return StatisticResult(
            estimate=mean,
            statistic=(mean - hypothesized) / se,
            std_error=se,
            df=float(n - 1),
        )

    def compute_batch(
        self,
        samples: NDArray[np.floating[Any]],
        hypothesized: float,
    ) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
        """
        Estimates and statistics for samples of shape (B, n).

        Raises:
            DegenerateSampleError: If any row has zero or non-finite variance
        """
        n = samples.shape[1]
        with np.errstate(over='ignore', invalid='ignore'):
            means = samples.mean(axis=1)
            sds = samples.std(axis=1, ddof=1)

        if not np.all(np.isfinite(sds)):
            raise DegenerateSampleError(
                f"{int(np.sum(~np.isfinite(sds)))} resample(s) have non-finite variance",
                reason='non_finite',
            )
        if np.any(sds == 0.0):
            raise DegenerateSampleError(
                f"{int(np.sum(sds == 0.0))} resample(s) have zero variance",
                reason='zero_variance',
            )

        stats = np.sqrt(n) * (means - hypothesized) / sds
        return means, stats
