"""
CPU backend for the bootstrap.

CPUBootstrapBackend: resample, recompute the statistic centred at the
original sample's estimate, collect B replicates.
"""

from __future__ import annotations

import numpy as np

from pysimstudy.bootstrap._common import BootstrapDistribution
from pysimstudy.bootstrap.design import BootstrapDesign
from pysimstudy.core.compute.timing import Timer
from pysimstudy.core.exceptions import DegenerateSampleError
from pysimstudy.core.result import Result


class CPUBootstrapBackend:
    """
    CPU backend for bootstrap resampling.

    Algorithm:
        1. anchor = estimate on the original sample (computed once)
        2. Draw all B index vectors in one call
        3. t*_b = statistic(sample[idx_b], anchor)

    Statistics offering compute_batch are evaluated on the whole (B, n)
    stack at once; others in a loop. Both paths consume the same random
    numbers, so the replicates do not depend on which path ran.
    """

    @property
    def name(self) -> str:
        return 'cpu_bootstrap'

    def solve(self, design: BootstrapDesign) -> Result[BootstrapDistribution]:
        """
        Run the bootstrap and return Result[BootstrapDistribution].

        Raises:
            DegenerateSampleError: If the original sample or any resample
                yields an undefined statistic
        """
        timer = Timer()
        timer.start()

        sample = design.sample
        statistic = design.statistic
        B = design.B
        n = sample.shape[0]

        # The hypothesized value does not affect the estimate
        with timer.section('anchor'):
            anchor = float(statistic.compute(sample, 0.0).estimate)

        with timer.section('resample_indices'):
            indices = design.resampler.draw_indices(sample, design.rng, B)

        with timer.section('bootstrap_replicates'):
            if hasattr(statistic, 'compute_batch'):
                estimates, statistics = statistic.compute_batch(sample[indices], anchor)
                estimates = np.asarray(estimates, dtype=np.float64)
                statistics = np.asarray(statistics, dtype=np.float64)
            else:
                estimates = np.empty(B, dtype=np.float64)
                statistics = np.empty(B, dtype=np.float64)
                for b in range(B):
                    res = statistic.compute(sample[indices[b]], anchor)
                    estimates[b] = res.estimate
                    statistics[b] = res.statistic

        if not (np.all(np.isfinite(statistics)) and np.all(np.isfinite(estimates))):
            raise DegenerateSampleError(
                "Bootstrap replicates contain non-finite values",
                reason='non_finite',
            )

        timer.stop()

        params = BootstrapDistribution(
            anchor=anchor,
            statistics=statistics,
            estimates=estimates,
            B=B,
        )

        return Result(
            params=params,
            info={
                'n': n,
                'scheme': design.resampler.scheme,
                'batched': hasattr(statistic, 'compute_batch'),
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
