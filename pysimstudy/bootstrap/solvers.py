"""
Solver dispatch for the bootstrap.

Public API:
    bootstrap(sample, statistic, B, ...) -> BootstrapSolution
    critical_value(distribution, significance_level) -> float
    standard_error(distribution) -> float
    reject(statistic, critical) -> bool
"""

from __future__ import annotations

from pysimstudy.bootstrap._critical import critical_value, reject, standard_error
from pysimstudy.bootstrap.backends.cpu import CPUBootstrapBackend
from pysimstudy.bootstrap.design import BootstrapDesign
from pysimstudy.bootstrap.resampling import Resampler
from pysimstudy.bootstrap.solution import BootstrapSolution
from pysimstudy.core.exceptions import ValidationError

__all__ = [
    "bootstrap",
    "critical_value",
    "standard_error",
    "reject",
]


def _get_backend(backend: str = 'cpu'):
    if backend in ('cpu', 'auto'):
        return CPUBootstrapBackend()
    raise ValidationError(f"Unknown backend: {backend!r}. Use 'cpu'.")


def bootstrap(
    sample,
    statistic,
    B: int = 999,
    *,
    resampler: Resampler | None = None,
    seed: int | None = None,
    backend: str = 'cpu',
) -> BootstrapSolution:
    """
    Nonparametric bootstrap of a studentised statistic.

    Every replicate is centred at the original sample's estimate:

        anchor = statistic(sample).estimate
        t*_b   = statistic(resample_b, hypothesized=anchor).statistic

    Args:
        sample: 1D observations or 2D rows (paired columns stay together).
        statistic: Object implementing StatisticFunction, e.g. MeanTStatistic().
        B: Number of bootstrap replicates.
        resampler: Resampling scheme (default ordinary i.i.d.).
        seed: Random seed for reproducibility.
        backend: 'cpu' (default).

    Returns:
        BootstrapSolution with the replicate distribution, bias, SE and
        critical_value(alpha).

    Raises:
        ValidationError: If inputs are invalid
        DegenerateSampleError: If the statistic is undefined on the sample
            or on a resample

    Example:
        >>> from pysimstudy.bootstrap import bootstrap
        >>> from pysimstudy.dgp import MeanTStatistic
        >>> sol = bootstrap(x, MeanTStatistic(), B=999, seed=42)
        >>> sol.critical_value(0.05)
    """
    design = BootstrapDesign.for_bootstrap(
        sample, statistic, B, resampler=resampler, seed=seed,
    )
    result = _get_backend(backend).solve(design)
    return BootstrapSolution(_result=result, _design=design)
