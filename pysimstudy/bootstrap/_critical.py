"""
Bootstrap critical values, standard errors and the shared decision rule.

The critical value is the inverse empirical CDF of |t*| (R's quantile
type 1): the k-th smallest |t*| with

    k = ceil(B * (1 - alpha))

No interpolation; ties resolve to the order statistic itself. A fuzz of
4 machine epsilons (relative) guards the ceiling against products such
as 100 * 0.95 landing a hair above an integer, so B = 100, alpha = 0.05
selects exactly the 95th value.
"""

from __future__ import annotations

import math

import numpy as np

from pysimstudy.bootstrap._common import BootstrapDistribution
from pysimstudy.core.exceptions import NumericalError
from pysimstudy.core.validation import check_probability


def critical_value(distribution: BootstrapDistribution, significance_level: float) -> float:
    """
    Empirical (1 - alpha) quantile of the absolute bootstrap statistics.

    Args:
        distribution: Bootstrap replicates.
        significance_level: alpha in (0, 1).

    Returns:
        The order statistic |t*|_(k), k = ceil(B (1 - alpha)).

    Raises:
        ConfigurationError: If significance_level is outside (0, 1)
    """
    alpha = check_probability(significance_level, 'significance_level')
    abs_t = np.sort(np.abs(distribution.statistics))
    B = len(abs_t)

    fuzz = 4.0 * np.finfo(np.float64).eps * B
    k = int(math.ceil(B * (1.0 - alpha) - fuzz))
    k = min(max(k, 1), B)
    return float(abs_t[k - 1])


def standard_error(distribution: BootstrapDistribution) -> float:
    """
    Bootstrap standard error: sd of the replicate estimates (ddof=1).

    Raises:
        NumericalError: If B < 2
    """
    if distribution.B < 2:
        raise NumericalError(
            f"Bootstrap standard error needs at least 2 replicates, got B={distribution.B}"
        )
    return float(np.std(distribution.estimates, ddof=1))


def reject(statistic: float, critical: float) -> bool:
    """
    Two-sided decision shared by every rule: reject H0 iff |t| > c.
    """
    return bool(abs(statistic) > critical)
