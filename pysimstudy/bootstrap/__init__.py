"""
pysimstudy bootstrap.

Nonparametric bootstrap with re-centring at the sample estimate,
bootstrap-t critical values and bootstrap standard errors.

Usage:
    from pysimstudy.bootstrap import bootstrap, Resampler

    sol = bootstrap(x, MeanTStatistic(), B=999, seed=42)
    sol.critical_value(0.05)
    sol.se

    # rows resampled within selection status
    bootstrap(rows, TwoStepStatistic(), B=199,
              resampler=Resampler("stratified", strata_column=3))
"""

from pysimstudy.bootstrap._common import BootstrapDistribution
from pysimstudy.bootstrap.design import BootstrapDesign
from pysimstudy.bootstrap.resampling import Resampler
from pysimstudy.bootstrap.solution import BootstrapSolution
from pysimstudy.bootstrap.solvers import (
    bootstrap,
    critical_value,
    reject,
    standard_error,
)

__all__ = [
    "bootstrap",
    "critical_value",
    "standard_error",
    "reject",
    "Resampler",
    "BootstrapDesign",
    "BootstrapDistribution",
    "BootstrapSolution",
]
