"""
Ready-made configuration grids.

    mean_test_configs          one-sample mean test, Normal vs skewed errors
    pareto_regression_configs  OLS slope test with an infinite-variance regressor
    selection_configs          two-step selection model with bootstrap SEs

Each function returns a list of SimulationConfig ready for sweep().
"""

from __future__ import annotations

from typing import Sequence

from pysimstudy.bootstrap.resampling import Resampler
from pysimstudy.distributions.families import (
    Cauchy,
    ChiSquare,
    Distribution,
    Normal,
    Pareto,
)
from pysimstudy.dgp.mean import MeanSampleGenerator, MeanTStatistic
from pysimstudy.dgp.regression import LinearRegressionGenerator, OLSTStatistic
from pysimstudy.dgp.selection import (
    SELECTION_STRATA_COLUMN,
    SelectionGenerator,
    TwoStepStatistic,
)
from pysimstudy.montecarlo.design import SimulationConfig
from pysimstudy.montecarlo.rules import DEFAULT_RULES, DecisionRule


def mean_test_configs(
    distributions: Sequence[Distribution] = (Normal(), ChiSquare(3)),
    sample_sizes: Sequence[int] = (20,),
    *,
    significance_level: float = 0.05,
    monte_carlo_reps: int = 2000,
    bootstrap_reps: int = 199,
    seed: int = 111,
    rules=DEFAULT_RULES,
) -> list[SimulationConfig]:
    """
    Mean test of H0: mu = 0 for zero-mean distributions.

    The defaults reproduce the two reference cells: Normal(0, 1) and a
    centered ChiSquare(3), n = 20, R = 2000, B = 199, seed 111. Under the
    skewed distribution the Student-t rule drifts away from the nominal
    level while the bootstrap rule stays close.
    """
    configs = []
    for dist in distributions:
        for n in sample_sizes:
            configs.append(SimulationConfig.for_simulation(
                n,
                MeanSampleGenerator(dist),
                MeanTStatistic(),
                null_value=0.0,
                significance_level=significance_level,
                monte_carlo_reps=monte_carlo_reps,
                bootstrap_reps=bootstrap_reps,
                seed=seed,
                rules=rules,
            ))
    return configs


def pareto_regression_configs(
    sample_sizes: Sequence[int] = (5, 10, 200, 5000),
    errors: Sequence[Distribution] = (Normal(), Cauchy()),
    *,
    shape: float = 1.5,
    significance_level: float = 0.05,
    monte_carlo_reps: int = 1000,
    seed: int = 2024,
    rules=(DecisionRule.EXACT, DecisionRule.ASYMPTOTIC),
) -> list[SimulationConfig]:
    """
    OLS slope test with x ~ Pareto(shape) and the given error laws.

    With Normal errors the t statistic is exactly t(n - 2) conditional on
    x, so the size stays nominal at every n even though x has infinite
    variance. With Cauchy errors the statistic concentrates near zero as
    n grows and the asymptotic rule under-rejects. No bootstrap rule by
    default: at n = 5000 it dominates the cost.
    """
    configs = []
    for error in errors:
        generator = LinearRegressionGenerator(Pareto(shape), error)
        for n in sample_sizes:
            configs.append(SimulationConfig.for_simulation(
                n,
                generator,
                OLSTStatistic(),
                null_value=1.0,
                significance_level=significance_level,
                monte_carlo_reps=monte_carlo_reps,
                seed=seed,
                rules=rules,
            ))
    return configs


def selection_configs(
    sample_sizes: Sequence[int] = (100, 400),
    rhos: Sequence[float] = (0.0, 0.5),
    *,
    scheme: str = 'ordinary',
    significance_level: float = 0.05,
    monte_carlo_reps: int = 200,
    bootstrap_reps: int = 99,
    seed: int = 7,
    rules=(DecisionRule.EXACT, DecisionRule.BOOTSTRAP_SE),
) -> list[SimulationConfig]:
    """
    Two-step selection model; the bootstrap resamples whole [y, x, z, s] rows.

    scheme='stratified' keeps the number of selected rows fixed within
    each resample by stratifying on the selection indicator.
    """
    if scheme == 'stratified':
        resampler = Resampler('stratified', strata_column=SELECTION_STRATA_COLUMN)
    else:
        resampler = Resampler(scheme)

    configs = []
    for rho in rhos:
        generator = SelectionGenerator(rho=rho)
        for n in sample_sizes:
            configs.append(SimulationConfig.for_simulation(
                n,
                generator,
                TwoStepStatistic(),
                null_value=generator.coefficients[1],
                significance_level=significance_level,
                monte_carlo_reps=monte_carlo_reps,
                bootstrap_reps=bootstrap_reps,
                seed=seed,
                rules=rules,
                resampler=resampler,
            ))
    return configs
