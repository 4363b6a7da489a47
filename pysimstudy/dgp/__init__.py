"""
Data generating processes and test statistics.

Each design pairs a sample generator with a statistic:

    MeanSampleGenerator + MeanTStatistic          one-sample mean test
    LinearRegressionGenerator + OLSTStatistic     OLS slope t-test
    SelectionGenerator + TwoStepStatistic         two-step selection model

Generators implement SampleGenerator and statistics implement
StatisticFunction (pysimstudy.core.protocols), so user-defined designs
plug into the same engine.
"""

from pysimstudy.dgp._common import Sample, StatisticResult, freeze_sample
from pysimstudy.dgp.mean import MeanSampleGenerator, MeanTStatistic
from pysimstudy.dgp.regression import LinearRegressionGenerator, OLSTStatistic
from pysimstudy.dgp.selection import (
    SELECTION_STRATA_COLUMN,
    SelectionGenerator,
    TwoStepStatistic,
    inverse_mills_ratio,
    probit_mle,
)

__all__ = [
    "Sample",
    "StatisticResult",
    "freeze_sample",
    "MeanSampleGenerator",
    "MeanTStatistic",
    "LinearRegressionGenerator",
    "OLSTStatistic",
    "SelectionGenerator",
    "TwoStepStatistic",
    "SELECTION_STRATA_COLUMN",
    "inverse_mills_ratio",
    "probit_mle",
]
