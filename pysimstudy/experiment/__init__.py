"""
pysimstudy experiments.

A sweep runs a list of SimulationConfig cells and tabulates the
rejection rates of every decision rule.

Usage:
    from pysimstudy.experiment import sweep, mean_test_configs

    report = sweep(mean_test_configs())
    print(report.summary())
"""

from pysimstudy.experiment._common import ReportCell
from pysimstudy.experiment.scenarios import (
    mean_test_configs,
    pareto_regression_configs,
    selection_configs,
)
from pysimstudy.experiment.solution import ExperimentReport
from pysimstudy.experiment.solvers import sweep

__all__ = [
    "sweep",
    "ReportCell",
    "ExperimentReport",
    "mean_test_configs",
    "pareto_regression_configs",
    "selection_configs",
]
