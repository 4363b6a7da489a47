"""
Experiment sweeps.

Public API:
    sweep(configs) -> ExperimentReport
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from pysimstudy.core.compute.timing import timed
from pysimstudy.core.exceptions import (
    ConfigurationError,
    ExperimentError,
    PySimStudyError,
)
from pysimstudy.core.random import RandomSource
from pysimstudy.experiment._common import ReportCell
from pysimstudy.experiment.solution import ExperimentReport
from pysimstudy.montecarlo.design import SimulationConfig
from pysimstudy.montecarlo.solution import MonteCarloSolution
from pysimstudy.montecarlo.solvers import simulate

# Errors that abort a configuration; the sweep reports which one failed
_UNRECOVERABLE = (PySimStudyError, np.linalg.LinAlgError, ArithmeticError, ValueError)


def _to_cell(solution: MonteCarloSolution) -> ReportCell:
    key = solution.config.key()
    return ReportCell(
        label=key['label'],
        sample_size=key['sample_size'],
        distribution=key['distribution'],
        significance_level=key['significance_level'],
        rates=solution.rejection_rates,
        n_valid=solution.n_valid,
        n_excluded=solution.n_excluded,
        estimate_sd=solution.estimate_sd,
        mean_bootstrap_se=solution.mean_bootstrap_se,
        timing=solution.timing,
    )


def sweep(configs: Sequence[SimulationConfig]) -> ExperimentReport:
    """
    Run every configuration and collect one report cell each.

    All configurations are checked before the first replication runs.
    One RandomSource is owned by the sweep and re-seeded with each
    configuration's seed, so a cell does not depend on its position in
    the sweep. Degenerate replications are excluded inside simulate()
    and never abort the sweep.

    Args:
        configs: SimulationConfig instances, in report order.

    Returns:
        ExperimentReport with cells in input order.

    Raises:
        ConfigurationError: If configs is empty, an entry is not a
            SimulationConfig or an entry fails validate() (message
            names the index)
        ExperimentError: If a configuration fails with an unrecoverable
            error (library error, singular linear algebra, arithmetic or
            value error); the original is chained as __cause__

    Example:
        >>> report = sweep(mean_test_configs(sample_sizes=(10, 20)))
        >>> print(report.summary())
    """
    configs = list(configs)
    if not configs:
        raise ConfigurationError("sweep: need at least one configuration",
                                 parameter='configs', value=configs)
    for index, cfg in enumerate(configs):
        if not isinstance(cfg, SimulationConfig):
            raise ConfigurationError(
                f"configs[{index}]: expected a SimulationConfig built with "
                f"SimulationConfig.for_simulation, got {type(cfg).__name__}",
                parameter=f'configs[{index}]',
                value=cfg,
            )
        try:
            cfg.validate()
        except ConfigurationError as e:
            raise ConfigurationError(
                f"configs[{index}]: {e}",
                parameter=f"configs[{index}].{e.parameter}",
                value=e.value,
            ) from e

    source = RandomSource()
    cells: list[ReportCell] = []

    with timed() as timer:
        for index, cfg in enumerate(configs):
            try:
                solution = simulate(cfg, source=source)
            except _UNRECOVERABLE as e:
                raise ExperimentError(
                    f"configs[{index}] ({cfg.key()['label']}, n={cfg.sample_size}) "
                    f"failed: {e}",
                    config_index=index,
                    config=cfg,
                ) from e
            cells.append(_to_cell(solution))

    return ExperimentReport(cells=tuple(cells), timing=timer.result())
