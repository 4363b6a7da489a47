"""
Solver dispatch for Monte Carlo simulation.

Public API:
    simulate(config, ...) -> MonteCarloSolution
    combine(solutions) -> MonteCarloSolution
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from pysimstudy.core.exceptions import ValidationError
from pysimstudy.core.random import RandomSource
from pysimstudy.core.result import Result
from pysimstudy.montecarlo._common import MonteCarloParams
from pysimstudy.montecarlo.backends.cpu import CPUMonteCarloBackend
from pysimstudy.montecarlo.design import SimulationConfig
from pysimstudy.montecarlo.solution import MonteCarloSolution


def _get_backend(backend: str = 'cpu'):
    if backend in ('cpu', 'auto'):
        return CPUMonteCarloBackend()
    raise ValidationError(f"Unknown backend: {backend!r}. Use 'cpu'.")


def simulate(
    config: SimulationConfig,
    *,
    replications: Iterable[int] | None = None,
    source: RandomSource | None = None,
    backend: str = 'cpu',
) -> MonteCarloSolution:
    """
    Run the Monte Carlo loop for one configuration.

    Two runs with the same configuration produce bit-identical decision
    tables. A subset of replications (e.g. one chunk handed to a worker)
    reproduces exactly the corresponding rows of the full run; merge
    chunks with combine().

    Args:
        config: SimulationConfig built with SimulationConfig.for_simulation.
        replications: Replication indices to run (default: all).
        source: RandomSource to derive substreams from. It is re-seeded
            with config.seed before use.
        backend: 'cpu' (default).

    Returns:
        MonteCarloSolution with rejection rates and exclusion counts.

    Raises:
        ValidationError: If config is not a SimulationConfig
        ConfigurationError: If config fails SimulationConfig.validate()
        NumericalError: If every replication is degenerate

    Example:
        >>> cfg = SimulationConfig.for_simulation(
        ...     20, MeanSampleGenerator(Normal()), MeanTStatistic(),
        ...     monte_carlo_reps=2000, bootstrap_reps=199, seed=111)
        >>> simulate(cfg).rejection_rates
    """
    if not isinstance(config, SimulationConfig):
        raise ValidationError(
            f"config must be a SimulationConfig, got {type(config).__name__}"
        )
    config.validate()

    if source is None:
        source = RandomSource(config.seed)
    else:
        source.seed(config.seed)

    if replications is not None:
        replications = list(replications)
        bad = [i for i in replications if not 0 <= i < config.monte_carlo_reps]
        if bad:
            raise ValidationError(
                f"replications: indices {bad[:5]} outside "
                f"[0, {config.monte_carlo_reps})"
            )

    result = _get_backend(backend).solve(
        config, replications=replications, source=source,
    )
    return MonteCarloSolution(_result=result, _design=config)


def combine(solutions: Sequence[MonteCarloSolution]) -> MonteCarloSolution:
    """
    Merge chunked solutions of one configuration, ordered by replication index.

    Raises:
        ValidationError: If solutions is empty, mixes configurations, or
            repeats a replication index
    """
    if not solutions:
        raise ValidationError("combine: need at least one solution")

    config = solutions[0].config
    if any(s.config is not config and s.config != config for s in solutions):
        raise ValidationError("combine: solutions come from different configurations")

    p = [s._result.params for s in solutions]
    replications = np.concatenate([x.replications for x in p])
    if len(np.unique(replications)) != len(replications):
        raise ValidationError("combine: replication indices overlap")

    order = np.argsort(replications, kind='stable')
    exclusions: dict[int, str] = {}
    for x in p:
        exclusions.update(x.exclusions)

    params = MonteCarloParams(
        rules=p[0].rules,
        decisions=np.concatenate([x.decisions for x in p])[order],
        valid=np.concatenate([x.valid for x in p])[order],
        statistics=np.concatenate([x.statistics for x in p])[order],
        estimates=np.concatenate([x.estimates for x in p])[order],
        bootstrap_se=np.concatenate([x.bootstrap_se for x in p])[order],
        replications=replications[order],
        exclusions=dict(sorted(exclusions.items())),
    )

    timing: dict[str, float] = {}
    for s in solutions:
        for key, value in (s.timing or {}).items():
            timing[key] = timing.get(key, 0.0) + value

    warnings_seen: list[str] = []
    for s in solutions:
        for w in s.warnings:
            if w not in warnings_seen:
                warnings_seen.append(w)

    info = dict(solutions[0].info)
    info['monte_carlo_reps'] = len(replications)
    info['n_excluded'] = len(exclusions)

    result = Result(
        params=params,
        info=info,
        timing=timing,
        backend_name=solutions[0].backend_name,
        warnings=tuple(warnings_seen),
    )
    return MonteCarloSolution(_result=result, _design=config)
