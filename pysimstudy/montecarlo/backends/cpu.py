"""
CPU backend for Monte Carlo simulation.

CPUMonteCarloBackend: the outer replication loop. Each replication owns
an independent random substream, generates a fresh sample, computes the
statistic under the null, runs one inner bootstrap when a bootstrap rule
is requested, and appends a decision row.
"""

from __future__ import annotations

import warnings
from typing import Iterable

import numpy as np

from pysimstudy.bootstrap._common import BootstrapDistribution
from pysimstudy.bootstrap._critical import critical_value, reject, standard_error
from pysimstudy.bootstrap.backends.cpu import CPUBootstrapBackend
from pysimstudy.bootstrap.design import BootstrapDesign
from pysimstudy.core.compute.timing import Timer
from pysimstudy.core.exceptions import DegenerateSampleError, NumericalError
from pysimstudy.core.random import RandomSource
from pysimstudy.core.result import Result
from pysimstudy.core.warning_categories import (
    ExclusionWarning,
    NumericInstabilityWarning,
)
from pysimstudy.dgp._common import StatisticResult
from pysimstudy.montecarlo._common import MonteCarloParams
from pysimstudy.montecarlo.design import SimulationConfig
from pysimstudy.montecarlo.rules import (
    DecisionRule,
    asymptotic_critical_value,
    exact_critical_value,
)


class CPUMonteCarloBackend:
    """
    CPU backend for the Monte Carlo replication loop.

    Replication i draws from source.substream(i), a function of the
    configuration seed and i only. Running replications in order, in
    chunks or on separate workers therefore yields identical rows.
    No state other than the decision table is shared between
    replications.
    """

    def __init__(self):
        self._bootstrap_backend = CPUBootstrapBackend()

    @property
    def name(self) -> str:
        return 'cpu_montecarlo'

    def solve(
        self,
        design: SimulationConfig,
        *,
        replications: Iterable[int] | None = None,
        source: RandomSource | None = None,
    ) -> Result[MonteCarloParams]:
        """
        Run replications and return Result[MonteCarloParams].

        Args:
            design: Validated simulation configuration.
            replications: Replication indices to run (default
                range(design.monte_carlo_reps)).
            source: RandomSource seeded with design.seed (default: a new one).

        Raises:
            NumericalError: If every replication was excluded, or a rule
                cannot be evaluated for this statistic
        """
        timer = Timer()
        timer.start()

        if source is None:
            source = RandomSource(design.seed)
        if replications is None:
            replications = range(design.monte_carlo_reps)
        rep_index = np.asarray(list(replications), dtype=np.intp)

        R = len(rep_index)
        k = len(design.rules)
        decisions = np.zeros((R, k), dtype=bool)
        valid = np.ones(R, dtype=bool)
        statistics = np.full(R, np.nan)
        estimates = np.full(R, np.nan)
        bootstrap_se = np.full(R, np.nan)
        exclusions: dict[int, str] = {}
        warnings_list: list[str] = []

        if design.generator.heavy_tailed:
            msg = (
                f"{design.distribution_label} has infinite variance; extreme "
                f"draws are expected and rejection rates may not converge "
                f"to the nominal level"
            )
            warnings.warn(msg, NumericInstabilityWarning, stacklevel=3)
            warnings_list.append(msg)

        for row, i in enumerate(rep_index):
            rng = source.substream(int(i)).generator
            try:
                with timer.section('generate'):
                    sample = design.generator.generate(design.sample_size, rng)

                with timer.section('statistic'):
                    result = design.statistic.compute(sample, design.null_value)
                if not result.is_finite():
                    raise DegenerateSampleError(
                        "Statistic is non-finite", reason='non_finite'
                    )

                boot = None
                if design.uses_bootstrap:
                    with timer.section('bootstrap'):
                        boot_design = BootstrapDesign.for_bootstrap(
                            sample,
                            design.statistic,
                            design.bootstrap_reps,
                            resampler=design.resampler,
                            rng=rng,
                        )
                        boot = self._bootstrap_backend.solve(boot_design).params

                with timer.section('decide'):
                    decisions[row] = [
                        self._decide(rule, result, boot, design)
                        for rule in design.rules
                    ]
            except DegenerateSampleError as e:
                e.replication = int(i)
                valid[row] = False
                decisions[row] = False
                exclusions[int(i)] = e.reason or 'degenerate'
                continue

            statistics[row] = result.statistic
            estimates[row] = result.estimate
            if boot is not None:
                bootstrap_se[row] = standard_error(boot) if boot.B > 1 else np.nan

        timer.stop()

        if R > 0 and not valid.any():
            raise NumericalError(
                f"All {R} replications were excluded as degenerate "
                f"(reasons: {sorted(set(exclusions.values()))})"
            )

        if exclusions:
            msg = (
                f"{len(exclusions)} of {R} replications excluded as degenerate; "
                f"rates use the remaining {R - len(exclusions)}"
            )
            warnings.warn(msg, ExclusionWarning, stacklevel=3)
            warnings_list.append(msg)
            if 'non_finite' in exclusions.values():
                msg = "Non-finite draws or statistics excluded replications"
                warnings.warn(msg, NumericInstabilityWarning, stacklevel=3)
                warnings_list.append(msg)

        params = MonteCarloParams(
            rules=design.rules,
            decisions=decisions,
            valid=valid,
            statistics=statistics,
            estimates=estimates,
            bootstrap_se=bootstrap_se,
            replications=rep_index,
            exclusions=exclusions,
        )

        return Result(
            params=params,
            info={
                'n': design.sample_size,
                'seed': design.seed,
                'monte_carlo_reps': R,
                'bootstrap_reps': design.bootstrap_reps if design.uses_bootstrap else 0,
                'scheme': design.resampler.scheme,
                'n_excluded': len(exclusions),
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    @staticmethod
    def _decide(
        rule: DecisionRule,
        result: StatisticResult,
        boot: BootstrapDistribution | None,
        design: SimulationConfig,
    ) -> bool:
        alpha = design.significance_level

        if rule is DecisionRule.EXACT:
            if result.df is None:
                raise NumericalError(
                    f"{type(design.statistic).__name__} has no exact reference "
                    f"distribution; drop the 'exact' rule"
                )
            return reject(result.statistic, exact_critical_value(result.df, alpha))

        if rule is DecisionRule.ASYMPTOTIC:
            return reject(result.statistic, asymptotic_critical_value(alpha))

        if rule is DecisionRule.BOOTSTRAP:
            return reject(result.statistic, critical_value(boot, alpha))

        if rule is DecisionRule.BOOTSTRAP_SE:
            se = standard_error(boot)
            if se == 0.0:
                raise DegenerateSampleError(
                    "Bootstrap standard error is zero", reason='zero_variance'
                )
            studentized = (result.estimate - design.null_value) / se
            return reject(studentized, asymptotic_critical_value(alpha))

        raise NumericalError(f"Unhandled decision rule: {rule!r}")
