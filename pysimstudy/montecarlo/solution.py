"""
Solution wrapper for Monte Carlo results.

MonteCarloSolution wraps Result[MonteCarloParams] and reduces the
decision table to empirical rejection rates over the valid replications.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pysimstudy.core.compute.reduction import column_means
from pysimstudy.core.result import Result
from pysimstudy.montecarlo._common import MonteCarloParams
from pysimstudy.montecarlo.rules import DecisionRule

if TYPE_CHECKING:
    from pysimstudy.montecarlo.design import SimulationConfig


@dataclass
class MonteCarloSolution:
    """
    User-facing Monte Carlo results.

    Excluded replications never enter a rate: the denominator is n_valid,
    and n_excluded is reported alongside.
    """
    _result: Result[MonteCarloParams]
    _design: 'SimulationConfig'

    # --- Decision table ---

    @property
    def rules(self) -> tuple[DecisionRule, ...]:
        return self._result.params.rules

    @property
    def decisions(self) -> NDArray[np.bool_]:
        """Rejections, shape (R, k); excluded rows are all False."""
        return self._result.params.decisions

    @property
    def valid(self) -> NDArray[np.bool_]:
        return self._result.params.valid

    @property
    def statistics(self) -> NDArray[np.floating[Any]]:
        return self._result.params.statistics

    @property
    def estimates(self) -> NDArray[np.floating[Any]]:
        return self._result.params.estimates

    @property
    def bootstrap_se(self) -> NDArray[np.floating[Any]]:
        return self._result.params.bootstrap_se

    @property
    def replications(self) -> NDArray[np.intp]:
        return self._result.params.replications

    @property
    def exclusions(self) -> dict[int, str]:
        """Replication index -> reason for every excluded replication."""
        return self._result.params.exclusions

    # --- Aggregates ---

    @property
    def n_valid(self) -> int:
        return int(self.valid.sum())

    @property
    def n_excluded(self) -> int:
        return len(self.valid) - self.n_valid

    @property
    def rejection_rates(self) -> dict[str, float]:
        """Empirical rejection rate per rule, keyed by rule value."""
        means = column_means(self.decisions, mask=self.valid)
        return {rule.value: float(m) for rule, m in zip(self.rules, means)}

    def rate(self, rule: DecisionRule | str) -> float:
        rule = rule if isinstance(rule, DecisionRule) else DecisionRule(rule)
        return self.rejection_rates[rule.value]

    @property
    def estimate_mean(self) -> float:
        return float(column_means(self.estimates, mask=self.valid)[0])

    @property
    def estimate_sd(self) -> float:
        """Monte Carlo standard deviation of the point estimate."""
        est = self.estimates[self.valid]
        return float(np.std(est, ddof=1)) if len(est) > 1 else float('nan')

    @property
    def mean_bootstrap_se(self) -> float | None:
        """Average bootstrap SE over valid replications, None if no bootstrap ran."""
        se = self.bootstrap_se
        has_se = self.valid & np.isfinite(se)
        if not has_se.any():
            return None
        return float(column_means(se, mask=has_se)[0])

    # --- Metadata ---

    @property
    def config(self) -> 'SimulationConfig':
        return self._design

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Display ---

    def summary(self) -> str:
        """
        Rejection-rate summary.

        Produces:
            MONTE CARLO SIMULATION

            Design: Normal(0, 1), n = 20, alpha = 0.05
            Replications: 2000 (0 excluded), bootstrap B = 199

            Rule              Rejection rate
            exact                     0.0495
            asymptotic                0.0640
            bootstrap                 0.0525
        """
        cfg = self._design
        lines = [
            "\nMONTE CARLO SIMULATION",
            "",
            f"Design: {cfg.distribution_label}, n = {cfg.sample_size}, "
            f"alpha = {cfg.significance_level:g}",
            f"Replications: {len(self.valid)} ({self.n_excluded} excluded)"
            + (f", bootstrap B = {cfg.bootstrap_reps}" if cfg.uses_bootstrap else ""),
            "",
            f"{'Rule':<16s} {'Rejection rate':>15s}",
        ]
        for name, rate in self.rejection_rates.items():
            lines.append(f"{name:<16s} {rate:15.4f}")

        lines.append("")
        lines.append(f"Estimate: mean {self.estimate_mean:.5g}, sd {self.estimate_sd:.5g}")
        if self.mean_bootstrap_se is not None:
            lines.append(f"Mean bootstrap SE: {self.mean_bootstrap_se:.5g}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"MonteCarloSolution(n={self._design.sample_size}, "
            f"R={len(self.valid)}, excluded={self.n_excluded}, "
            f"rules={[r.value for r in self.rules]})"
        )
