"""
Common data structures for experiment sweeps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ReportCell:
    """
    One row of an experiment report: a configuration and its aggregates.

    - rates: rule value -> empirical rejection rate over valid replications
    - n_valid / n_excluded: replication counts behind the rates
    - estimate_sd: Monte Carlo standard deviation of the point estimate
    - mean_bootstrap_se: average bootstrap SE, None without a bootstrap rule
    """
    label: str
    sample_size: int
    distribution: str
    significance_level: float
    rates: dict[str, float]
    n_valid: int
    n_excluded: int
    estimate_sd: float
    mean_bootstrap_se: float | None = None
    timing: dict[str, float] | None = field(default=None, compare=False)

    def as_dict(self) -> dict[str, Any]:
        row: dict[str, Any] = {
            'label': self.label,
            'sample_size': self.sample_size,
            'distribution': self.distribution,
            'significance_level': self.significance_level,
        }
        row.update(self.rates)
        row['n_valid'] = self.n_valid
        row['n_excluded'] = self.n_excluded
        row['estimate_sd'] = self.estimate_sd
        row['mean_bootstrap_se'] = self.mean_bootstrap_se
        return row
