"""
Solution wrapper for bootstrap results.

BootstrapSolution wraps Result[BootstrapDistribution] and provides
convenient accessors and a summary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pysimstudy.bootstrap._common import BootstrapDistribution
from pysimstudy.bootstrap._critical import critical_value, standard_error
from pysimstudy.core.compute.reduction import column_means
from pysimstudy.core.result import Result

if TYPE_CHECKING:
    from pysimstudy.bootstrap.design import BootstrapDesign


@dataclass
class BootstrapSolution:
    """
    User-facing bootstrap results.

    anchor, the replicate statistics and estimates, bias, standard error
    and the bootstrap-t critical value at any significance level.
    """
    _result: Result[BootstrapDistribution]
    _design: 'BootstrapDesign'

    # --- Core fields ---

    @property
    def distribution(self) -> BootstrapDistribution:
        return self._result.params

    @property
    def anchor(self) -> float:
        """Point estimate on the original sample (centring value)."""
        return self._result.params.anchor

    @property
    def statistics(self) -> NDArray[np.floating[Any]]:
        """Replicate statistics centred at the anchor, shape (B,)."""
        return self._result.params.statistics

    @property
    def estimates(self) -> NDArray[np.floating[Any]]:
        """Replicate point estimates, shape (B,)."""
        return self._result.params.estimates

    @property
    def B(self) -> int:
        return self._result.params.B

    @property
    def bias(self) -> float:
        """mean(estimates) - anchor."""
        return float(column_means(self.estimates)[0] - self.anchor)

    @property
    def se(self) -> float:
        """Bootstrap standard error: sd(estimates)."""
        return standard_error(self.distribution)

    def critical_value(self, significance_level: float) -> float:
        """Empirical (1 - alpha) quantile of |t*|."""
        return critical_value(self.distribution, significance_level)

    # --- Metadata ---

    @property
    def sample(self) -> NDArray:
        return self._design.sample

    @property
    def scheme(self) -> str:
        return self._design.resampler.scheme

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

    def summary(self, significance_level: float = 0.05) -> str:
        """
        Bootstrap summary.

        Produces:
            NONPARAMETRIC BOOTSTRAP (ordinary, B=999)

                   original        bias   std. error   |t*| crit (5%)
            t1*     5.12345     0.01234      0.56789          2.10345
        """
        pct = f"{significance_level * 100:g}%"
        crit_label = f"|t*| crit ({pct})"
        lines = [
            f"\nNONPARAMETRIC BOOTSTRAP ({self.scheme}, B={self.B})\n",
            f"{'':>8s} {'original':>12s} {'bias':>12s} {'std. error':>12s} "
            f"{crit_label:>16s}",
            f"{'t1*':>8s} {self.anchor:12.5f} {self.bias:12.5f} {self.se:12.5f} "
            f"{self.critical_value(significance_level):16.5f}",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"BootstrapSolution(B={self.B}, anchor={self.anchor:.4g}, "
            f"scheme={self.scheme!r}, backend={self.backend_name!r})"
        )
