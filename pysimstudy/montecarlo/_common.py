"""
Common data structures for Monte Carlo simulation.

MonteCarloParams is the parameter payload wrapped by Result[P] and
exposed through MonteCarloSolution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pysimstudy.montecarlo.rules import DecisionRule


@dataclass(frozen=True)
class MonteCarloParams:
    """
    Decision table of one simulation cell.

    Row i belongs to replication replications[i]; excluded rows keep
    their slot (valid[i] is False, decisions False, numeric columns NaN)
    so chunked runs can be merged by index.

    - rules: column order of decisions
    - decisions: bool (R, k), True where the rule rejects H0
    - valid: bool (R,), False for excluded (degenerate) replications
    - statistics: test statistic under the null, (R,)
    - estimates: point estimates, (R,)
    - bootstrap_se: bootstrap standard error where a bootstrap ran, else NaN
    - replications: replication indices, (R,)
    - exclusions: replication index -> reason
    """
    rules: tuple[DecisionRule, ...]
    decisions: NDArray[np.bool_]
    valid: NDArray[np.bool_]
    statistics: NDArray[np.floating[Any]]
    estimates: NDArray[np.floating[Any]]
    bootstrap_se: NDArray[np.floating[Any]]
    replications: NDArray[np.intp]
    exclusions: dict[int, str] = field(default_factory=dict)
