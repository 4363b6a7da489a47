"""
Decision rules.

Every rule reduces to the same pure two-sided comparison,
reject(statistic, critical) = |statistic| > critical; the rules differ
only in where the critical value (and, for BOOTSTRAP_SE, the
denominator of the statistic) comes from:

    EXACT         Student-t(df) quantile, df from the statistic
    ASYMPTOTIC    standard normal quantile
    BOOTSTRAP     (1 - alpha) quantile of |t*| (bootstrap-t)
    BOOTSTRAP_SE  (estimate - h) / bootstrap SE against the normal quantile
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from scipy import stats as sp_stats

from pysimstudy.bootstrap._critical import reject
from pysimstudy.core.exceptions import ConfigurationError

__all__ = [
    "DecisionRule",
    "BOOTSTRAP_RULES",
    "parse_rules",
    "exact_critical_value",
    "asymptotic_critical_value",
    "reject",
]


class DecisionRule(Enum):
    EXACT = "exact"
    ASYMPTOTIC = "asymptotic"
    BOOTSTRAP = "bootstrap"
    BOOTSTRAP_SE = "bootstrap_se"


BOOTSTRAP_RULES = frozenset({DecisionRule.BOOTSTRAP, DecisionRule.BOOTSTRAP_SE})

DEFAULT_RULES = (DecisionRule.EXACT, DecisionRule.ASYMPTOTIC, DecisionRule.BOOTSTRAP)


def parse_rules(rules) -> tuple[DecisionRule, ...]:
    """
    Normalise rules given as DecisionRule members or their string values.

    Order is preserved; it fixes the column order of the decision table.

    Raises:
        ConfigurationError: If rules is empty, contains duplicates or
            unknown names
    """
    if isinstance(rules, (str, DecisionRule)):
        rules = (rules,)
    parsed: list[DecisionRule] = []
    for rule in rules:
        try:
            parsed.append(rule if isinstance(rule, DecisionRule) else DecisionRule(rule))
        except ValueError:
            valid = [r.value for r in DecisionRule]
            raise ConfigurationError(
                f"rules: unknown rule {rule!r}, expected one of {valid}",
                parameter='rules',
                value=rule,
            ) from None
    if not parsed:
        raise ConfigurationError(
            "rules: at least one decision rule is required",
            parameter='rules',
            value=rules,
        )
    if len(set(parsed)) != len(parsed):
        raise ConfigurationError(
            f"rules: duplicate rules in {[r.value for r in parsed]}",
            parameter='rules',
            value=rules,
        )
    return tuple(parsed)


@lru_cache(maxsize=1024)
def exact_critical_value(df: float, significance_level: float) -> float:
    """Two-sided Student-t critical value t_{1 - alpha/2}(df)."""
    return float(sp_stats.t.ppf(1.0 - significance_level / 2.0, df))


@lru_cache(maxsize=64)
def asymptotic_critical_value(significance_level: float) -> float:
    """Two-sided standard normal critical value z_{1 - alpha/2}."""
    return float(sp_stats.norm.ppf(1.0 - significance_level / 2.0))
