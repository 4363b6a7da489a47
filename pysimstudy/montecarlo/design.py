"""
Design class for Monte Carlo simulation.

SimulationConfig is one cell of an experiment: a data generating
process, a statistic, the null value and level, the replication counts
and the seed. Immutable, validated at construction; every invalid
setting raises ConfigurationError before a single replication runs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from typing import Any

from pysimstudy.bootstrap.resampling import Resampler
from pysimstudy.core.exceptions import ConfigurationError
from pysimstudy.core.protocols import SampleGenerator, StatisticFunction
from pysimstudy.core.validation import (
    check_finite_scalar,
    check_nonnegative_int,
    check_positive_int,
    check_probability,
)
from pysimstudy.montecarlo.rules import (
    BOOTSTRAP_RULES,
    DEFAULT_RULES,
    DecisionRule,
    parse_rules,
)


@dataclass(frozen=True)
class SimulationConfig:
    """
    Frozen configuration of one Monte Carlo cell.

    Attributes:
        sample_size: n, observations per generated sample.
        generator: SampleGenerator producing one sample per replication.
        statistic: StatisticFunction evaluated on each sample.
        null_value: Hypothesized parameter value under H0.
        significance_level: alpha in (0, 1).
        monte_carlo_reps: R, number of outer replications.
        bootstrap_reps: B, bootstrap replicates per outer replication.
        seed: Non-negative integer seed of the cell.
        rules: Decision rules, in report column order.
        resampler: Bootstrap resampling scheme.
        label: Optional row label for reports.
    """
    sample_size: int
    generator: Any
    statistic: Any
    null_value: float
    significance_level: float
    monte_carlo_reps: int
    bootstrap_reps: int
    seed: int
    rules: tuple[DecisionRule, ...]
    resampler: Resampler = field(default_factory=Resampler)
    label: str | None = None

    @classmethod
    def for_simulation(
        cls,
        sample_size: int,
        generator,
        statistic,
        *,
        null_value: float = 0.0,
        significance_level: float = 0.05,
        monte_carlo_reps: int = 1000,
        bootstrap_reps: int = 199,
        seed: int = 0,
        rules=DEFAULT_RULES,
        resampler: Resampler | None = None,
        label: str | None = None,
    ) -> SimulationConfig:
        """
        Create a simulation configuration with validation.

        Raises:
            ConfigurationError: If any setting is invalid, in particular
                - sample_size below statistic.min_sample_size
                - significance_level outside (0, 1)
                - bootstrap_reps * significance_level < 1 with a bootstrap
                  rule requested (the (1 - alpha) quantile is not resolvable)
                - the exact rule requested for a statistic whose
                  has_exact_distribution is False
        """
        if not isinstance(generator, SampleGenerator):
            raise ConfigurationError(
                f"generator must implement generate(n, rng), label and "
                f"heavy_tailed, got {type(generator).__name__}",
                parameter='generator',
                value=generator,
            )
        if not isinstance(statistic, StatisticFunction):
            raise ConfigurationError(
                f"statistic must implement compute(sample, hypothesized) and "
                f"min_sample_size, got {type(statistic).__name__}",
                parameter='statistic',
                value=statistic,
            )

        n = check_positive_int(sample_size, 'sample_size')
        if n < statistic.min_sample_size:
            raise ConfigurationError(
                f"sample_size: {type(statistic).__name__} requires at least "
                f"{statistic.min_sample_size} observations, got {n}",
                parameter='sample_size',
                value=n,
            )

        null = check_finite_scalar(null_value, 'null_value')
        alpha = check_probability(significance_level, 'significance_level')
        R = check_positive_int(monte_carlo_reps, 'monte_carlo_reps')
        B = check_positive_int(bootstrap_reps, 'bootstrap_reps')
        seed = check_nonnegative_int(seed, 'seed')
        parsed_rules = parse_rules(rules)

        if (DecisionRule.EXACT in parsed_rules
                and not getattr(statistic, 'has_exact_distribution', True)):
            raise ConfigurationError(
                f"rules: {type(statistic).__name__} has no exact reference "
                f"distribution; drop the 'exact' rule",
                parameter='rules',
                value=parsed_rules,
            )

        if BOOTSTRAP_RULES.intersection(parsed_rules):
            # B * alpha >= 1 so that ceil(B (1 - alpha)) < B + 1 names a replicate
            # strictly inside the distribution; small fuzz for e.g. 20 * 0.05
            if B * alpha < 1.0 - 1e-9:
                raise ConfigurationError(
                    f"bootstrap_reps: {B} replicates cannot resolve the "
                    f"{1 - alpha:g} quantile; need at least "
                    f"{math.ceil(1.0 / alpha - 1e-9)}",
                    parameter='bootstrap_reps',
                    value=B,
                )
            if DecisionRule.BOOTSTRAP_SE in parsed_rules and B < 2:
                raise ConfigurationError(
                    "bootstrap_reps: bootstrap standard errors need at least 2 replicates",
                    parameter='bootstrap_reps',
                    value=B,
                )

        if resampler is None:
            resampler = Resampler()
        elif not isinstance(resampler, Resampler):
            raise ConfigurationError(
                f"resampler must be a Resampler, got {type(resampler).__name__}",
                parameter='resampler',
                value=resampler,
            )

        return cls(
            sample_size=n,
            generator=generator,
            statistic=statistic,
            null_value=null,
            significance_level=alpha,
            monte_carlo_reps=R,
            bootstrap_reps=B,
            seed=seed,
            rules=parsed_rules,
            resampler=resampler,
            label=label,
        )

    def validate(self) -> None:
        """
        Re-run the for_simulation checks on this instance.

        A configuration built with the plain constructor skips validation;
        its fields must also already be in normalised form (rules as
        DecisionRule members, a Resampler instance).

        Raises:
            ConfigurationError: If any setting is invalid
        """
        checked = type(self).for_simulation(
            self.sample_size,
            self.generator,
            self.statistic,
            null_value=self.null_value,
            significance_level=self.significance_level,
            monte_carlo_reps=self.monte_carlo_reps,
            bootstrap_reps=self.bootstrap_reps,
            seed=self.seed,
            rules=self.rules,
            resampler=self.resampler,
            label=self.label,
        )
        for f in fields(self):
            expected = getattr(checked, f.name)
            actual = getattr(self, f.name)
            if expected != actual:
                raise ConfigurationError(
                    f"{f.name}: expected {expected!r}, got {actual!r}; build "
                    f"configurations with SimulationConfig.for_simulation",
                    parameter=f.name,
                    value=actual,
                )

    # === Properties ===

    @property
    def distribution_label(self) -> str:
        return self.generator.label

    @property
    def uses_bootstrap(self) -> bool:
        return bool(BOOTSTRAP_RULES.intersection(self.rules))

    def key(self) -> dict[str, Any]:
        """Distinguishing parameters of the cell, used as report columns."""
        return {
            'label': self.label or self.distribution_label,
            'sample_size': self.sample_size,
            'distribution': self.distribution_label,
            'significance_level': self.significance_level,
        }
