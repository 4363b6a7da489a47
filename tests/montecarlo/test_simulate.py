"""
Tests for the Monte Carlo engine.

Validates reproducibility (bit-identical decision tables, chunked runs
equal to a full run), degenerate-sample exclusion, warnings, the
BOOTSTRAP_SE rule, and the solution accessors.
"""

from dataclasses import dataclass

import numpy as np
import pytest

from pysimstudy.core.exceptions import ConfigurationError, NumericalError, ValidationError
from pysimstudy.core.random import RandomSource
from pysimstudy.core.warning_categories import (
    ExclusionWarning,
    NumericInstabilityWarning,
)
from pysimstudy.distributions import Cauchy, Normal
from pysimstudy.dgp import MeanSampleGenerator, MeanTStatistic, StatisticResult, freeze_sample
from pysimstudy.montecarlo import DecisionRule, SimulationConfig, combine, simulate


@pytest.fixture
def config():
    return SimulationConfig.for_simulation(
        15, MeanSampleGenerator(Normal()), MeanTStatistic(),
        monte_carlo_reps=120, bootstrap_reps=39, seed=2024,
    )


class NoDfMeanT:
    """Mean t statistic without an exact reference distribution."""

    min_sample_size = 2
    has_exact_distribution = False

    def compute(self, sample, hypothesized):
        res = MeanTStatistic().compute(sample, hypothesized)
        return StatisticResult(res.estimate, res.statistic, res.std_error, df=None)


class UndeclaredNoDfMeanT(NoDfMeanT):
    """Same statistic, without declaring the missing exact distribution."""

    has_exact_distribution = True


@dataclass(frozen=True)
class SometimesOverflowGenerator:
    """Normal draws; with probability p, finite draws whose variance overflows."""
    p: float = 0.2

    @property
    def label(self) -> str:
        return f"SometimesOverflow({self.p:g})"

    @property
    def heavy_tailed(self) -> bool:
        return False

    def generate(self, n, rng):
        if rng.random() < self.p:
            return freeze_sample(np.tile([1e308, -1e308], n // 2))
        return freeze_sample(rng.standard_normal(n))


# ═══════════════════════════════════════════════════════════════════════
# Reproducibility
# ═══════════════════════════════════════════════════════════════════════


class TestReproducibility:

    def test_bit_identical_runs(self, config):
        a = simulate(config)
        b = simulate(config)
        np.testing.assert_array_equal(a.decisions, b.decisions)
        np.testing.assert_array_equal(a.statistics, b.statistics)
        np.testing.assert_array_equal(a.bootstrap_se, b.bootstrap_se)
        assert a.rejection_rates == b.rejection_rates

    def test_shared_source_is_reseeded(self, config):
        source = RandomSource(999)
        source.draw_uniform(50)
        a = simulate(config, source=source)
        assert source.current_seed == config.seed
        np.testing.assert_array_equal(a.decisions, simulate(config).decisions)

    def test_different_seed_differs(self, config):
        other = SimulationConfig.for_simulation(
            15, MeanSampleGenerator(Normal()), MeanTStatistic(),
            monte_carlo_reps=120, bootstrap_reps=39, seed=2025,
        )
        assert not np.array_equal(simulate(config).statistics, simulate(other).statistics)

    def test_chunks_combine_to_full_run(self, config):
        full = simulate(config)
        chunks = [
            simulate(config, replications=range(80, 120)),
            simulate(config, replications=range(0, 30)),
            simulate(config, replications=range(30, 80)),
        ]
        merged = combine(chunks)
        np.testing.assert_array_equal(merged.replications, np.arange(120))
        np.testing.assert_array_equal(merged.decisions, full.decisions)
        np.testing.assert_array_equal(merged.statistics, full.statistics)
        assert merged.rejection_rates == full.rejection_rates

    def test_single_replication_matches_row(self, config):
        full = simulate(config)
        one = simulate(config, replications=[57])
        np.testing.assert_array_equal(one.decisions[0], full.decisions[57])

    def test_combine_overlap(self, config):
        a = simulate(config, replications=range(0, 10))
        b = simulate(config, replications=range(5, 15))
        with pytest.raises(ValidationError, match="overlap"):
            combine([a, b])

    def test_combine_empty(self):
        with pytest.raises(ValidationError):
            combine([])

    def test_combine_mixed_configs(self, config):
        other = SimulationConfig.for_simulation(
            15, MeanSampleGenerator(Normal()), MeanTStatistic(),
            monte_carlo_reps=120, bootstrap_reps=39, seed=1,
        )
        with pytest.raises(ValidationError, match="different configurations"):
            combine([simulate(config, replications=[0]),
                     simulate(other, replications=[1])])

    def test_replication_out_of_range(self, config):
        with pytest.raises(ValidationError, match="outside"):
            simulate(config, replications=[0, 120])


# ═══════════════════════════════════════════════════════════════════════
# Degenerate samples
# ═══════════════════════════════════════════════════════════════════════


class TestDegenerateSamples:

    def test_all_degenerate_raises(self, constant_generator):
        cfg = SimulationConfig.for_simulation(
            10, constant_generator, MeanTStatistic(), monte_carlo_reps=20,
        )
        with pytest.raises(NumericalError, match="All 20 replications"):
            simulate(cfg)

    def test_excluded_not_in_denominator(self, sometimes_constant_generator):
        cfg = SimulationConfig.for_simulation(
            10, sometimes_constant_generator, MeanTStatistic(),
            monte_carlo_reps=300, bootstrap_reps=39, seed=5,
        )
        with pytest.warns(ExclusionWarning):
            sol = simulate(cfg)

        assert 0 < sol.n_excluded < 300
        assert sol.n_valid + sol.n_excluded == 300
        assert set(sol.exclusions.values()) == {'zero_variance'}
        assert sorted(sol.exclusions) == sorted(np.flatnonzero(~sol.valid).tolist())

        # excluded rows carry no decision and no statistic
        assert not sol.decisions[~sol.valid].any()
        assert np.all(np.isnan(sol.statistics[~sol.valid]))

        expected = sol.decisions[sol.valid].mean(axis=0)
        for rule, rate in zip(sol.rules, expected):
            assert sol.rate(rule) == pytest.approx(rate)
        assert sol.info['n_excluded'] == sol.n_excluded
        assert any("excluded" in w for w in sol.warnings)

    def test_overflowing_samples_warn_numeric_instability(self):
        cfg = SimulationConfig.for_simulation(
            10, SometimesOverflowGenerator(), MeanTStatistic(),
            monte_carlo_reps=100, seed=4, rules=("exact", "asymptotic"),
        )
        with pytest.warns(NumericInstabilityWarning, match="Non-finite"):
            sol = simulate(cfg)
        assert set(sol.exclusions.values()) == {'non_finite'}
        assert 0 < sol.n_excluded < 100

    def test_degenerate_bootstrap_resample_excludes_replication(self):
        """n = 2 resamples are constant half the time: every bootstrap fails."""
        cfg = SimulationConfig.for_simulation(
            2, MeanSampleGenerator(Normal()), MeanTStatistic(),
            monte_carlo_reps=10, bootstrap_reps=20, seed=0,
        )
        with pytest.raises(NumericalError, match="excluded"):
            simulate(cfg)

    def test_non_bootstrap_rules_survive_small_n(self):
        cfg = SimulationConfig.for_simulation(
            2, MeanSampleGenerator(Normal()), MeanTStatistic(),
            monte_carlo_reps=50, seed=0, rules=("exact", "asymptotic"),
        )
        sol = simulate(cfg)
        assert sol.n_excluded == 0
        assert np.all(np.isnan(sol.bootstrap_se))
        assert sol.mean_bootstrap_se is None


# ═══════════════════════════════════════════════════════════════════════
# Rules and warnings
# ═══════════════════════════════════════════════════════════════════════


class TestRules:

    def test_decision_columns_follow_rules(self, config):
        sol = simulate(config)
        assert sol.decisions.shape == (120, 3)
        assert list(sol.rejection_rates) == ['exact', 'asymptotic', 'bootstrap']

    def test_asymptotic_rejects_at_least_as_often_as_exact(self, config):
        """z_{0.975} < t_{0.975}(n-1): every exact rejection is an asymptotic one."""
        sol = simulate(config)
        exact = sol.decisions[:, 0]
        asym = sol.decisions[:, 1]
        assert np.all(asym[exact])

    def test_bootstrap_se_rule(self):
        cfg = SimulationConfig.for_simulation(
            30, MeanSampleGenerator(Normal()), MeanTStatistic(),
            monte_carlo_reps=300, bootstrap_reps=99, seed=8,
            rules=(DecisionRule.BOOTSTRAP_SE,),
        )
        sol = simulate(cfg)
        assert 0.0 < sol.rate('bootstrap_se') < 0.15
        assert sol.mean_bootstrap_se == pytest.approx(1 / np.sqrt(30), rel=0.15)

    def test_exact_rule_rejected_at_configuration(self):
        with pytest.raises(ConfigurationError, match="exact reference") as info:
            SimulationConfig.for_simulation(
                10, MeanSampleGenerator(Normal()), NoDfMeanT(), monte_carlo_reps=5,
                rules=("asymptotic", "exact"),
            )
        assert info.value.parameter == 'rules'

    def test_exact_rule_undeclared_missing_df(self):
        cfg = SimulationConfig.for_simulation(
            10, MeanSampleGenerator(Normal()), UndeclaredNoDfMeanT(), monte_carlo_reps=5,
            rules=("exact",),
        )
        with pytest.raises(NumericalError, match="exact reference"):
            simulate(cfg)

    def test_no_df_fine_for_asymptotic(self):
        cfg = SimulationConfig.for_simulation(
            10, MeanSampleGenerator(Normal()), NoDfMeanT(), monte_carlo_reps=5,
            rules=("asymptotic", "bootstrap"), bootstrap_reps=20,
        )
        assert simulate(cfg).n_valid == 5

    def test_heavy_tail_warning(self):
        cfg = SimulationConfig.for_simulation(
            10, MeanSampleGenerator(Cauchy()), MeanTStatistic(),
            monte_carlo_reps=20, bootstrap_reps=20,
        )
        with pytest.warns(NumericInstabilityWarning, match="infinite variance"):
            sol = simulate(cfg)
        assert any("infinite variance" in w for w in sol.warnings)

    def test_no_warning_for_light_tails(self, config, recwarn):
        sol = simulate(config)
        assert sol.warnings == ()
        assert not [w for w in recwarn if issubclass(w.category, NumericInstabilityWarning)]

    def test_rejects_non_config(self):
        with pytest.raises(ValidationError, match="SimulationConfig"):
            simulate({'sample_size': 20})


# ═══════════════════════════════════════════════════════════════════════
# Solution
# ═══════════════════════════════════════════════════════════════════════


class TestSolution:

    def test_accessors(self, config):
        sol = simulate(config)
        assert sol.config is config
        assert sol.backend_name == 'cpu_montecarlo'
        assert sol.info['seed'] == 2024
        assert sol.info['bootstrap_reps'] == 39
        assert sol.timing['total_seconds'] > 0
        assert {'generate', 'statistic', 'bootstrap', 'decide'} <= set(sol.timing)
        assert sol.estimate_mean == pytest.approx(0.0, abs=0.1)
        assert sol.estimate_sd == pytest.approx(1 / np.sqrt(15), rel=0.2)

    def test_summary(self, config):
        text = simulate(config).summary()
        assert "MONTE CARLO SIMULATION" in text
        assert "Design: Normal(0, 1), n = 15, alpha = 0.05" in text
        assert "bootstrap B = 39" in text
        for name in ('exact', 'asymptotic', 'bootstrap'):
            assert name in text

    def test_repr(self, config):
        assert "R=120" in repr(simulate(config))
