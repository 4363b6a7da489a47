"""
End-to-end size and power properties.

    - Normal mean test, n = 20: all three rules near nominal
    - Centered ChiSquare(3): the bootstrap rule tracks the nominal level
      more closely than the Student-t rule
    - Null-centred bootstrap loses power under the alternative
    - OLS slope with a Pareto(1.5) regressor: exact size holds at every n
      under Normal errors; with Cauchy errors the asymptotic rule does not
      settle at 5%
"""

import warnings

import numpy as np
import pytest

from pysimstudy.core.warning_categories import NumericInstabilityWarning
from pysimstudy.distributions import ChiSquare, Normal
from pysimstudy.dgp import MeanSampleGenerator, MeanTStatistic
from pysimstudy.experiment import mean_test_configs, pareto_regression_configs
from pysimstudy.montecarlo import SimulationConfig, simulate

pytestmark = pytest.mark.slow


class NullCentredMeanT:
    """Mean t statistic that ignores the bootstrap anchor and always centres at 0."""

    min_sample_size = 2

    def compute(self, sample, hypothesized):
        return MeanTStatistic().compute(sample, 0.0)


def _power_config(statistic):
    return SimulationConfig.for_simulation(
        20, MeanSampleGenerator(Normal(loc=0.6)), statistic,
        monte_carlo_reps=200, bootstrap_reps=99, seed=31, rules=("bootstrap",),
    )


class TestMeanTest:

    def test_normal_scenario(self):
        cfg = mean_test_configs(distributions=(Normal(),))[0]
        assert (cfg.sample_size, cfg.monte_carlo_reps, cfg.bootstrap_reps, cfg.seed) == (20, 2000, 199, 111)
        sol = simulate(cfg)
        assert sol.n_excluded == 0
        for rule, rate in sol.rejection_rates.items():
            assert 0.03 <= rate <= 0.08, (rule, rate)

    def test_skewed_scenario(self):
        cfg = mean_test_configs(distributions=(ChiSquare(3),))[0]
        sol = simulate(cfg)
        exact_gap = abs(sol.rate('exact') - 0.05)
        bootstrap_gap = abs(sol.rate('bootstrap') - 0.05)
        assert exact_gap > bootstrap_gap

    def test_null_centred_bootstrap_loses_power(self):
        anchored = simulate(_power_config(MeanTStatistic())).rate('bootstrap')
        null_centred = simulate(_power_config(NullCentredMeanT())).rate('bootstrap')
        assert anchored > 0.4
        assert null_centred < anchored - 0.3


class TestParetoRegression:

    @pytest.fixture(scope='class')
    def results(self):
        configs = pareto_regression_configs(monte_carlo_reps=2000)
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', NumericInstabilityWarning)
            return [(cfg, simulate(cfg)) for cfg in configs]

    def test_grid(self, results):
        sizes = [cfg.sample_size for cfg, _ in results]
        assert sizes == [5, 10, 200, 5000, 5, 10, 200, 5000]

    def test_normal_errors_exact_size(self, results):
        for cfg, sol in results[:4]:
            assert 0.03 <= sol.rate('exact') <= 0.07, (cfg.sample_size, sol.rate('exact'))

    def test_cauchy_errors_asymptotic_size_does_not_converge(self, results):
        rates = {cfg.sample_size: sol.rate('asymptotic') for cfg, sol in results[4:]}
        assert rates[5000] < 0.04
        assert rates[5] > rates[5000]

    def test_reproducible(self, results):
        cfg, sol = results[7]
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', NumericInstabilityWarning)
            again = simulate(cfg, replications=range(100))
        np.testing.assert_array_equal(sol.decisions[:100], again.decisions)
