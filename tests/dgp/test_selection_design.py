"""
Tests for the two-step selection design.

Validates the generator layout, the probit first step against a
direct likelihood maximisation, the inverse Mills ratio, and the
degenerate cases of the two-step statistic.
"""

import numpy as np
import pytest
from scipy import stats as sp_stats

from pysimstudy.core.exceptions import DegenerateSampleError, ValidationError
from pysimstudy.dgp import (
    SELECTION_STRATA_COLUMN,
    SelectionGenerator,
    TwoStepStatistic,
    inverse_mills_ratio,
    probit_mle,
)


@pytest.fixture
def selection_rows():
    return SelectionGenerator(rho=0.5).generate(800, np.random.default_rng(11))


class TestSelectionGenerator:

    def test_layout(self, selection_rows):
        assert selection_rows.shape == (800, 4)
        s = selection_rows[:, SELECTION_STRATA_COLUMN]
        assert set(np.unique(s)) <= {0.0, 1.0}
        assert np.all(selection_rows[s == 0.0, 0] == 0.0)
        assert not selection_rows.flags.writeable

    def test_selection_rate(self, selection_rows):
        # P(z + 0.5 x + v > 0) = 1/2 for symmetric, zero-mean index
        rate = selection_rows[:, SELECTION_STRATA_COLUMN].mean()
        assert 0.4 < rate < 0.6

    @pytest.mark.parametrize("kwargs", [
        {'rho': 1.0},
        {'sigma': 0.0},
        {'coefficients': (1.0,)},
        {'selection_coefficients': (0.0, 1.0)},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValidationError):
            SelectionGenerator(**kwargs)

    def test_label(self):
        assert SelectionGenerator(rho=0.5).label == "Selection(rho=0.5)"
        assert not SelectionGenerator().heavy_tailed


class TestProbit:

    def test_recovers_coefficients(self):
        rng = np.random.default_rng(5)
        n = 5000
        W = np.column_stack([np.ones(n), rng.standard_normal(n)])
        s = (0.3 + 0.8 * W[:, 1] + rng.standard_normal(n) > 0).astype(float)
        gamma = probit_mle(W, s)
        np.testing.assert_allclose(gamma, [0.3, 0.8], atol=0.08)

    def test_gradient_zero_at_optimum(self):
        rng = np.random.default_rng(6)
        n = 500
        W = np.column_stack([np.ones(n), rng.standard_normal(n)])
        s = (W[:, 1] + rng.standard_normal(n) > 0).astype(float)
        gamma = probit_mle(W, s)
        q = 2 * s - 1
        xb = q * (W @ gamma)
        score = W.T @ (q * sp_stats.norm.pdf(xb) / sp_stats.norm.cdf(xb))
        np.testing.assert_allclose(score, 0.0, atol=1e-3)

    def test_inverse_mills_ratio(self):
        z = np.array([-30.0, -1.0, 0.0, 2.0])
        expected = sp_stats.norm.pdf(z[1:]) / sp_stats.norm.cdf(z[1:])
        out = inverse_mills_ratio(z)
        np.testing.assert_allclose(out[1:], expected, rtol=1e-10)
        # lower tail: phi/Phi ~ -z
        assert out[0] == pytest.approx(30.0, rel=1e-2)


class TestTwoStepStatistic:

    def test_estimate_near_truth(self):
        rows = SelectionGenerator(rho=0.5).generate(4000, np.random.default_rng(2))
        res = TwoStepStatistic().compute(rows, 1.0)
        assert res.estimate == pytest.approx(1.0, abs=0.1)
        n_selected = int(rows[:, SELECTION_STRATA_COLUMN].sum())
        assert res.df == n_selected - 3

    def test_no_variation(self, selection_rows):
        rows = np.array(selection_rows)
        rows[:, SELECTION_STRATA_COLUMN] = 1.0
        with pytest.raises(DegenerateSampleError) as info:
            TwoStepStatistic().compute(rows, 1.0)
        assert info.value.reason == 'no_variation'

    def test_too_few_selected(self, selection_rows):
        rows = np.array(selection_rows[:20])
        rows[:, SELECTION_STRATA_COLUMN] = 0.0
        rows[:2, SELECTION_STRATA_COLUMN] = 1.0
        with pytest.raises(DegenerateSampleError) as info:
            TwoStepStatistic().compute(rows, 1.0)
        assert info.value.reason == 'too_few_selected'

    def test_min_sample_size(self):
        assert TwoStepStatistic().min_sample_size == 10

    def test_invalid_coefficient(self):
        with pytest.raises(ValidationError):
            TwoStepStatistic(coefficient=3)
