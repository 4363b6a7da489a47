"""
Tests for the OLS t-test design: LinearRegressionGenerator and OLSTStatistic.
"""

import numpy as np
import pytest
from scipy import stats as sp_stats

from pysimstudy.core.exceptions import DegenerateSampleError, ValidationError
from pysimstudy.distributions import Cauchy, Normal, Pareto, Uniform
from pysimstudy.dgp import LinearRegressionGenerator, OLSTStatistic


class TestLinearRegressionGenerator:

    def test_rows_are_y_x(self, rng):
        gen = LinearRegressionGenerator(Uniform(0, 1), Normal(scale=1e-9),
                                        coefficients=(2.0, -1.0))
        rows = gen.generate(30, rng)
        assert rows.shape == (30, 2)
        np.testing.assert_allclose(rows[:, 0], 2.0 - rows[:, 1], atol=1e-6)
        assert not rows.flags.writeable

    def test_heavy_tailed(self):
        assert LinearRegressionGenerator(Pareto(1.5), Normal()).heavy_tailed
        assert LinearRegressionGenerator(Normal(), Cauchy()).heavy_tailed
        assert not LinearRegressionGenerator(Pareto(3), Normal()).heavy_tailed

    def test_label(self):
        gen = LinearRegressionGenerator(Pareto(1.5), Normal())
        assert gen.label == "x~Pareto(1.5, 1), u~Normal(0, 1)"

    def test_reproducible(self):
        gen = LinearRegressionGenerator(Pareto(1.5), Cauchy())
        a = gen.generate(10, np.random.default_rng(9))
        b = gen.generate(10, np.random.default_rng(9))
        np.testing.assert_array_equal(a, b)

    def test_invalid(self):
        with pytest.raises(ValidationError):
            LinearRegressionGenerator(Normal(), "cauchy")
        with pytest.raises(ValidationError):
            LinearRegressionGenerator(Normal(), Normal(), coefficients=(1.0,))


class TestOLSTStatistic:

    def test_matches_linregress(self, rng):
        x = rng.standard_normal(40)
        y = 1.0 + 0.5 * x + rng.standard_normal(40)
        res = OLSTStatistic().compute(np.column_stack([y, x]), 0.0)
        lr = sp_stats.linregress(x, y)
        assert res.estimate == pytest.approx(lr.slope)
        assert res.std_error == pytest.approx(lr.stderr)
        assert res.statistic == pytest.approx(lr.slope / lr.stderr)
        assert res.df == 38

    def test_intercept(self, rng):
        x = rng.standard_normal(40)
        y = 1.0 + 0.5 * x + rng.standard_normal(40)
        res = OLSTStatistic(coefficient=0).compute(np.column_stack([y, x]), 1.0)
        lr = sp_stats.linregress(x, y)
        assert res.estimate == pytest.approx(lr.intercept)

    def test_min_sample_size(self):
        assert OLSTStatistic().min_sample_size == 3

    def test_constant_regressor_is_degenerate(self):
        rows = np.column_stack([np.arange(10.0), np.ones(10)])
        with pytest.raises(DegenerateSampleError) as info:
            OLSTStatistic().compute(rows, 0.0)
        assert info.value.reason == 'singular'

    def test_invalid_coefficient(self):
        with pytest.raises(ValidationError):
            OLSTStatistic(coefficient=2)
