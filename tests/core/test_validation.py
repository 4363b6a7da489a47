"""
Tests for input and configuration validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, object rejection
    - check_finite: NaN/Inf detection
    - check_ndim / check_1d / check_sample_shape: dimensionality checks
    - check_consistent_length / check_min_samples
    - check_positive_int / check_nonnegative_int / check_probability /
      check_finite_scalar: configuration checks raising ConfigurationError
"""

import numpy as np
import pytest

from pysimstudy.core.exceptions import (
    ConfigurationError,
    DimensionError,
    ValidationError,
)
from pysimstudy.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_finite_scalar,
    check_min_samples,
    check_ndim,
    check_nonnegative_int,
    check_positive_int,
    check_probability,
    check_sample_shape,
)


# ═══════════════════════════════════════════════════════════════════════
# Array checks
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "x")
        assert np.issubdtype(result.dtype, np.floating)
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_float_passthrough(self):
        arr = np.array([1.5, 2.5])
        assert check_array(arr, "x").dtype == np.float64

    def test_rejects_object_dtype(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([None, 1, 2.0], "x")

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array(["a", "b"], "x")


class TestCheckFinite:

    def test_finite_ok(self):
        check_finite(np.array([1.0, 2.0]), "x")

    def test_nan_counted(self):
        with pytest.raises(ValidationError, match="1 NaN, 0 Inf"):
            check_finite(np.array([1.0, np.nan]), "x")

    def test_inf_counted(self):
        with pytest.raises(ValidationError, match="0 NaN, 2 Inf"):
            check_finite(np.array([np.inf, -np.inf, 1.0]), "x")


class TestShapes:

    def test_check_ndim(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            check_ndim(np.zeros(3), 2, "X")

    def test_check_1d(self):
        check_1d(np.zeros(3), "y")
        with pytest.raises(DimensionError):
            check_1d(np.zeros((3, 1)), "y")

    @pytest.mark.parametrize("shape", [(5,), (5, 2)])
    def test_sample_shape_accepts_1d_and_2d(self, shape):
        check_sample_shape(np.zeros(shape), "sample")

    @pytest.mark.parametrize("shape", [(), (2, 2, 2)])
    def test_sample_shape_rejects_other(self, shape):
        with pytest.raises(DimensionError, match="1D or 2D"):
            check_sample_shape(np.zeros(shape), "sample")

    def test_consistent_length(self):
        check_consistent_length(np.zeros(3), np.zeros((3, 2)), names=("a", "b"))
        with pytest.raises(DimensionError, match="a=3, b=4"):
            check_consistent_length(np.zeros(3), np.zeros(4), names=("a", "b"))

    def test_consistent_length_name_mismatch(self):
        with pytest.raises(ValueError):
            check_consistent_length(np.zeros(3), names=("a", "b"))

    def test_min_samples(self):
        check_min_samples(np.zeros(2), 2, "x")
        with pytest.raises(ValidationError, match="at least 3"):
            check_min_samples(np.zeros(2), 3, "x")


# ═══════════════════════════════════════════════════════════════════════
# Configuration checks
# ═══════════════════════════════════════════════════════════════════════


class TestConfigurationChecks:

    def test_positive_int(self):
        assert check_positive_int(np.int64(5), "R") == 5

    @pytest.mark.parametrize("bad", [0, -1, 2.0, True, "3", None])
    def test_positive_int_rejects(self, bad):
        with pytest.raises(ConfigurationError) as info:
            check_positive_int(bad, "R")
        assert info.value.parameter == "R"

    def test_nonnegative_int_accepts_zero(self):
        assert check_nonnegative_int(0, "seed") == 0

    def test_nonnegative_int_rejects_negative(self):
        with pytest.raises(ConfigurationError, match="non-negative"):
            check_nonnegative_int(-3, "seed")

    @pytest.mark.parametrize("alpha", [0.01, 0.05, 0.5, 0.99])
    def test_probability_ok(self, alpha):
        assert check_probability(alpha, "significance_level") == alpha

    @pytest.mark.parametrize("alpha", [0.0, 1.0, -0.1, 1.5, float("nan"), True])
    def test_probability_rejects(self, alpha):
        with pytest.raises(ConfigurationError):
            check_probability(alpha, "significance_level")

    def test_finite_scalar(self):
        assert check_finite_scalar(2, "null_value") == 2.0
        with pytest.raises(ConfigurationError, match="finite"):
            check_finite_scalar(float("inf"), "null_value")
        with pytest.raises(ConfigurationError, match="real number"):
            check_finite_scalar("0", "null_value")
