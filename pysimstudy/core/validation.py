"""
Input validation utilities for pysimstudy.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Array checks raise ValidationError / DimensionError. Configuration
checks raise ConfigurationError so that a bad simulation cell is
reported before a single replication runs.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import math
import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pysimstudy.core.exceptions import (
    ConfigurationError,
    DimensionError,
    ValidationError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float numpy array.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_sample_shape(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is a sample: 1D observations or 2D rows of observations.

    Raises:
        DimensionError: If array is 0D or has more than 2 dimensions
    """
    if array.ndim not in (1, 2):
        raise DimensionError(
            f"{name}: expected 1D or 2D array, got {array.ndim}D with shape {array.shape}"
        )


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        ValidationError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


# ---------------------------------------------------------------------------
# Configuration checks
# ---------------------------------------------------------------------------

def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def check_positive_int(value: Any, name: str) -> int:
    """
    Verify value is an integer >= 1.

    Raises:
        ConfigurationError: If value is not a positive integer
    """
    if not _is_int(value) or value < 1:
        raise ConfigurationError(
            f"{name}: must be a positive integer, got {value!r}",
            parameter=name,
            value=value,
        )
    return int(value)


def check_nonnegative_int(value: Any, name: str) -> int:
    """
    Verify value is an integer >= 0.

    Raises:
        ConfigurationError: If value is not a non-negative integer
    """
    if not _is_int(value) or value < 0:
        raise ConfigurationError(
            f"{name}: must be a non-negative integer, got {value!r}",
            parameter=name,
            value=value,
        )
    return int(value)


def check_probability(value: Any, name: str) -> float:
    """
    Verify value lies in the open interval (0, 1).

    Raises:
        ConfigurationError: If value is not a number strictly between 0 and 1
    """
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        raise ConfigurationError(
            f"{name}: must be a number in (0, 1), got {value!r}",
            parameter=name,
            value=value,
        )
    if not (0.0 < float(value) < 1.0):
        raise ConfigurationError(
            f"{name}: must be in (0, 1), got {value}",
            parameter=name,
            value=value,
        )
    return float(value)


def check_finite_scalar(value: Any, name: str) -> float:
    """
    Verify value is a finite real number.

    Raises:
        ConfigurationError: If value is not real or not finite
    """
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        raise ConfigurationError(
            f"{name}: must be a real number, got {value!r}",
            parameter=name,
            value=value,
        )
    if not math.isfinite(float(value)):
        raise ConfigurationError(
            f"{name}: must be finite, got {value}",
            parameter=name,
            value=value,
        )
    return float(value)
