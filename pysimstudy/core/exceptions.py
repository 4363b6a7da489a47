"""
Exception hierarchy for pysimstudy.

All exceptions inherit from PySimStudyError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information

Propagation:
    - ConfigurationError is raised before any replication runs.
    - DegenerateSampleError is recoverable: the Monte Carlo engine
      excludes the affected replication and counts it.
    - Everything else aborts the simulation; a sweep re-raises it as
      ExperimentError naming the failed configuration.
"""

from typing import Any


class PySimStudyError(Exception):
    """Base exception for all pysimstudy errors."""
    pass


class ValidationError(PySimStudyError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class ConfigurationError(ValidationError):
    """
    Simulation configuration is invalid.

    Raised while building a SimulationConfig, before any replication runs,
    e.g. a sample size below the statistic's minimum or too few bootstrap
    replicates to resolve the requested quantile.

    Attributes:
        parameter: Name of the offending configuration field
        value: The rejected value
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: Any = None,
    ):
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class NumericalError(PySimStudyError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the matrix
    is singular or numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(n, p))
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank


class DegenerateSampleError(NumericalError):
    """
    A sample admits no well-defined statistic.

    Zero variance, a singular design matrix, non-finite draws or a failed
    first-stage fit. Within a Monte Carlo run this excludes one replication
    rather than aborting; the exclusion is counted on the solution.

    Attributes:
        reason: Short machine-readable cause ('zero_variance', 'singular',
            'non_finite', 'no_variation', 'probit_failed', ...)
        replication: Monte Carlo replication index, if known
    """

    def __init__(
        self,
        message: str,
        reason: str | None = None,
        replication: int | None = None,
    ):
        super().__init__(message)
        self.reason = reason
        self.replication = replication


class ConvergenceError(PySimStudyError):
    """
    Iterative algorithm failed to converge.

    Attributes:
        iterations: Number of iterations completed
        reason: Why convergence failed (e.g., 'max_iterations', 'diverging')
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        reason: str | None = None,
    ):
        super().__init__(message)
        self.iterations = iterations
        self.reason = reason


class ExperimentError(PySimStudyError):
    """
    One configuration of a sweep failed with an unrecoverable error.

    The original exception is chained as __cause__.

    Attributes:
        config_index: Position of the failed configuration in the sweep
        config: The failed configuration
    """

    def __init__(
        self,
        message: str,
        config_index: int,
        config: Any = None,
    ):
        super().__init__(message)
        self.config_index = config_index
        self.config = config
