"""
Core infrastructure for pysimstudy.

Shared abstractions used by the distributions, data generating
processes, bootstrap and Monte Carlo subpackages.

Key components:
    protocols: SampleGenerator, StatisticFunction, Backend protocols
    random: RandomSource with reproducible per-replication substreams
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    warning_categories: Warning hierarchy
    validation: Input and configuration validators
    compute: Timing, reduction, linear algebra
"""

from pysimstudy.core.protocols import Backend, SampleGenerator, StatisticFunction
from pysimstudy.core.random import RandomSource
from pysimstudy.core.result import Result
from pysimstudy.core.exceptions import (
    PySimStudyError,
    ValidationError,
    DimensionError,
    ConfigurationError,
    NumericalError,
    SingularMatrixError,
    DegenerateSampleError,
    ConvergenceError,
    ExperimentError,
)
from pysimstudy.core.warning_categories import (
    PySimStudyWarning,
    NumericInstabilityWarning,
    ExclusionWarning,
)

__all__ = [
    # Protocols
    "Backend",
    "SampleGenerator",
    "StatisticFunction",
    # Randomness
    "RandomSource",
    # Result
    "Result",
    # Exceptions
    "PySimStudyError",
    "ValidationError",
    "DimensionError",
    "ConfigurationError",
    "NumericalError",
    "SingularMatrixError",
    "DegenerateSampleError",
    "ConvergenceError",
    "ExperimentError",
    # Warnings
    "PySimStudyWarning",
    "NumericInstabilityWarning",
    "ExclusionWarning",
]
