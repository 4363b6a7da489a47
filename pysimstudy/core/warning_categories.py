"""
Warning category hierarchy for pysimstudy.

Non-fatal conditions are reported through Python's ``warnings`` module and
also recorded on ``Result.warnings``. All categories inherit from
:class:`PySimStudyWarning`, itself a :class:`UserWarning`, so they can be
filtered selectively:

>>> import warnings
>>> from pysimstudy.core.warning_categories import NumericInstabilityWarning
>>> warnings.filterwarnings('ignore', category=NumericInstabilityWarning)
"""


class PySimStudyWarning(UserWarning):
    """Base warning class for all pysimstudy warnings."""
    pass


class NumericInstabilityWarning(PySimStudyWarning):
    """
    Heavy-tailed draws may produce extreme values.

    Raised when a generator has infinite variance (e.g. Pareto with
    shape < 2, Cauchy errors) or when a replication is excluded because
    a draw or statistic was non-finite. Rejection rates that fail to
    settle near the nominal level under such designs are expected
    behaviour, not an engine fault.
    """
    pass


class ExclusionWarning(PySimStudyWarning):
    """
    Replications were excluded as degenerate.

    The rejection rates are computed over the remaining replications;
    the exclusion count is available on the solution.
    """
    pass
