"""
Shared compute infrastructure for pysimstudy.

Timing, the shared column-wise reduction, and linear algebra kernels
used by the statistics and the simulation backends.

Submodules:
    timing: Execution timing utilities
    reduction: Column-wise mean used by every aggregation step
    linalg: QR decomposition and least squares
"""

from pysimstudy.core.compute.timing import Timer, timed
from pysimstudy.core.compute.reduction import column_means

__all__ = [
    "Timer",
    "timed",
    "column_means",
]
