"""
Column-wise reduction shared by every aggregation step.

Bootstrap bias, Monte Carlo rejection rates and the experiment report
all reduce a table of replications to per-column means through this one
function. An empty selection is an error, never a NaN.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysimstudy.core.exceptions import NumericalError


def column_means(
    table: ArrayLike,
    mask: ArrayLike | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Mean of each column over the selected rows.

    Args:
        table: 1D (treated as one column) or 2D array; booleans count as 0/1.
        mask: Optional boolean row selector of length table.shape[0].

    Returns:
        Array of shape (k,) for a 2D table, shape (1,) for a 1D table.

    Raises:
        NumericalError: If no rows are selected
    """
    arr = np.asarray(table, dtype=np.float64)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)

    if mask is not None:
        arr = arr[np.asarray(mask, dtype=bool)]

    if arr.shape[0] == 0:
        raise NumericalError(
            "Cannot average an empty selection: every row was excluded"
        )

    return arr.mean(axis=0)
