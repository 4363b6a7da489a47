"""
Resampling schemes for the nonparametric bootstrap.

    ordinary:    n indices drawn uniformly from {0, ..., n-1} with replacement
    stratified:  with replacement inside each stratum; stratum sizes fixed

Samples are indexed by row, so for row designs every column of a row
travels together: (x, y) pairs are never broken up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pysimstudy.core.exceptions import ValidationError

SCHEMES = ("ordinary", "stratified")


@dataclass(frozen=True)
class Resampler:
    """
    Index resampler.

    Attributes:
        scheme: "ordinary" or "stratified"
        strata_column: For "stratified", the column of a 2D sample whose
            values define the strata (e.g. a selection indicator).
    """
    scheme: str = "ordinary"
    strata_column: int | None = None

    def __post_init__(self):
        if self.scheme not in SCHEMES:
            raise ValidationError(
                f"scheme must be one of {SCHEMES}, got {self.scheme!r}"
            )
        if self.scheme == "stratified" and self.strata_column is None:
            raise ValidationError(
                "strata_column is required for scheme='stratified'"
            )

    def draw_indices(
        self,
        sample: NDArray[np.floating[Any]],
        rng: np.random.Generator,
        size: int,
    ) -> NDArray[np.intp]:
        """
        Draw `size` index vectors at once.

        Returns:
            Integer array of shape (size, n)
        """
        n = sample.shape[0]
        if self.scheme == "ordinary":
            return rng.integers(0, n, size=(size, n))

        strata = self._strata(sample)
        indices = np.empty((size, n), dtype=np.intp)
        for s in np.unique(strata):
            members = np.flatnonzero(strata == s)
            picks = rng.integers(0, len(members), size=(size, len(members)))
            indices[:, members] = members[picks]
        return indices

    def resample(
        self,
        sample: NDArray[np.floating[Any]],
        rng: np.random.Generator,
    ) -> NDArray[np.floating[Any]]:
        """One resample of the same length as sample."""
        return sample[self.draw_indices(sample, rng, 1)[0]]

    def _strata(self, sample: NDArray[np.floating[Any]]) -> NDArray:
        if sample.ndim != 2 or not (0 <= self.strata_column < sample.shape[1]):
            raise ValidationError(
                f"strata_column={self.strata_column} is not a column of a "
                f"sample with shape {sample.shape}"
            )
        return sample[:, self.strata_column]
