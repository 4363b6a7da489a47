"""
Sample selection design with the two-step (Heckit) estimator.

Data generating process:

    s* = g0 + g1 z + g2 x + v          selection equation, s = 1{s* > 0}
    y  = b0 + b1 x + u                 outcome, observed only when s = 1
    (u, v) ~ bivariate normal, sd(u) = sigma, sd(v) = 1, corr = rho

Estimator:

    1. probit of s on [1, z, x]  ->  gamma_hat
    2. inverse Mills ratio lambda_i = phi(w_i gamma_hat) / Phi(w_i gamma_hat)
    3. OLS of y on [1, x, lambda] over the selected rows

The analytic second-step standard errors ignore the estimated first
step, which is why this design is paired with bootstrap standard errors
resampling whole rows (selection status included).

Sample rows are [y, x, z, s] with y set to 0 where s = 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats
from scipy.optimize import minimize
from scipy.special import log_ndtr

from pysimstudy.core.compute.linalg.qr import ols_cpu
from pysimstudy.core.exceptions import (
    ConvergenceError,
    DegenerateSampleError,
    SingularMatrixError,
    ValidationError,
)
from pysimstudy.dgp._common import StatisticResult, freeze_sample

Y_COLUMN = 0
X_COLUMN = 1
Z_COLUMN = 2
SELECTION_STRATA_COLUMN = 3


@dataclass(frozen=True)
class SelectionGenerator:
    """
    Rows [y, x, z, s] from the selection model above.

    Attributes:
        coefficients: Outcome (b0, b1)
        selection_coefficients: Selection (g0, g1, g2) on [1, z, x]
        rho: Correlation between outcome and selection errors
        sigma: Outcome error standard deviation
    """
    coefficients: tuple[float, float] = (1.0, 1.0)
    selection_coefficients: tuple[float, float, float] = (0.0, 1.0, 0.5)
    rho: float = 0.5
    sigma: float = 1.0

    def __post_init__(self):
        if len(self.coefficients) != 2:
            raise ValidationError(
                f"coefficients must be (b0, b1), got {self.coefficients!r}"
            )
        if len(self.selection_coefficients) != 3:
            raise ValidationError(
                f"selection_coefficients must be (g0, g1, g2), "
                f"got {self.selection_coefficients!r}"
            )
        if not (-1.0 < self.rho < 1.0):
            raise ValidationError(f"rho must be in (-1, 1), got {self.rho}")
        if not self.sigma > 0:
            raise ValidationError(f"sigma must be positive, got {self.sigma}")

    @property
    def label(self) -> str:
        return f"Selection(rho={self.rho:g})"

    @property
    def heavy_tailed(self) -> bool:
        return False

    def generate(self, n: int, rng: np.random.Generator) -> NDArray[np.floating[Any]]:
        x = rng.standard_normal(n)
        z = rng.standard_normal(n)
        e1 = rng.standard_normal(n)
        e2 = rng.standard_normal(n)

        u = self.sigma * e1
        v = self.rho * e1 + np.sqrt(1.0 - self.rho ** 2) * e2

        g0, g1, g2 = self.selection_coefficients
        s = (g0 + g1 * z + g2 * x + v > 0).astype(np.float64)

        b0, b1 = self.coefficients
        y = np.where(s == 1.0, b0 + b1 * x + u, 0.0)
        return freeze_sample(np.column_stack([y, x, z, s]))


def _probit_objective(gamma, W, q):
    xb = q * (W @ gamma)
    log_cdf = log_ndtr(xb)
    mills = np.exp(sp_stats.norm.logpdf(xb) - log_cdf)
    value = -np.sum(log_cdf)
    grad = -(W.T @ (q * mills))
    return value, grad


def probit_mle(
    W: NDArray[np.floating[Any]],
    s: NDArray[np.floating[Any]],
    *,
    gtol: float = 1e-6,
    maxiter: int = 200,
) -> NDArray[np.floating[Any]]:
    """
    Probit maximum likelihood by BFGS with the analytic gradient.

    Args:
        W: Regressors including the intercept column (n x k)
        s: Binary outcome (n,)

    Returns:
        Coefficient vector (k,)

    Raises:
        ConvergenceError: If BFGS stops with a large gradient or non-finite
            coefficients (e.g. under separation)
    """
    q = 2.0 * s - 1.0
    res = minimize(
        _probit_objective,
        x0=np.zeros(W.shape[1]),
        args=(W, q),
        jac=True,
        method='BFGS',
        options={'gtol': gtol, 'maxiter': maxiter},
    )

    grad_norm = float(np.max(np.abs(res.jac))) if res.jac is not None else np.inf
    if not np.all(np.isfinite(res.x)) or (not res.success and grad_norm > 1e-3):
        raise ConvergenceError(
            f"Probit did not converge: {res.message}",
            iterations=int(res.nit),
            reason='max_iterations' if res.nit >= maxiter else 'diverging',
        )
    return res.x


def inverse_mills_ratio(index: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """phi(index) / Phi(index), computed on the log scale."""
    return np.exp(sp_stats.norm.logpdf(index) - log_ndtr(index))


class TwoStepStatistic:
    """
    Two-step selection estimator of one outcome coefficient.

    The returned t statistic uses the naive second-step OLS standard
    error (df = n_selected - 3); pair it with the BOOTSTRAP_SE rule to
    see the corrected inference.

    Args:
        coefficient: Index into the outcome coefficients (b0, b1, b_lambda);
            default 1 = slope on x.
    """

    n_params = 3

    def __init__(self, coefficient: int = 1):
        if coefficient not in (0, 1, 2):
            raise ValidationError(
                f"coefficient must be 0, 1 or 2, got {coefficient!r}"
            )
        self.coefficient = coefficient

    @property
    def min_sample_size(self) -> int:
        return 10

    def compute(self, sample: NDArray[np.floating[Any]], hypothesized: float) -> StatisticResult:
        n = sample.shape[0]
        s = sample[:, SELECTION_STRATA_COLUMN]
        selected = s == 1.0
        n_selected = int(selected.sum())

        if n_selected == 0 or n_selected == n:
            raise DegenerateSampleError(
                f"Selection indicator has no variation ({n_selected} of {n} selected)",
                reason='no_variation',
            )
        if n_selected <= self.n_params:
            raise DegenerateSampleError(
                f"Only {n_selected} selected rows for {self.n_params} outcome parameters",
                reason='too_few_selected',
            )

        W = np.column_stack([np.ones(n), sample[:, Z_COLUMN], sample[:, X_COLUMN]])
        try:
            gamma = probit_mle(W, s)
        except ConvergenceError as e:
            raise DegenerateSampleError(
                f"First-step probit failed: {e}", reason='probit_failed'
            ) from e

        mills = inverse_mills_ratio(W[selected] @ gamma)
        X = np.column_stack([
            np.ones(n_selected),
            sample[selected, X_COLUMN],
            mills,
        ])

        try:
            fit = ols_cpu(X, sample[selected, Y_COLUMN])
        except SingularMatrixError as e:
            raise DegenerateSampleError(
                f"Second-step design is singular: {e}", reason='singular'
            ) from e

        j = self.coefficient
        se = float(fit.std_errors()[j])
        if se == 0.0:
            raise DegenerateSampleError(
                "Second-step residual variance is zero", reason='zero_variance'
            )

        estimate = float(fit.coefficients[j])
        return StatisticResult(
            estimate=estimate,
            statistic=(estimate - hypothesized) / se,
            std_error=se,
            df=float(fit.df_residual),
        )
