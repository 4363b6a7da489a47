"""
QR decomposition and least squares.

The OLS-based statistics (regression t-test, second step of the
two-step selection estimator) solve their normal equations here, once
per sample and once per bootstrap resample.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from pysimstudy.core.exceptions import SingularMatrixError
from pysimstudy.core.validation import check_1d, check_consistent_length, check_ndim


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Orthogonal matrix (n x k where k = min(n, p) for reduced mode)
        R: Upper triangular matrix (k x p)
        rank: Numerical rank determined from R diagonal
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    rank: int


@dataclass(frozen=True)
class OLSResult:
    """
    Least squares fit with the (n - p) residual variance correction.

    Attributes:
        coefficients: beta_hat (p,)
        residuals: y - X beta_hat (n,)
        rss: Residual sum of squares
        df_residual: n - p
        sigma2: rss / df_residual
        vcov: sigma2 * (X'X)^{-1}, computed as sigma2 * R^{-1} R^{-T}
        rank: Numerical rank of X
    """
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    rss: float
    df_residual: int
    sigma2: float
    vcov: NDArray[np.floating[Any]]
    rank: int

    def std_errors(self) -> NDArray[np.floating[Any]]:
        """Conventional standard errors sqrt(diag(vcov))."""
        return np.sqrt(np.diag(self.vcov))


def qr_cpu(X: NDArray[np.floating[Any]]) -> QRResult:
    """
    Reduced QR decomposition using LAPACK (via NumPy).

    Args:
        X: Matrix to decompose (n x p)

    Returns:
        QRResult with Q, R, and numerical rank
    """
    Q, R = np.linalg.qr(X, mode='reduced')

    diag_R = np.abs(np.diag(R))
    if len(diag_R) > 0 and diag_R.max() > 0:
        # Tolerance based on matrix size and machine epsilon
        tol = max(X.shape) * np.finfo(X.dtype).eps * diag_R.max()
        rank = int(np.sum(diag_R > tol))
    else:
        rank = 0

    return QRResult(Q=Q, R=R, rank=rank)


def qr_solve_cpu(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    check_rank: bool
) -> NDArray[np.floating[Any]]:
    """
    Solve least squares via QR decomposition (CPU).

    Solves: min_β ||y - Xβ||² as β = R⁻¹ Q'y.

    Raises:
        SingularMatrixError: If X is rank-deficient and check_rank=True
    """
    n, p = X.shape
    qr_result = qr_cpu(X)

    if check_rank and qr_result.rank < p:
        raise SingularMatrixError(
            f"Design matrix is rank-deficient: rank={qr_result.rank}, expected={p}. "
            f"This indicates perfect multicollinearity.",
            matrix_name='X',
            rank=qr_result.rank,
            expected_rank=p
        )

    Qty = qr_result.Q.T @ y
    return solve_triangular(qr_result.R[:p, :p], Qty[:p], lower=False)


def ols_cpu(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
) -> OLSResult:
    """
    Ordinary least squares with classical covariance.

    Algorithm:
        1. X = QR
        2. β = R⁻¹ Q'y
        3. σ² = RSS / (n - p)
        4. Var(β) = σ² R⁻¹ R⁻ᵀ

    Args:
        X: Design matrix (n x p), intercept column included by the caller
        y: Response vector (n,)

    Raises:
        DimensionError: If X is not 2D, y is not 1D or their lengths differ
        SingularMatrixError: If X is rank-deficient or n <= p
    """
    check_ndim(X, 2, 'X')
    check_1d(y, 'y')
    check_consistent_length(X, y, names=('X', 'y'))

    n, p = X.shape
    if n <= p:
        raise SingularMatrixError(
            f"Need more observations than parameters: n={n}, p={p}",
            matrix_name='X',
            rank=min(n, p),
            expected_rank=p,
        )

    qr_result = qr_cpu(X)
    if qr_result.rank < p:
        raise SingularMatrixError(
            f"Design matrix is rank-deficient: rank={qr_result.rank}, expected={p}. "
            f"This indicates perfect multicollinearity.",
            matrix_name='X',
            rank=qr_result.rank,
            expected_rank=p
        )

    R = qr_result.R[:p, :p]
    coefficients = solve_triangular(R, qr_result.Q.T @ y, lower=False)

    residuals = y - X @ coefficients
    rss = float(residuals @ residuals)
    df_residual = n - p
    sigma2 = rss / df_residual

    R_inv = solve_triangular(R, np.eye(p), lower=False)
    vcov = sigma2 * (R_inv @ R_inv.T)

    return OLSResult(
        coefficients=coefficients,
        residuals=residuals,
        rss=rss,
        df_residual=df_residual,
        sigma2=sigma2,
        vcov=vcov,
        rank=qr_result.rank,
    )
