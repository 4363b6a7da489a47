"""
Linear algebra kernels for pysimstudy.

CPU implementations via NumPy/SciPy (LAPACK under the hood). Each
operation returns a structured result dataclass and raises immediately
with a clear message on singular input.

Submodules:
    qr: QR decomposition, least squares, OLS with classical covariance
"""

from pysimstudy.core.compute.linalg.qr import (
    OLSResult,
    QRResult,
    ols_cpu,
    qr_cpu,
    qr_solve_cpu,
)

__all__ = [
    "OLSResult",
    "QRResult",
    "ols_cpu",
    "qr_cpu",
    "qr_solve_cpu",
]
