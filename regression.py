from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from errors import DimensionMismatch, InsufficientData, InvalidObservations, SingularDesign

try:
    from config import SINGULAR_RCOND
except ImportError:
    SINGULAR_RCOND = 1e-12

logger = logging.getLogger(__name__)


def _as_design(X) -> np.ndarray:
    X = np.asarray(X, dtype=float)
    if X.ndim != 2:
        raise DimensionMismatch(f"Design matrix must be 2D, got shape {X.shape}")
    return X


def fit_ols(X: np.ndarray, y: Sequence[float]) -> np.ndarray:
    """Estimate OLS coefficients through the normal equations.

    beta = (X^T X)^-1 X^T y, computed by solving the Gram system rather than
    forming the explicit inverse. The returned vector is read-only.

    Raises
    ------
    DimensionMismatch
        If ``len(y)`` differs from the number of rows of ``X``.
    InvalidObservations
        If ``y`` or ``X`` holds NaN or infinite values.
    InsufficientData
        If there are fewer observations than basis columns.
    SingularDesign
        If the design is rank deficient or the Gram matrix is ill-conditioned.
    """
    X = _as_design(X)
    y = np.asarray(y, dtype=float).reshape(-1)
    rows, cols = X.shape
    if y.size != rows:
        raise DimensionMismatch(f"Got {y.size} values for a design matrix with {rows} rows")
    if not np.all(np.isfinite(y)):
        raise InvalidObservations(f"Observed values contain {int(np.sum(~np.isfinite(y)))} NaN or infinite entries")
    if not np.all(np.isfinite(X)):
        raise InvalidObservations("Design matrix contains NaN or infinite entries")
    if rows < cols:
        raise InsufficientData(
            f"Need at least {cols} observations to fit {cols} coefficients, got {rows}"
        )

    if np.linalg.matrix_rank(X) < cols:
        raise SingularDesign("Design matrix is rank deficient (indices are collinear in the basis)")

    gram = X.T @ X
    rcond = 1.0 / np.linalg.cond(gram)
    if not np.isfinite(rcond) or rcond < SINGULAR_RCOND:
        raise SingularDesign(f"Gram matrix is ill-conditioned (rcond={rcond:.3g})")

    xty = X.T @ y
    try:
        beta = np.linalg.solve(gram, xty)
    except np.linalg.LinAlgError as e:
        raise SingularDesign(f"Gram matrix is singular: {e}") from e

    if not np.all(np.isfinite(beta)):
        raise SingularDesign("Least squares solution is not finite")

    logger.debug("Fitted %d coefficients on %d observations (rcond=%.3g)", cols, rows, rcond)
    beta.setflags(write=False)
    return beta


def residual_rms(X: np.ndarray, y: Sequence[float], beta: np.ndarray) -> float:
    """Root-mean-square of in-sample residuals y - X beta."""
    X = _as_design(X)
    y = np.asarray(y, dtype=float).reshape(-1)
    if y.size != X.shape[0] or X.shape[1] != np.size(beta):
        raise DimensionMismatch(
            f"Shapes disagree: X{X.shape}, y({y.size},), beta({np.size(beta)},)"
        )
    if y.size == 0:
        return 0.0
    resid = y - X @ np.asarray(beta, dtype=float)
    return float(np.sqrt(np.mean(resid ** 2)))
