from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np

from errors import (
    DimensionMismatch,
    ForecastError,
    InsufficientData,
    InvalidConfiguration,
    InvalidObservations,
    SingularDesign,
)
from features import build_features, validate_harmonics, validate_period
from regression import fit_ols, residual_rms

__all__ = [
    "DimensionMismatch",
    "ForecastError",
    "InsufficientData",
    "InvalidConfiguration",
    "InvalidObservations",
    "SingularDesign",
    "ForecastConfig",
    "Observation",
    "Forecast",
    "future_indices",
    "predict",
    "fit_history",
    "forecast",
    "forecast_from_fit",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastConfig:
    """Seasonal model settings: base period (in index units) and harmonic count."""

    period: float = 100.0
    harmonics: int = 3

    def __post_init__(self):
        object.__setattr__(self, "period", validate_period(self.period))
        object.__setattr__(self, "harmonics", validate_harmonics(self.harmonics))


@dataclass(frozen=True)
class Observation:
    index: int
    value: float


@dataclass(frozen=True)
class Forecast:
    """Future indices paired with predicted values."""

    ids: Tuple[float, ...] = field(default_factory=tuple)
    pred: Tuple[float, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.ids)

    def to_dict(self) -> Dict[str, List[float]]:
        return {"ids": list(self.ids), "pred": list(self.pred)}


def _validate_horizon(horizon) -> int:
    if isinstance(horizon, bool) or not isinstance(horizon, (int, np.integer)):
        raise InvalidConfiguration(f"Horizon must be an integer, got {horizon!r}")
    if horizon < 0:
        raise InvalidConfiguration(f"Horizon must be >= 0, got {horizon}")
    return int(horizon)


def future_indices(last_index: float, horizon: int) -> np.ndarray:
    """Contiguous run last_index+1 .. last_index+horizon."""
    horizon = _validate_horizon(horizon)
    return float(last_index) + np.arange(1, horizon + 1, dtype=float)


def predict(X: np.ndarray, beta: np.ndarray) -> np.ndarray:
    """Project a fitted coefficient vector onto a design matrix (X @ beta)."""
    X = np.asarray(X, dtype=float)
    beta = np.asarray(beta, dtype=float)
    if X.ndim != 2 or beta.ndim != 1:
        raise DimensionMismatch(
            f"Expected 2D design matrix and 1D coefficients, got {X.shape} and {beta.shape}"
        )
    if X.shape[1] != beta.size:
        raise DimensionMismatch(
            f"Design matrix has {X.shape[1]} columns but {beta.size} coefficients were given"
        )
    return X @ beta


def _split_history(history: Sequence[Observation]) -> Tuple[np.ndarray, np.ndarray]:
    ids = np.array([obs.index for obs in history], dtype=float)
    values = np.array([obs.value for obs in history], dtype=float)
    return ids, values


def fit_history(history: Sequence[Observation], config: ForecastConfig) -> Tuple[np.ndarray, float]:
    """Fit the harmonic model to history, returning (coefficients, residual RMS)."""
    ids, values = _split_history(history)
    X = build_features(ids, config.period, config.harmonics)
    beta = fit_ols(X, values)
    return beta, residual_rms(X, values, beta)


def forecast(history: Sequence[Observation], config: ForecastConfig, horizon: int) -> Forecast:
    """
    Fit a seasonal harmonic regression to history and project it forward.

    - Empty history returns an empty Forecast.
    - Future indices continue from the largest observed index, one step at a
      time, regardless of gaps in the history.
    - horizon == 0 returns an empty Forecast without predicting.

    Fit errors (InsufficientData, SingularDesign) propagate to the caller.
    """
    horizon = _validate_horizon(horizon)
    if len(history) == 0:
        return Forecast()

    ids, values = _split_history(history)
    X = build_features(ids, config.period, config.harmonics)
    beta = fit_ols(X, values)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Harmonic fit on %d observations (period=%s, harmonics=%d), residual RMS %.6g",
            len(values), config.period, config.harmonics, residual_rms(X, values, beta),
        )

    return forecast_from_fit(beta, ids.max(), config, horizon)


def forecast_from_fit(beta: np.ndarray, last_index: float, config: ForecastConfig, horizon: int) -> Forecast:
    """Project already fitted coefficients over the horizon after last_index."""
    horizon = _validate_horizon(horizon)
    if horizon == 0:
        return Forecast()

    fids = future_indices(last_index, horizon)
    Xf = build_features(fids, config.period, config.harmonics)
    pred = predict(Xf, beta)
    return Forecast(ids=tuple(fids.tolist()), pred=tuple(pred.tolist()))
