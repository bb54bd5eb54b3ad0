import math
from typing import List, Sequence

import numpy as np

from errors import InvalidConfiguration


def validate_period(period) -> float:
    """Return period as float, rejecting non-finite or non-positive values."""
    try:
        value = float(period)
    except (TypeError, ValueError):
        raise InvalidConfiguration(f"Period must be a number, got {period!r}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidConfiguration(f"Period must be strictly positive, got {period!r}")
    return value


def validate_harmonics(harmonics) -> int:
    """Return harmonics as int, rejecting negatives and non-integers."""
    if isinstance(harmonics, bool) or not isinstance(harmonics, (int, np.integer)):
        raise InvalidConfiguration(f"Harmonics must be an integer, got {harmonics!r}")
    if harmonics < 0:
        raise InvalidConfiguration(f"Harmonics must be >= 0, got {harmonics}")
    return int(harmonics)


def n_columns(harmonics: int) -> int:
    """Number of design matrix columns: intercept plus a sin/cos pair per harmonic."""
    return 1 + 2 * harmonics


def feature_names(harmonics: int) -> List[str]:
    """Column labels in design matrix order."""
    names = ["intercept"]
    for k in range(1, validate_harmonics(harmonics) + 1):
        names.extend([f"sin_{k}", f"cos_{k}"])
    return names


def build_features(indices: Sequence[float], period: float, harmonics: int) -> np.ndarray:
    """
    Build the Fourier design matrix for the given observation indices.

    Column 0 is the intercept (1.0). For harmonic k in 1..harmonics, column
    2k-1 holds sin(2*pi*k*index/period) and column 2k holds
    cos(2*pi*k*index/period).

    An empty index sequence yields a (0, 1 + 2*harmonics) matrix.
    """
    period = validate_period(period)
    harmonics = validate_harmonics(harmonics)

    ids = np.asarray(indices, dtype=float).reshape(-1)
    X = np.empty((ids.size, n_columns(harmonics)), dtype=float)
    X[:, 0] = 1.0

    for k in range(1, harmonics + 1):
        angle = 2 * np.pi * k * ids / period
        X[:, 2 * k - 1] = np.sin(angle)
        X[:, 2 * k] = np.cos(angle)

    return X
