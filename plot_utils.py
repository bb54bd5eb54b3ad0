"""
Plotting utilities for the pressure forecast dashboard.
"""

from typing import Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from config import DEFAULT_FIGURE_SIZE, DEFAULT_PLOT_COLORS
from features import feature_names
from ts_core import Forecast


def create_forecast_plot(readings: pd.DataFrame, forecast: Forecast,
                         fitted: Optional[np.ndarray] = None, tail: Optional[int] = None):
    """
    Plot stored readings against the forecast, indexed by reading id.

    Args:
        readings: DataFrame with columns ``id`` and ``pressure``.
        forecast: Future ids and predicted values.
        fitted: Optional in-sample predictions aligned with ``readings``.
        tail: Only show the last ``tail`` readings (the forecast is always shown).
    """
    fig, ax = plt.subplots(figsize=DEFAULT_FIGURE_SIZE)

    visible = readings.sort_values("id").reset_index(drop=True)
    fitted_visible = None if fitted is None else np.asarray(fitted, dtype=float)
    if tail is not None and len(visible) > tail:
        if fitted_visible is not None:
            fitted_visible = fitted_visible[-tail:]
        visible = visible.tail(tail).reset_index(drop=True)

    ax.plot(visible["id"], visible["pressure"], linewidth=2, alpha=0.85,
            color=DEFAULT_PLOT_COLORS["actual"], label="Actual")

    if fitted_visible is not None and len(fitted_visible) == len(visible):
        ax.plot(visible["id"], fitted_visible, linestyle="--", linewidth=1.5,
                color=DEFAULT_PLOT_COLORS["fitted"], label="Fitted")

    if len(forecast):
        ids = list(forecast.ids)
        pred = list(forecast.pred)
        # Start the forecast line at the last known reading so there is no gap
        if not visible.empty:
            ids = [visible["id"].iloc[-1]] + ids
            pred = [visible["pressure"].iloc[-1]] + pred
        ax.plot(ids, pred, linestyle="-", linewidth=2.2,
                color=DEFAULT_PLOT_COLORS["forecast"], label="Forecast")
        if not visible.empty:
            ax.axvline(visible["id"].iloc[-1], linestyle=":", linewidth=1, alpha=0.7)

    ax.set_xlabel("Reading id")
    ax.set_ylabel("Pressure")
    ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5), fontsize=10, frameon=False)
    ax.grid(alpha=0.3)
    fig.tight_layout(rect=(0, 0, 0.85, 1))

    return fig


def create_coefficient_table(beta: np.ndarray, harmonics: int) -> pd.DataFrame:
    """Coefficients labelled by basis column, with amplitude per harmonic."""
    names = feature_names(harmonics)
    beta = np.asarray(beta, dtype=float)
    table = pd.DataFrame({"term": names, "coefficient": beta})

    amplitude = [abs(beta[0])]
    for k in range(1, harmonics + 1):
        amp = float(np.hypot(beta[2 * k - 1], beta[2 * k]))
        amplitude.extend([amp, amp])
    table["amplitude"] = amplitude
    return table
