"""
Configuration constants for the pressure forecasting service.

Values can be overridden through environment variables so the generator,
API and dashboard processes share one source of truth.
"""

import os
from pathlib import Path

# Seasonal harmonic model
PERIOD = float(os.getenv("FORECAST_PERIOD", "100"))
HARMONICS = int(os.getenv("FORECAST_HARMONICS", "3"))

# Request parameters
DEFAULT_HORIZON = int(os.getenv("FORECAST_DEFAULT_HORIZON", "10"))
MAX_HORIZON = 1000

# Reciprocal condition number below which the Gram matrix is treated as singular
SINGULAR_RCOND = 1e-12

# Storage
READINGS_PATH = Path(os.getenv("READINGS_PATH", "data/readings.csv"))

# Synthetic sensor
SAMPLE_INTERVAL_SEC = float(os.getenv("SAMPLE_INTERVAL_SEC", "0.5"))
SIM_STEP_MINUTES = int(os.getenv("SIM_STEP_MINUTES", "30"))

# HTTP API
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8080"))

# Plotting parameters
DEFAULT_FIGURE_SIZE = (20, 4.5)
DEFAULT_PLOT_COLORS = {
    "actual": "#222",
    "fitted": "#1f77b4",
    "forecast": "orange",
}


def forecast_config():
    """Build the default ForecastConfig from the values above."""
    from ts_core import ForecastConfig

    return ForecastConfig(period=PERIOD, harmonics=HARMONICS)
