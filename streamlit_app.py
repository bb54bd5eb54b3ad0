from pathlib import Path
import sys

# Ensure project root is on sys.path for module imports in various runtimes
_APP_DIR = Path(__file__).parent
if str(_APP_DIR) not in sys.path:
    sys.path.insert(0, str(_APP_DIR))

import pandas as pd
import streamlit as st

from config import DEFAULT_HORIZON, HARMONICS, MAX_HORIZON, PERIOD, READINGS_PATH
from data_io import ReadingStore, StoreError, observations_from_frame
from features import build_features
from plot_utils import create_coefficient_table, create_forecast_plot
from ts_core import (
    ForecastConfig,
    InsufficientData,
    InvalidConfiguration,
    InvalidObservations,
    fit_history,
    forecast_from_fit,
    predict,
)

st.set_page_config(
    page_title="Pressure Forecast",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown(
    """
    <style>
        .block-container { padding: 1rem; margin: 1rem; }
        header[data-testid="stHeader"] { height: 20px; }
    </style>
    """,
    unsafe_allow_html=True,
)


@st.cache_resource
def get_store(path: str) -> ReadingStore:
    return ReadingStore(path)


# Sidebar controls
with st.sidebar:
    st.markdown("<div style='font-weight:600; margin:0 0 6px 0; text-align:center'>Model</div>", unsafe_allow_html=True)
    readings_path = st.text_input("Readings file", value=str(READINGS_PATH))
    period = st.number_input("Period (readings)", min_value=1.0, value=float(PERIOD), step=1.0)
    harmonics = st.number_input("Harmonics", min_value=0, max_value=20, value=int(HARMONICS), step=1)
    horizon = st.number_input("Horizon", min_value=0, max_value=MAX_HORIZON, value=int(DEFAULT_HORIZON), step=1)
    tail = st.number_input("Show last N readings (0 = all)", min_value=0, value=300, step=50)
    if st.button("Refresh"):
        st.rerun()

st.markdown("<div style='font-weight:600; margin:12px 0 18px 0; text-align:center; font-size:24px'>Pressure Readings and Forecast</div>", unsafe_allow_html=True)

store = get_store(readings_path)
try:
    readings = store.fetch_frame()
except StoreError as e:
    st.error(f"Failed to load readings: {e}")
    st.stop()

if readings.empty:
    st.info("No readings yet. Start the generator with `python generator.py`.")
    st.stop()

try:
    config = ForecastConfig(period=period, harmonics=int(harmonics))
except InvalidConfiguration as e:
    st.error(str(e))
    st.stop()

history = observations_from_frame(readings)
try:
    beta, rms = fit_history(history, config)
except InsufficientData as e:
    st.warning(f"Not enough data to fit the model yet: {e}")
    st.stop()
except InvalidObservations as e:
    st.error(f"Readings cannot be fitted: {e}")
    st.stop()

result = forecast_from_fit(beta, readings["id"].max(), config, int(horizon))

fitted = predict(build_features(readings["id"].to_numpy(), config.period, config.harmonics), beta)
fig = create_forecast_plot(readings, result, fitted=fitted, tail=int(tail) or None)
st.pyplot(fig, use_container_width=True)

col_metrics, col_coef = st.columns([1, 2])
with col_metrics:
    st.metric("Readings", len(readings))
    st.metric("Residual RMS", f"{rms:.3f}")
    if len(readings):
        st.caption(f"Last reading: {pd.Timestamp(readings['timestamp'].iloc[-1])}")
with col_coef:
    st.dataframe(create_coefficient_table(beta, config.harmonics), use_container_width=True, hide_index=True)

if len(result):
    st.dataframe(pd.DataFrame(result.to_dict()), use_container_width=True, hide_index=True)
