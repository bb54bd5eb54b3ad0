"""
JSON API over the reading store and the harmonic forecaster.

    GET /api/readings            -> [{"id", "timestamp", "pressure"}, ...]
    GET /api/predict?horizon=N   -> {"ids": [...], "pred": [...]}
"""

import logging
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from config import API_HOST, API_PORT, DEFAULT_HORIZON, MAX_HORIZON, READINGS_PATH, forecast_config
from data_io import ReadingStore, StoreError
from ts_core import ForecastConfig, InsufficientData, InvalidObservations, forecast

logger = logging.getLogger(__name__)


def parse_horizon(raw: Optional[str], default: int = DEFAULT_HORIZON) -> int:
    """Parse a horizon query parameter; missing, malformed or negative values fall back to default."""
    if raw is None:
        return default
    try:
        horizon = int(str(raw).strip())
    except ValueError:
        logger.warning("Ignoring malformed horizon %r, using %d", raw, default)
        return default
    if horizon < 0:
        logger.warning("Ignoring negative horizon %d, using %d", horizon, default)
        return default
    return min(horizon, MAX_HORIZON)


def create_app(store: ReadingStore, config: Optional[ForecastConfig] = None) -> FastAPI:
    config = config or forecast_config()
    app = FastAPI(title="pressure-forecast")

    @app.get("/api/readings")
    def readings():
        try:
            rows = store.fetch_all()
        except StoreError as e:
            logger.exception("Failed to load readings")
            return JSONResponse(status_code=500, content={"error": str(e)})
        return [r.to_dict() for r in rows]

    @app.get("/api/predict")
    def predict(horizon: Optional[str] = Query(None)):
        h = parse_horizon(horizon)
        try:
            history = store.fetch_observations()
        except StoreError as e:
            logger.exception("Failed to load readings")
            return JSONResponse(status_code=500, content={"error": str(e)})

        try:
            result = forecast(history, config, h)
        except InsufficientData as e:
            logger.warning("Forecast on %d readings failed: %s", len(history), e)
            return JSONResponse(status_code=422, content={"error": f"not enough data: {e}"})
        except InvalidObservations as e:
            logger.warning("Forecast rejected malformed readings: %s", e)
            return JSONResponse(status_code=422, content={"error": f"invalid readings: {e}"})
        return result.to_dict()

    return app


app = create_app(ReadingStore(READINGS_PATH))


def main():
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    main()
