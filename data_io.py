# === Reading storage: CSV-backed store keyed by sequential id ===

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from ts_core import Observation

logger = logging.getLogger(__name__)

COLUMNS = ["id", "timestamp", "pressure"]


class StoreError(RuntimeError):
    """Raised when readings cannot be read from or written to the store."""


@dataclass(frozen=True)
class Reading:
    id: int
    timestamp: datetime
    pressure: float

    def to_observation(self) -> Observation:
        return Observation(index=self.id, value=self.pressure)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "pressure": self.pressure,
        }


def _to_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def observations_from_frame(df: pd.DataFrame) -> List[Observation]:
    """Observations from a frame with columns id and pressure, in frame order."""
    return [Observation(index=int(i), value=float(v)) for i, v in zip(df["id"], df["pressure"])]


class ReadingStore:
    """
    Append-only store of pressure readings in a CSV file.

    Ids are assigned sequentially on insert, starting at 1. A missing file
    means no readings have been stored yet.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._next_id: Optional[int] = None

    def _read_frame(self) -> pd.DataFrame:
        if not self.path.exists() or self.path.stat().st_size == 0:
            return pd.DataFrame(columns=COLUMNS)
        try:
            df = pd.read_csv(self.path)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, OSError) as e:
            raise StoreError(f"Failed to read readings from {self.path}: {e}") from e

        missing = [c for c in COLUMNS if c not in df.columns]
        if missing:
            raise StoreError(f"Readings file {self.path} is missing columns: {missing}")

        df["id"] = pd.to_numeric(df["id"], errors="coerce")
        df["pressure"] = pd.to_numeric(df["pressure"], errors="coerce")
        df["timestamp"] = pd.to_datetime(df["timestamp"], errors="coerce", utc=True, format="ISO8601")

        bad = df[COLUMNS].isna().any(axis=1)
        if bad.any():
            logger.warning("Skipping %d malformed rows in %s", int(bad.sum()), self.path)
            df = df.loc[~bad].copy()

        df["id"] = df["id"].astype(int)
        return df.sort_values("id").drop_duplicates("id", keep="last").reset_index(drop=True)

    def fetch_frame(self) -> pd.DataFrame:
        """All readings as a DataFrame with columns id, timestamp, pressure, ordered by id."""
        return self._read_frame()[COLUMNS]

    def fetch_all(self) -> List[Reading]:
        """All readings ordered by id."""
        df = self._read_frame()
        return [
            Reading(id=int(row.id), timestamp=row.timestamp.to_pydatetime(), pressure=float(row.pressure))
            for row in df.itertuples(index=False)
        ]

    def fetch_observations(self) -> List[Observation]:
        return observations_from_frame(self._read_frame())

    def insert(self, timestamp: datetime, pressure: float) -> Reading:
        """Append a reading and return it with its assigned id."""
        with self._lock:
            if self._next_id is None:
                df = self._read_frame()
                self._next_id = int(df["id"].max()) + 1 if not df.empty else 1

            reading = Reading(id=self._next_id, timestamp=_to_utc(timestamp), pressure=float(pressure))
            row = pd.DataFrame([reading.to_dict()], columns=COLUMNS)
            write_header = not self.path.exists() or self.path.stat().st_size == 0
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                row.to_csv(self.path, mode="a", header=write_header, index=False)
            except OSError as e:
                raise StoreError(f"Failed to write reading to {self.path}: {e}") from e

            self._next_id += 1
            return reading
