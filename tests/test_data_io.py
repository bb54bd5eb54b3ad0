import os, sys
from datetime import datetime, timedelta, timezone
import warnings
import pandas as pd
import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from data_io import ReadingStore, StoreError, observations_from_frame
from ts_core import Observation

T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)

def test_missing_file_is_empty(tmp_path):
    store = ReadingStore(tmp_path / "readings.csv")
    assert store.fetch_all() == []
    assert store.fetch_observations() == []
    assert store.fetch_frame().empty

def test_insert_assigns_sequential_ids(tmp_path):
    store = ReadingStore(tmp_path / "nested" / "readings.csv")
    r1 = store.insert(T0, 101.5)
    r2 = store.insert(T0 + timedelta(minutes=30), 99.25)
    assert (r1.id, r2.id) == (1, 2)

    rows = store.fetch_all()
    assert [r.id for r in rows] == [1, 2]
    assert [r.pressure for r in rows] == [101.5, 99.25]
    assert rows[1].timestamp == T0 + timedelta(minutes=30)

def test_ids_continue_across_store_instances(tmp_path):
    path = tmp_path / "readings.csv"
    ReadingStore(path).insert(T0, 1.0)
    ReadingStore(path).insert(T0, 2.0)
    reading = ReadingStore(path).insert(T0, 3.0)
    assert reading.id == 3

def test_naive_timestamps_are_utc(tmp_path):
    store = ReadingStore(tmp_path / "readings.csv")
    store.insert(datetime(2025, 1, 1, 12, 0, 0), 1.0)
    store.insert(datetime(2025, 1, 1, 12, 30, 0, 250000), 2.0)
    rows = store.fetch_all()
    assert rows[0].timestamp == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert rows[1].timestamp.microsecond == 250000

def test_fetch_observations(tmp_path):
    store = ReadingStore(tmp_path / "readings.csv")
    for i in range(3):
        store.insert(T0 + timedelta(minutes=30 * i), 100.0 + i)
    assert store.fetch_observations() == [Observation(1, 100.0), Observation(2, 101.0), Observation(3, 102.0)]

def test_rows_ordered_by_id_and_malformed_rows_skipped(tmp_path):
    path = tmp_path / "readings.csv"
    path.write_text(
        "id,timestamp,pressure\n"
        "3,2025-01-01T01:00:00+00:00,103.0\n"
        "1,2025-01-01T00:00:00+00:00,101.0\n"
        "2,2025-01-01T00:30:00+00:00,not-a-number\n"
    )
    rows = ReadingStore(path).fetch_all()
    assert [r.id for r in rows] == [1, 3]

def test_missing_columns_raise(tmp_path):
    path = tmp_path / "readings.csv"
    path.write_text("id,value\n1,2.0\n")
    with pytest.raises(StoreError):
        ReadingStore(path).fetch_all()

def test_to_dict(tmp_path):
    reading = ReadingStore(tmp_path / "r.csv").insert(T0, 100.0)
    assert reading.to_dict() == {"id": 1, "timestamp": "2025-01-01T00:00:00+00:00", "pressure": 100.0}

def test_malformed_rows_dropped_without_chained_assignment(tmp_path):
    path = tmp_path / "readings.csv"
    path.write_text(
        "id,timestamp,pressure\n"
        "1,2025-01-01T00:00:00+00:00,101.0\n"
        "2,not-a-date,102.0\n"
        "x,2025-01-01T01:00:00+00:00,103.0\n"
        "4,2025-01-01T01:30:00+00:00,104.0\n"
    )
    chained = getattr(pd.errors, "SettingWithCopyWarning", None)  # gone under copy-on-write
    with warnings.catch_warnings():
        if chained is not None:
            warnings.simplefilter("error", chained)
        df = ReadingStore(path).fetch_frame()
    assert df["id"].tolist() == [1, 4]
    assert df["id"].dtype.kind == "i"

def test_observations_from_frame(tmp_path):
    store = ReadingStore(tmp_path / "readings.csv")
    for i in range(3):
        store.insert(T0 + timedelta(minutes=30 * i), 100.0 + i)
    assert observations_from_frame(store.fetch_frame()) == store.fetch_observations()
    assert observations_from_frame(pd.DataFrame(columns=["id", "timestamp", "pressure"])) == []
