#!/usr/bin/env python3
"""
Synthetic pressure sensor.

Writes one reading per tick to the reading store. Simulated time advances by
a fixed step each tick so a day-long cycle shows up after a few seconds.
"""

import argparse
import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Optional

import numpy as np

from config import READINGS_PATH, SAMPLE_INTERVAL_SEC, SIM_STEP_MINUTES
from data_io import ReadingStore, StoreError

logger = logging.getLogger(__name__)

BASELINE = 100.0
DAILY_AMPLITUDE = 10.0
NOISE_HALF_WIDTH = 2.0


def synth(ts: datetime, rng: np.random.Generator) -> float:
    """Baseline plus a daily sine wave plus uniform noise in [-2, 2)."""
    minute = ts.hour * 60 + ts.minute
    daily = DAILY_AMPLITUDE * np.sin(2 * np.pi * minute / 1440)
    return float(BASELINE + daily + rng.uniform(-NOISE_HALF_WIDTH, NOISE_HALF_WIDTH))


def run(store: ReadingStore, interval: float = SAMPLE_INTERVAL_SEC,
        step_minutes: int = SIM_STEP_MINUTES, count: Optional[int] = None,
        seed: Optional[int] = None, start: Optional[datetime] = None,
        sleep=time.sleep) -> int:
    """
    Insert readings until ``count`` is reached (forever when None).

    Failed inserts are logged and skipped. Returns the number of readings
    written.
    """
    rng = np.random.default_rng(seed)
    sim_time = start or datetime.now(timezone.utc)
    step = timedelta(minutes=step_minutes)
    written = 0
    ticks = 0

    while count is None or ticks < count:
        try:
            store.insert(sim_time, synth(sim_time, rng))
            written += 1
        except StoreError as e:
            logger.error("insert: %s", e)
        sim_time += step
        ticks += 1
        if count is None or ticks < count:
            sleep(interval)

    return written


def main(argv=None):
    parser = argparse.ArgumentParser(description="Synthetic pressure sensor")
    parser.add_argument("--path", type=str, default=str(READINGS_PATH), help="Readings CSV file")
    parser.add_argument("--interval", type=float, default=SAMPLE_INTERVAL_SEC, help="Seconds between readings")
    parser.add_argument("--step-minutes", type=int, default=SIM_STEP_MINUTES, help="Simulated minutes per reading")
    parser.add_argument("--count", type=int, default=None, help="Stop after this many readings")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the noise")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    store = ReadingStore(args.path)
    logger.info("Writing readings to %s every %.2fs", store.path, args.interval)
    try:
        written = run(store, interval=args.interval, step_minutes=args.step_minutes,
                      count=args.count, seed=args.seed)
    except KeyboardInterrupt:
        logger.info("Stopped")
        return
    logger.info("Wrote %d readings", written)


if __name__ == "__main__":
    main()
