"""Summary statistics and chart series for an aggregated telemetry run.

Functions
---------
summary_frame
    One row per channel (header order) with count, mean, min and max.
aligned_pairs
    Channel values paired with the reference value of the same source row.
decimation_step, decimate
    Fixed-stride downsampling (keep every k-th point, no interpolation).
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np
import pandas as pd

from race_data_reporter.models.telemetry import TelemetryRun


SUMMARY_COLUMNS = ["channel", "count", "mean", "min", "max"]


def summary_frame(run: TelemetryRun) -> pd.DataFrame:
    """Build the statistics table.

    Channels with no readings report ``mean=0.0`` and keep the ``+inf``/``-inf``
    min/max sentinels; renderers decide how to show those.
    """
    records = []
    for name in run.channel_names():
        st = run.channels[name]
        records.append(
            {
                "channel": name,
                "count": int(st.count),
                "mean": float(st.mean),
                "min": float(st.min),
                "max": float(st.max),
            }
        )
    return pd.DataFrame.from_records(records, columns=SUMMARY_COLUMNS)


def aligned_pairs(run: TelemetryRun, name: str) -> Tuple[np.ndarray, np.ndarray]:
    """
    Return (x, y): reference values and channel values from the same rows.

    Alignment uses the row index stored with every channel value, so a cell
    that failed to parse in one column never shifts the other series.
    """
    st = run.channels[name]
    y = np.asarray(st.values, dtype=np.float64)
    rows = np.asarray(st.rows, dtype=np.int64)
    ref = np.asarray(run.reference, dtype=np.float64)
    if ref.size == 0 or rows.size == 0:
        return np.empty(0, dtype=np.float64), np.empty(0, dtype=np.float64)
    ok = rows < ref.size
    return ref[rows[ok]], y[ok]


def decimation_step(n: int, max_points: int) -> int:
    n = int(n)
    max_points = int(max_points)
    if max_points <= 0:
        raise ValueError("max_points must be > 0")
    if n <= max_points:
        return 1
    return int(math.ceil(n / float(max_points)))


def decimate(x: np.ndarray, k: int) -> np.ndarray:
    k = int(k)
    if k <= 1:
        return x
    return x[::k]
