"""Analysis package.

Design principle:
  - Ingest produces a finished :class:`~race_data_reporter.models.telemetry.TelemetryRun`.
  - Analysis reads it and derives tables and chart series; it never mutates it.
"""

from .summary import SUMMARY_COLUMNS, aligned_pairs, decimate, decimation_step, summary_frame

__all__ = [
    "SUMMARY_COLUMNS",
    "aligned_pairs",
    "decimate",
    "decimation_step",
    "summary_frame",
]
