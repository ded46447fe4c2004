"""Ingest package - CSV export parsing and channel aggregation.

This package handles:
- Tokenizing single CSV lines (quoted fields, escaped quotes)
- Locating the schema header behind the logger's banner rows
- Skipping repeated header-like rows (units, sources)
- Streaming data rows into per-channel statistics

Key classes:
- TelemetryCsvReader: reads one export and returns a TelemetryRun
- TelemetryReaderConfig: sentinel/reference names and skip policy

Design principle:
- One forward pass over the file, nothing is re-read
- Malformed rows and cells degrade gracefully; only a missing file or a
  missing header is fatal
"""

from .header import HeaderNotFoundError, locate_header, skip_sentinel_rows
from .reader import DEFAULT_CSV_FILENAME, TelemetryCsvReader, TelemetryReaderConfig, parse_number
from .tokenizer import split_csv_line, strip_bom, unquote

__all__ = [
    "DEFAULT_CSV_FILENAME",
    "HeaderNotFoundError",
    "TelemetryCsvReader",
    "TelemetryReaderConfig",
    "locate_header",
    "parse_number",
    "skip_sentinel_rows",
    "split_csv_line",
    "strip_bom",
    "unquote",
]
