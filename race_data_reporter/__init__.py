"""Race Data Reporter -- static HTML reports from racing data-logger CSV exports.

This package provides tools for:
- Tokenizing logger CSV lines (quoted fields, escaped quotes, lenient policy)
- Locating the schema header behind the logger's banner rows
- Skipping repeated header-like rows (units, sources)
- Aggregating every channel in a single pass (sum, min, max, values)
- Rendering a statistics table and per-channel scatter charts vs 'Corr Speed'

Key principles:
- One forward pass over the export; nothing is re-read or mutated afterwards
- Malformed rows and cells degrade gracefully; only a missing file or a
  missing header aborts the run
- Chart series are aligned by source row, not by position
- Downsampling uses decimation only (every k-th point)

Main subpackages:
- ingest: tokenizer, header discovery, TelemetryCsvReader
- models: ChannelStats, TelemetryRun
- analysis: summary table and chart series
- report: HTML renderer
"""

__all__ = []
