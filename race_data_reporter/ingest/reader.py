from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple
import math
import re

from race_data_reporter.ingest.header import locate_header, skip_sentinel_rows
from race_data_reporter.ingest.tokenizer import split_csv_line
from race_data_reporter.models.telemetry import ChannelStats, TelemetryRun


DEFAULT_CSV_FILENAME = "LMP3 Ref_Barcelona_v2.csv"

_NUMBER = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")


def parse_number(text: str) -> Optional[float]:
    """
    Parse a decimal number cell; return None when the cell is not a number.

    Accepted: optional sign, digits with optional fraction (or '.5'), optional
    exponent. Overflowing values (non-finite after conversion) are rejected.
    """
    if not _NUMBER.match(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


@dataclass(frozen=True)
class TelemetryReaderConfig:
    """
    Reader configuration for data-logger CSV exports.

    sentinel:
      Name of the first header cell (time column). It marks the header row and
      the repeated header-like rows after it, and is never aggregated.
    reference:
      Column every channel is plotted against. The header row must contain it.
    keep_first_data_row:
      - False: the row that ends the repeated-header run is dropped
               (matches reports produced by the legacy tool).
      - True: that row is aggregated like every other data row.
    encoding:
      Text encoding of the export; undecodable bytes are replaced.
    """
    sentinel: str = "Time"
    reference: str = "Corr Speed"
    keep_first_data_row: bool = False
    encoding: str = "utf-8"


class _Aggregator:
    """Single-pass accumulation over tokenized data rows."""

    def __init__(self, header: Tuple[str, ...], *, sentinel: str, reference: str):
        self.header = header
        self.channels: Dict[str, ChannelStats] = {}
        self.columns: List[Tuple[int, str]] = []
        for idx, name in enumerate(header):
            if name == sentinel or not name:
                continue
            self.columns.append((idx, name))
            self.channels.setdefault(name, ChannelStats())
        self.ref_idx: Optional[int] = header.index(reference) if reference in header else None
        self.reference: List[float] = []
        self.n_rows = 0
        self.n_dropped = 0
        self.n_ref_placeholders = 0

    def feed(self, cells: List[str]) -> None:
        if len(cells) != len(self.header):
            self.n_dropped += 1
            return
        row = self.n_rows
        for idx, name in self.columns:
            text = cells[idx]
            if not text:
                continue
            value = parse_number(text)
            if value is not None:
                self.channels[name].add(value, row)

        if self.ref_idx is not None:
            speed = parse_number(cells[self.ref_idx])
            if speed is None:
                self.n_ref_placeholders += 1
                speed = 0.0
            self.reference.append(speed)
        self.n_rows += 1


_REPLACEMENT_CHAR = "\ufffd"


class _LineSource:
    """Strips line endings and counts lines carrying decode replacement characters."""

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self.n_replaced = 0

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        line = next(self._lines).rstrip("\r\n")
        if _REPLACEMENT_CHAR in line:
            self.n_replaced += 1
        return line


class TelemetryCsvReader:
    """
    Reads one data-logger CSV export into a :class:`TelemetryRun`.

    Contract:
      - banner lines before the header are discarded
      - the header must start with the sentinel and contain the reference column
      - rows whose field count differs from the header are dropped whole
      - unparseable cells are dropped individually; the reference column
        records 0.0 instead so it keeps one entry per valid row
    """

    def __init__(self, config: Optional[TelemetryReaderConfig] = None):
        self.config = config or TelemetryReaderConfig()

    def read(self, file_path: str | Path = DEFAULT_CSV_FILENAME) -> TelemetryRun:
        path = Path(file_path).expanduser()
        with path.open("r", encoding=self.config.encoding, errors="replace") as fh:
            return self.read_lines(fh, source_path=path)

    def read_lines(self, lines: Iterable[str], *, source_path: str | Path = "<stream>") -> TelemetryRun:
        cfg = self.config
        it = _LineSource(lines)
        warnings: List[str] = []

        header, n_banner = locate_header(it, sentinel=cfg.sentinel, reference=cfg.reference)
        warnings.append(f"header found after {n_banner} banner lines: {len(header)} columns")

        skip = skip_sentinel_rows(it, header, sentinel=cfg.sentinel)
        if skip.n_sentinel_rows:
            warnings.append(f"skipped {skip.n_sentinel_rows} repeated header rows")
        if skip.n_ignored_rows:
            warnings.append(f"ignored {skip.n_ignored_rows} rows with a foreign field count before the data")

        agg = _Aggregator(header, sentinel=cfg.sentinel, reference=cfg.reference)
        if skip.first_row is not None:
            if cfg.keep_first_data_row:
                agg.feed(skip.first_row)
            else:
                warnings.append("WARNING: dropped the first data row after the header block (legacy behaviour)")

        for line in it:
            if not line:
                continue
            agg.feed(split_csv_line(line))

        if it.n_replaced:
            warnings.append(
                f"WARNING: {it.n_replaced} lines contained bytes not valid in {cfg.encoding}; "
                "replaced with U+FFFD (check the export encoding)"
            )
        if agg.n_dropped:
            warnings.append(f"WARNING: dropped {agg.n_dropped} rows whose field count differs from the header ({len(header)})")
        if agg.n_ref_placeholders:
            warnings.append(
                f"WARNING: {agg.n_ref_placeholders} '{cfg.reference}' cells did not parse; recorded as 0.0"
            )
        empty = [name for name, st in agg.channels.items() if st.count == 0]
        if empty:
            warnings.append(f"WARNING: channels without readings: {', '.join(empty)}")
        warnings.append(f"aggregated {agg.n_rows} data rows into {len(agg.channels)} channels")

        return TelemetryRun(
            source_path=Path(source_path),
            header=header,
            channels=agg.channels,
            reference=tuple(agg.reference),
            sentinel=cfg.sentinel,
            reference_name=cfg.reference,
            n_rows=agg.n_rows,
            n_dropped_rows=agg.n_dropped,
            n_sentinel_rows=skip.n_sentinel_rows,
            warnings=tuple(warnings),
        )
