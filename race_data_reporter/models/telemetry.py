from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple


@dataclass
class ChannelStats:
    """
    Running statistics for one telemetry channel.

    Notes
    - min/max start at +inf/-inf so an empty channel never reports a reading.
    - rows[i] is the index of the valid data row that produced values[i];
      it is what keeps a channel aligned with the reference series when
      some of its cells fail to parse.
    """
    sum: float = 0.0
    min: float = math.inf
    max: float = -math.inf
    values: List[float] = field(default_factory=list)
    rows: List[int] = field(default_factory=list)

    def add(self, value: float, row: int) -> None:
        self.values.append(value)
        self.rows.append(row)
        self.sum += value
        if value < self.min:
            self.min = value
        if value > self.max:
            self.max = value

    @property
    def count(self) -> int:
        return len(self.values)

    @property
    def mean(self) -> float:
        if not self.values:
            return 0.0
        return self.sum / float(len(self.values))


@dataclass(frozen=True)
class TelemetryRun:
    """
    In-memory representation of one telemetry export after aggregation.

    Notes
    - header is used verbatim: duplicated names share one ChannelStats entry.
    - reference has exactly one entry per valid data row (0.0 placeholder
      when the reference cell did not parse), so reference[k] belongs to
      valid row k.
    - channels includes the reference column itself; only the sentinel and
      unnamed columns are left out.
    """
    source_path: Path
    header: Tuple[str, ...]
    channels: Dict[str, ChannelStats]
    reference: Tuple[float, ...]
    sentinel: str = "Time"
    reference_name: str = "Corr Speed"
    n_rows: int = 0
    n_dropped_rows: int = 0
    n_sentinel_rows: int = 0
    warnings: Tuple[str, ...] = ()

    def channel_names(self) -> List[str]:
        """Qualifying column names in header order (duplicates kept)."""
        return [name for name in self.header if name and name != self.sentinel]

    def plotted_channels(self) -> List[str]:
        """Channels drawn against the reference (sentinel and reference excluded)."""
        return [name for name in self.channel_names() if name != self.reference_name]
