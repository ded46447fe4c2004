"""Schema discovery for data-logger CSV exports.

Exports start with an arbitrary banner (title, session and metadata rows),
then the header row, then optionally one or more repeated header-like rows
(units, sources) whose first cell is still the sentinel name.

Both functions consume lines from a shared iterator, so the caller keeps
reading data rows from the same iterator afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from race_data_reporter.ingest.tokenizer import split_csv_line, strip_bom, unquote


class HeaderNotFoundError(ValueError):
    """No line qualifies as the schema header."""


@dataclass(frozen=True)
class SentinelSkip:
    """Outcome of :func:`skip_sentinel_rows`.

    first_row:
        Tokenized first data row (the row that ended the skip), or ``None``
        when the stream ended during the skip.
    n_sentinel_rows:
        Repeated header-like rows consumed.
    n_ignored_rows:
        Rows with a foreign field count consumed during the skip.
    """

    first_row: Optional[List[str]]
    n_sentinel_rows: int = 0
    n_ignored_rows: int = 0


def is_header_row(cells: List[str], *, sentinel: str, reference: str) -> bool:
    if not cells:
        return False
    return unquote(cells[0]) == sentinel and reference in cells


def locate_header(
    lines: Iterator[str],
    *,
    sentinel: str = "Time",
    reference: str = "Corr Speed",
) -> Tuple[Tuple[str, ...], int]:
    """
    Consume lines until the schema header is found.

    Returns (header, n_banner_lines) where n_banner_lines counts the lines
    discarded before the header. Raises HeaderNotFoundError when the stream
    is exhausted first.
    """
    n_banner = 0
    for raw in lines:
        cells = split_csv_line(strip_bom(raw))
        if is_header_row(cells, sentinel=sentinel, reference=reference):
            return tuple(cells), n_banner
        n_banner += 1
    raise HeaderNotFoundError(
        f"no row starting with {sentinel!r} and containing {reference!r} "
        f"found after {n_banner} lines"
    )


def skip_sentinel_rows(
    lines: Iterator[str],
    header: Tuple[str, ...],
    *,
    sentinel: str = "Time",
) -> SentinelSkip:
    """
    Consume the run of header-like rows that follows the header.

    Rows with a field count other than len(header) are consumed and ignored.
    Rows of the right width starting with the sentinel are consumed as
    repeated header rows. The first row of the right width whose first cell
    differs ends the skip; it is consumed here and returned to the caller,
    which decides whether to aggregate or drop it.
    """
    n_sentinel = 0
    n_ignored = 0
    width = len(header)
    for raw in lines:
        cells = split_csv_line(raw)
        if len(cells) != width:
            n_ignored += 1
            continue
        if unquote(cells[0]) != sentinel:
            return SentinelSkip(first_row=cells, n_sentinel_rows=n_sentinel, n_ignored_rows=n_ignored)
        n_sentinel += 1
    return SentinelSkip(first_row=None, n_sentinel_rows=n_sentinel, n_ignored_rows=n_ignored)
