"""Command-line entry point: CSV export in, static HTML report out.

Exit codes: 0 on success, 1 when the CSV cannot be opened, when no header row
is found, or when the report cannot be written.
"""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from race_data_reporter.ingest.header import HeaderNotFoundError
from race_data_reporter.ingest.reader import DEFAULT_CSV_FILENAME, TelemetryCsvReader, TelemetryReaderConfig
from race_data_reporter.report.html_report import DEFAULT_MAX_POINTS, DEFAULT_REPORT_FILENAME, write_report


def _print_warnings(warnings: Sequence[str]) -> None:
    for msg in warnings:
        if msg.startswith("WARNING:"):
            print(f"[warn] {msg[len('WARNING:'):].strip()}")
        else:
            print(f"[info] {msg}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="race-data-reporter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Build a static HTML report from a racing data-logger CSV export.

            The export may start with banner lines; the header row must start with
            'Time' and contain a 'Corr Speed' column. The report has a statistics
            table and one scatter chart per channel against 'Corr Speed'.
            """
        ),
    )
    p.add_argument("csv", nargs="?", default=DEFAULT_CSV_FILENAME, help=f"CSV export (default: {DEFAULT_CSV_FILENAME!r})")
    p.add_argument("--out", default=DEFAULT_REPORT_FILENAME, help=f"Output HTML file (default: {DEFAULT_REPORT_FILENAME})")
    p.add_argument(
        "--max-points",
        type=int,
        default=DEFAULT_MAX_POINTS,
        help="Maximum points per chart; longer series are decimated (default: %(default)s)",
    )
    p.add_argument(
        "--keep-first-data-row",
        action="store_true",
        help="Aggregate the first data row after the header block (the legacy tool drops it)",
    )
    p.add_argument("-q", "--quiet", action="store_true", help="Do not print ingest diagnostics")

    ns = p.parse_args(list(argv) if argv is not None else None)
    if ns.max_points <= 0:
        p.error("--max-points must be > 0")

    reader = TelemetryCsvReader(TelemetryReaderConfig(keep_first_data_row=bool(ns.keep_first_data_row)))
    try:
        run = reader.read(ns.csv)
    except OSError:
        print(f"Erro: não foi possível abrir o arquivo CSV '{ns.csv}'.", file=sys.stderr)
        return 1
    except HeaderNotFoundError:
        print("Erro: cabeçalho não encontrado no arquivo CSV.", file=sys.stderr)
        return 1

    if not ns.quiet:
        _print_warnings(run.warnings)

    try:
        out = write_report(run, ns.out, max_points=ns.max_points)
    except OSError as e:
        print(f"Erro: não foi possível gravar o relatório '{ns.out}' ({e.strerror or e}).", file=sys.stderr)
        return 1

    if not ns.quiet:
        print(f"[info] wrote: {out}")
    print("Relatório gerado com sucesso.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
