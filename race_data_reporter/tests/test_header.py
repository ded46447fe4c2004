"""Tests for header discovery and the repeated-header skip."""

from __future__ import annotations

import pytest

from race_data_reporter.ingest.header import (
    HeaderNotFoundError,
    is_header_row,
    locate_header,
    skip_sentinel_rows,
)


# -----------------------------------------------------------------------
# locate_header
# -----------------------------------------------------------------------


def test_header_after_banner() -> None:
    lines = iter(["METADATA", "Time,Speed,Corr Speed", "0.0,10,12", "0.1,11,13"])
    header, n_banner = locate_header(lines)
    assert header == ("Time", "Speed", "Corr Speed")
    assert n_banner == 1
    # the iterator continues right after the header
    assert next(lines) == "0.0,10,12"


def test_header_with_bom_and_quotes() -> None:
    lines = iter(['﻿"Format","MoTeC"', '﻿"Time","Corr Speed","RPM"'])
    header, n_banner = locate_header(lines)
    assert header == ("Time", "Corr Speed", "RPM")
    assert n_banner == 1


def test_first_field_unquoted_one_layer() -> None:
    # '"""Time"""' tokenizes to '"Time"' which unquotes to 'Time'
    header, _ = locate_header(iter(['"""Time""",Corr Speed']))
    assert header == ('"Time"', "Corr Speed")


def test_reference_column_must_match_exactly() -> None:
    lines = iter(["Time,Corr Speed (km/h)", "Time,corr speed", "Time,Corr Speed"])
    header, n_banner = locate_header(lines)
    assert n_banner == 2
    assert header == ("Time", "Corr Speed")


def test_sentinel_must_be_first() -> None:
    assert not is_header_row(["Speed", "Time", "Corr Speed"], sentinel="Time", reference="Corr Speed")
    assert is_header_row(["Time", "Speed", "Corr Speed"], sentinel="Time", reference="Corr Speed")
    assert not is_header_row([], sentinel="Time", reference="Corr Speed")


def test_header_not_found() -> None:
    with pytest.raises(HeaderNotFoundError):
        locate_header(iter(["Session,1", "Time,Speed", "0,1"]))


def test_header_not_found_is_value_error() -> None:
    with pytest.raises(ValueError):
        locate_header(iter([]))


# -----------------------------------------------------------------------
# skip_sentinel_rows
# -----------------------------------------------------------------------


HEADER = ("Time", "Speed", "Corr Speed")


def test_skip_repeated_header_rows() -> None:
    lines = iter(["Time,km/h,km/h", '"Time",src,src', "0.0,10,12", "0.1,11,13"])
    skip = skip_sentinel_rows(lines, HEADER)
    assert skip.n_sentinel_rows == 2
    assert skip.first_row == ["0.0", "10", "12"]
    assert next(lines) == "0.1,11,13"


def test_skip_consumes_rows_of_foreign_width() -> None:
    lines = iter(["Time,km/h", "", "0.0,10,12"])
    skip = skip_sentinel_rows(lines, HEADER)
    assert skip.n_sentinel_rows == 0
    assert skip.n_ignored_rows == 2
    assert skip.first_row == ["0.0", "10", "12"]


def test_skip_stream_ends() -> None:
    skip = skip_sentinel_rows(iter(["Time,a,b"]), HEADER)
    assert skip.first_row is None
    assert skip.n_sentinel_rows == 1
