"""Tests for the single-line CSV tokenizer and number parsing."""

from __future__ import annotations

import pytest

from race_data_reporter.ingest.reader import parse_number
from race_data_reporter.ingest.tokenizer import split_csv_line, strip_bom, unquote


# -----------------------------------------------------------------------
# split_csv_line
# -----------------------------------------------------------------------


def test_quoted_field_keeps_comma() -> None:
    assert split_csv_line('a,"b,c",d') == ["a", "b,c", "d"]


def test_doubled_quote_is_literal() -> None:
    assert split_csv_line('"a""b"') == ['a"b']


def test_no_comma_yields_single_trimmed_field() -> None:
    assert split_csv_line("  Lap Report \r\n") == ["Lap Report"]


def test_fields_are_trimmed() -> None:
    assert split_csv_line(" x ,\ty\t,\f z\v") == ["x", "y", "z"]


def test_quoted_content_is_trimmed_too() -> None:
    assert split_csv_line('" Corr Speed ",1') == ["Corr Speed", "1"]


def test_unterminated_quote_runs_to_end_of_line() -> None:
    assert split_csv_line('a,"b,c') == ["a", "b,c"]


def test_empty_and_trailing_fields() -> None:
    assert split_csv_line("") == [""]
    assert split_csv_line("a,") == ["a", ""]
    assert split_csv_line(",,") == ["", "", ""]


# -----------------------------------------------------------------------
# strip_bom / unquote
# -----------------------------------------------------------------------


def test_strip_bom() -> None:
    assert strip_bom("﻿Time,Corr Speed") == "Time,Corr Speed"
    assert strip_bom("Time") == "Time"


def test_unquote_one_layer_only() -> None:
    assert unquote('"Time"') == "Time"
    assert unquote('""Time""') == '"Time"'
    assert unquote("Time") == "Time"
    assert unquote('"') == '"'


# -----------------------------------------------------------------------
# parse_number
# -----------------------------------------------------------------------


@pytest.mark.parametrize(
    "text, expected",
    [("1.5", 1.5), ("-2", -2.0), ("+3", 3.0), (".5", 0.5), ("5.", 5.0), ("1e3", 1000.0), ("-2.5E-1", -0.25)],
)
def test_parse_number_accepts_decimal_text(text: str, expected: float) -> None:
    assert parse_number(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "abc", "1,5", "12abc", "nan", "inf", "1e999", "1_000", "--1", ".", "١٢", "１.５"])
def test_parse_number_rejects_malformed_text(text: str) -> None:
    assert parse_number(text) is None
