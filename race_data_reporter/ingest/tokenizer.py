"""Single-line CSV tokenizer for data-logger exports.

Policy (lenient, never raises):
  - fields are comma separated; a double quote toggles quoting
  - inside quotes, ``""`` is one literal ``"`` and commas are literal
  - an unterminated quote simply runs to the end of the line
  - every field is trimmed of ASCII whitespace after extraction
  - multi-line quoted fields are not supported
"""

from __future__ import annotations

from typing import List

_WHITESPACE = " \t\n\r\f\v"
_BOM = "﻿"


def split_csv_line(line: str) -> List[str]:
    """Split one raw line into trimmed fields.

    A line without commas yields a single field (the whole trimmed line).
    """
    fields: List[str] = []
    field: List[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        c = line[i]
        if c == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                field.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif c == "," and not in_quotes:
            fields.append("".join(field).strip(_WHITESPACE))
            field = []
        else:
            field.append(c)
        i += 1
    fields.append("".join(field).strip(_WHITESPACE))
    return fields


def strip_bom(line: str) -> str:
    if line.startswith(_BOM):
        return line[len(_BOM):]
    return line


def unquote(cell: str) -> str:
    """Remove one layer of surrounding literal double quotes, if present."""
    if len(cell) >= 2 and cell[0] == '"' and cell[-1] == '"':
        return cell[1:-1]
    return cell
