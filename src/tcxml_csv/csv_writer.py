"""Serialization of test cases into the import CSV.

The output is UTF-8 with a leading byte-order mark, ``;``-delimited, with a
fixed 16-column header.  Fields are quoted only when they contain ``;``, a
newline or ``"``; embedded quotes are doubled.
"""

from __future__ import annotations

import io
from collections.abc import Iterable, Sequence

from tcxml_csv.models import TestCase

BOM = "\ufeff"
DELIMITER = ";"

CSV_HEADER: tuple[str, ...] = (
    "name",
    "full_name",
    "description",
    "precondition",
    "expected_result",
    "scenario",
    "tag",
    "link",
    "parameter",
    "Lead",
    "Owner",
    "Suite",
    "Component",
    "Story",
    "Feature",
    "Epic",
)

_SPECIAL_CHARS = (DELIMITER, "\n", '"')


def escape_field(value: str | None) -> str:
    if value is None:
        return ""
    if any(ch in value for ch in _SPECIAL_CHARS):
        return '"' + value.replace('"', '""') + '"'
    return value


def format_row(fields: Sequence[str | None]) -> str:
    return DELIMITER.join(escape_field(field) for field in fields)


def write_csv(
    test_cases: Iterable[TestCase],
    line_terminator: str = "\n",
    json_indent: int = 2,
) -> bytes:
    """Render *test_cases* as BOM-prefixed UTF-8 CSV bytes."""
    buffer = io.StringIO()
    buffer.write(BOM)
    buffer.write(DELIMITER.join(CSV_HEADER))
    buffer.write(line_terminator)
    for test_case in test_cases:
        buffer.write(format_row(test_case.to_row(json_indent)))
        buffer.write(line_terminator)
    return buffer.getvalue().encode("utf-8")
