from __future__ import annotations

import re

from ..model import RangeRef

CELL_RE = re.compile(r"^\$?([A-Z]+)\$?(\d+)$")
RANGE_RE = re.compile(r"^\$?([A-Z]+)\$?(\d+):\$?([A-Z]+)\$?(\d+)$")
SHEET_RANGE_RE = re.compile(r"^(?:'((?:[^']|'')+)'|([^!]+))!(.+)$")
PLAIN_SHEET_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def col_to_index(col: str) -> int:
    value = 0
    for char in col.upper():
        value = value * 26 + (ord(char) - 64)
    return value


def index_to_col(index: int) -> str:
    if index < 1:
        raise ValueError("Column index must be >= 1")
    result: list[str] = []
    value = index
    while value > 0:
        value, rem = divmod(value - 1, 26)
        result.append(chr(65 + rem))
    return "".join(reversed(result))


def rowcol_to_coord(row: int, col: int) -> str:
    if row < 1 or col < 1:
        raise ValueError("row/col must be >= 1")
    return f"{index_to_col(col)}{row}"


def parse_range_ref(ref: str) -> RangeRef:
    """Parse `A1:C3`, `B2` or `'Sheet 1'!A1:C3` into a bounded range.

    Open-ended references (`A:C`, whole sheets) are rejected: a snapshot always
    covers exactly one bounded rectangle.
    """
    raw = ref.strip()
    sheet: str | None = None
    sheet_match = SHEET_RANGE_RE.match(raw)
    if sheet_match:
        sheet = (sheet_match.group(1) or "").replace("''", "'") or sheet_match.group(2)
        raw = sheet_match.group(3)

    normalized = raw.replace("$", "").upper()
    range_match = RANGE_RE.match(normalized)
    if range_match:
        sc = col_to_index(range_match.group(1))
        sr = int(range_match.group(2))
        ec = col_to_index(range_match.group(3))
        er = int(range_match.group(4))
        if min(sr, er) < 1:
            raise ValueError(f"Invalid range reference: {ref}")
        return RangeRef(
            ref=normalized,
            start_row=min(sr, er),
            start_col=min(sc, ec),
            end_row=max(sr, er),
            end_col=max(sc, ec),
            sheet=sheet,
        )

    cell_match = CELL_RE.match(normalized)
    if not cell_match or int(cell_match.group(2)) < 1:
        raise ValueError(f"Invalid range reference: {ref}")

    col = col_to_index(cell_match.group(1))
    row = int(cell_match.group(2))
    return RangeRef(ref=normalized, start_row=row, start_col=col, end_row=row, end_col=col, sheet=sheet)


def quote_sheet_name(name: str) -> str:
    if PLAIN_SHEET_RE.match(name):
        return name
    escaped = name.replace("'", "''")
    return f"'{escaped}'"


def to_a1(rng: RangeRef) -> str:
    start = rowcol_to_coord(rng.start_row, rng.start_col)
    end = rowcol_to_coord(rng.end_row, rng.end_col)
    body = start if start == end else f"{start}:{end}"
    if rng.sheet:
        return f"{quote_sheet_name(rng.sheet)}!{body}"
    return body
