from __future__ import annotations

import json
import re
from typing import Any

import httpx

TD_RE = re.compile(r"<td\b([^>]*)>(.*?)</td>", re.S)
TR_RE = re.compile(r"<tr\b[^>]*>(.*?)</tr>", re.S)


def cell(value: str | None = None, *, hyperlink: str | None = None, fmt: dict | None = None, **extra: Any) -> dict:
    out: dict[str, Any] = dict(extra)
    if value is not None:
        out["formattedValue"] = value
    if hyperlink is not None:
        out["hyperlink"] = hyperlink
    if fmt is not None:
        out["effectiveFormat"] = fmt
    return out


def payload(
    rows: list[list[dict]],
    *,
    merges: list[tuple[int, int, int, int]] | None = None,
    row_sizes: list[int | None] | None = None,
    col_sizes: list[int | None] | None = None,
    start_row: int = 0,
    start_col: int = 0,
) -> dict:
    data: dict[str, Any] = {"rowData": [{"values": values} for values in rows]}
    if start_row:
        data["startRow"] = start_row
    if start_col:
        data["startColumn"] = start_col
    if row_sizes is not None:
        data["rowMetadata"] = [{} if size is None else {"pixelSize": size} for size in row_sizes]
    if col_sizes is not None:
        data["columnMetadata"] = [{} if size is None else {"pixelSize": size} for size in col_sizes]

    sheet: dict[str, Any] = {"data": [data]}
    if merges:
        sheet["merges"] = [
            {"startRowIndex": sr, "endRowIndex": er, "startColumnIndex": sc, "endColumnIndex": ec}
            for sr, er, sc, ec in merges
        ]
    return {"sheets": [sheet]}


def table_rows(html: str) -> list[list[tuple[str, str]]]:
    """Split rendered markup into rows of `(td attributes, td content)`."""
    return [TD_RE.findall(row) for row in TR_RE.findall(html)]


def mock_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def json_response(body: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(body).encode("utf-8"), headers={"Content-Type": "application/json"})
