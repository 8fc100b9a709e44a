"""
Sheets API payload contract.

Mirrors the subset of the `spreadsheets.get` (includeGridData=true) response that a
snapshot needs. Every field is optional, unknown fields are ignored, and the payload
is validated once before being converted into a `SnapshotGrid`.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from ..model import BorderEdge, Borders, CellData, CellFormat, MergeRegion, Rgb, SnapshotGrid


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ApiColor(_ApiModel):
    # The API omits zero-valued components, so a present-but-empty color is black.
    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0


class ApiColorStyle(_ApiModel):
    rgb_color: ApiColor | None = Field(default=None, alias="rgbColor")


class ApiBorder(_ApiModel):
    style: str | None = None
    color: ApiColor | None = None
    color_style: ApiColorStyle | None = Field(default=None, alias="colorStyle")


class ApiBorders(_ApiModel):
    top: ApiBorder | None = None
    right: ApiBorder | None = None
    bottom: ApiBorder | None = None
    left: ApiBorder | None = None


class ApiTextFormat(_ApiModel):
    foreground_color: ApiColor | None = Field(default=None, alias="foregroundColor")
    foreground_color_style: ApiColorStyle | None = Field(default=None, alias="foregroundColorStyle")
    font_family: str | None = Field(default=None, alias="fontFamily")
    font_size: float | None = Field(default=None, alias="fontSize")
    bold: bool | None = None
    italic: bool | None = None
    strikethrough: bool | None = None
    underline: bool | None = None


class ApiCellFormat(_ApiModel):
    background_color: ApiColor | None = Field(default=None, alias="backgroundColor")
    background_color_style: ApiColorStyle | None = Field(default=None, alias="backgroundColorStyle")
    borders: ApiBorders | None = None
    horizontal_alignment: str | None = Field(default=None, alias="horizontalAlignment")
    vertical_alignment: str | None = Field(default=None, alias="verticalAlignment")
    wrap_strategy: str | None = Field(default=None, alias="wrapStrategy")
    text_format: ApiTextFormat | None = Field(default=None, alias="textFormat")


class ApiErrorValue(_ApiModel):
    type: str | None = None
    message: str | None = None


class ApiExtendedValue(_ApiModel):
    string_value: str | None = Field(default=None, alias="stringValue")
    number_value: float | None = Field(default=None, alias="numberValue")
    bool_value: bool | None = Field(default=None, alias="boolValue")
    error_value: ApiErrorValue | None = Field(default=None, alias="errorValue")


class ApiCellData(_ApiModel):
    formatted_value: str | None = Field(default=None, alias="formattedValue")
    effective_value: ApiExtendedValue | None = Field(default=None, alias="effectiveValue")
    hyperlink: str | None = None
    effective_format: ApiCellFormat | None = Field(default=None, alias="effectiveFormat")


class ApiRowData(_ApiModel):
    values: list[ApiCellData] = Field(default_factory=list)


class ApiDimensionProperties(_ApiModel):
    pixel_size: int | None = Field(default=None, alias="pixelSize")


class ApiGridData(_ApiModel):
    start_row: int = Field(default=0, alias="startRow")
    start_column: int = Field(default=0, alias="startColumn")
    row_data: list[ApiRowData] = Field(default_factory=list, alias="rowData")
    row_metadata: list[ApiDimensionProperties] = Field(default_factory=list, alias="rowMetadata")
    column_metadata: list[ApiDimensionProperties] = Field(default_factory=list, alias="columnMetadata")


class ApiGridRange(_ApiModel):
    start_row_index: int = Field(default=0, alias="startRowIndex")
    end_row_index: int = Field(default=0, alias="endRowIndex")
    start_column_index: int = Field(default=0, alias="startColumnIndex")
    end_column_index: int = Field(default=0, alias="endColumnIndex")


class ApiSheet(_ApiModel):
    data: list[ApiGridData] = Field(default_factory=list)
    merges: list[ApiGridRange] = Field(default_factory=list)


class ApiSpreadsheet(_ApiModel):
    sheets: list[ApiSheet] = Field(default_factory=list)


def parse_payload(payload: Mapping[str, Any]) -> ApiSpreadsheet:
    return ApiSpreadsheet.model_validate(payload)


def to_snapshot_grid(spreadsheet: ApiSpreadsheet) -> SnapshotGrid | None:
    """Convert a validated payload into a grid, or None when it carries no cells."""
    if not spreadsheet.sheets:
        return None
    sheet = spreadsheet.sheets[0]
    if not sheet.data:
        return None
    data = sheet.data[0]
    if not data.row_data:
        return None

    col_count = len(data.row_data[0].values)
    if col_count == 0:
        return None

    rows: list[list[CellData]] = []
    for row in data.row_data:
        rows.append([_cell(value) for value in row.values[:col_count]])

    # Merges are in sheet coordinates; the grid starts at (startRow, startColumn).
    merges = [
        MergeRegion(
            start_row=m.start_row_index - data.start_row,
            end_row=m.end_row_index - data.start_row,
            start_col=m.start_column_index - data.start_column,
            end_col=m.end_column_index - data.start_column,
        )
        for m in sheet.merges
    ]

    return SnapshotGrid(
        rows=rows,
        row_sizes=[meta.pixel_size for meta in data.row_metadata],
        col_sizes=[meta.pixel_size for meta in data.column_metadata],
        merges=merges,
    )


def display_value(cell: ApiCellData) -> str:
    if cell.formatted_value is not None:
        return cell.formatted_value

    value = cell.effective_value
    if value is None:
        return ""
    if value.string_value is not None:
        return value.string_value
    if value.number_value is not None:
        number = value.number_value
        if number.is_integer():
            return str(int(number))
        return repr(number)
    if value.bool_value is not None:
        return "TRUE" if value.bool_value else "FALSE"
    if value.error_value is not None:
        return value.error_value.message or value.error_value.type or ""
    return ""


def _cell(raw: ApiCellData) -> CellData:
    fmt = _cell_format(raw.effective_format) if raw.effective_format is not None else None
    return CellData(value=display_value(raw), hyperlink=raw.hyperlink or None, fmt=fmt)


def _cell_format(raw: ApiCellFormat) -> CellFormat:
    text = raw.text_format or ApiTextFormat()
    return CellFormat(
        background=_color(raw.background_color, raw.background_color_style),
        foreground=_color(text.foreground_color, text.foreground_color_style),
        bold=text.bold,
        italic=text.italic,
        underline=text.underline,
        strikethrough=text.strikethrough,
        font_size=text.font_size,
        font_family=text.font_family,
        borders=_borders(raw.borders) if raw.borders is not None else None,
        horizontal_alignment=raw.horizontal_alignment,
        vertical_alignment=raw.vertical_alignment,
        wrap_strategy=raw.wrap_strategy,
    )


def _borders(raw: ApiBorders) -> Borders:
    return Borders(
        top=_edge(raw.top),
        right=_edge(raw.right),
        bottom=_edge(raw.bottom),
        left=_edge(raw.left),
    )


def _edge(raw: ApiBorder | None) -> BorderEdge | None:
    if raw is None:
        return None
    return BorderEdge(style=raw.style, color=_color(raw.color, raw.color_style))


def _color(color: ApiColor | None, style: ApiColorStyle | None) -> Rgb | None:
    if color is None and style is not None:
        color = style.rgb_color
    if color is None:
        return None
    return Rgb(red=color.red, green=color.green, blue=color.blue)
