from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_ROW_HEIGHT = 21
DEFAULT_COL_WIDTH = 100


@dataclass(slots=True)
class RenderOptions:
    default_row_height: int = DEFAULT_ROW_HEIGHT
    default_col_width: int = DEFAULT_COL_WIDTH
    debug: bool = False


@dataclass(slots=True, frozen=True)
class Rgb:
    """Color with 0.0-1.0 float components."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0


@dataclass(slots=True)
class BorderEdge:
    style: str | None = None
    color: Rgb | None = None


@dataclass(slots=True)
class Borders:
    top: BorderEdge | None = None
    right: BorderEdge | None = None
    bottom: BorderEdge | None = None
    left: BorderEdge | None = None

    def is_empty(self) -> bool:
        return self.top is None and self.right is None and self.bottom is None and self.left is None


@dataclass(slots=True)
class CellFormat:
    background: Rgb | None = None
    foreground: Rgb | None = None
    bold: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    strikethrough: bool | None = None
    font_size: float | None = None
    font_family: str | None = None
    borders: Borders | None = None
    horizontal_alignment: str | None = None
    vertical_alignment: str | None = None
    wrap_strategy: str | None = None


@dataclass(slots=True)
class CellData:
    value: str = ""
    hyperlink: str | None = None
    fmt: CellFormat | None = None


@dataclass(slots=True, frozen=True)
class MergeRegion:
    """0-based rectangle, end-exclusive on both axes."""

    start_row: int
    end_row: int
    start_col: int
    end_col: int


@dataclass(slots=True, frozen=True)
class MergeAnchor:
    rowspan: int
    colspan: int


@dataclass(slots=True)
class MergePlan:
    suppressed: list[list[bool]]
    anchors: list[list[MergeAnchor | None]]


@dataclass(slots=True)
class SizeMap:
    row_heights: list[int]
    col_widths: list[int]


@dataclass(slots=True)
class SnapshotGrid:
    rows: list[list[CellData]] = field(default_factory=list)
    row_sizes: list[int | None] = field(default_factory=list)
    col_sizes: list[int | None] = field(default_factory=list)
    merges: list[MergeRegion] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def col_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def cell(self, row: int, col: int) -> CellData:
        cells = self.rows[row]
        if col < len(cells):
            return cells[col]
        return CellData()


@dataclass(slots=True)
class RangeRef:
    """A1 range, 1-based and inclusive; `sheet` is None for unqualified refs."""

    ref: str
    start_row: int
    start_col: int
    end_row: int
    end_col: int
    sheet: str | None = None
