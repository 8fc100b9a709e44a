from __future__ import annotations

from typing import Sequence

from .model import MergeAnchor, MergePlan, MergeRegion, SizeMap


def plan_merges(row_count: int, col_count: int, regions: Sequence[MergeRegion]) -> MergePlan:
    suppressed = [[False] * col_count for _ in range(row_count)]
    anchors: list[list[MergeAnchor | None]] = [[None] * col_count for _ in range(row_count)]

    # Regions are applied in input order; an overlapping later region overwrites
    # whatever an earlier one left in the contested cells.
    for region in regions:
        if not _in_bounds(region, row_count, col_count):
            continue
        top, left = region.start_row, region.start_col
        anchors[top][left] = MergeAnchor(
            rowspan=region.end_row - region.start_row,
            colspan=region.end_col - region.start_col,
        )
        suppressed[top][left] = False
        for row in range(region.start_row, region.end_row):
            for col in range(region.start_col, region.end_col):
                if (row, col) == (top, left):
                    continue
                suppressed[row][col] = True
                anchors[row][col] = None

    return MergePlan(suppressed=suppressed, anchors=anchors)


def _in_bounds(region: MergeRegion, row_count: int, col_count: int) -> bool:
    if region.end_row <= region.start_row or region.end_col <= region.start_col:
        return False
    if region.start_row < 0 or region.end_row > row_count:
        return False
    if region.start_col < 0 or region.end_col > col_count:
        return False
    return True


def resolve_sizes(
    row_count: int,
    col_count: int,
    row_sizes: Sequence[int | None],
    col_sizes: Sequence[int | None],
    *,
    default_row_height: int,
    default_col_width: int,
) -> SizeMap:
    return SizeMap(
        row_heights=_dense(row_count, row_sizes, default_row_height),
        col_widths=_dense(col_count, col_sizes, default_col_width),
    )


def _dense(count: int, sparse: Sequence[int | None], default: int) -> list[int]:
    out: list[int] = []
    for idx in range(count):
        value = sparse[idx] if idx < len(sparse) else None
        out.append(default if value is None else value)
    return out
