from __future__ import annotations

from html import escape as html_escape

from .layout import plan_merges, resolve_sizes
from .model import CellData, MergeAnchor, RenderOptions, SnapshotGrid
from .style import resolve_cell_style, style_css

TABLE_STYLE = "border-collapse:collapse;table-layout:fixed;"
LINK_STYLE = "color:inherit;text-decoration:underline;"


def render_grid_html(grid: SnapshotGrid, options: RenderOptions | None = None) -> str | None:
    """Render a snapshot grid as an inline-styled `<table>`; None when there is nothing to render."""
    opts = options or RenderOptions()
    row_count = grid.row_count
    col_count = grid.col_count
    if row_count == 0 or col_count == 0:
        return None

    sizes = resolve_sizes(
        row_count,
        col_count,
        grid.row_sizes,
        grid.col_sizes,
        default_row_height=opts.default_row_height,
        default_col_width=opts.default_col_width,
    )
    plan = plan_merges(row_count, col_count, grid.merges)

    out: list[str] = []
    out.append(f'<table style="{TABLE_STYLE}width:{sum(sizes.col_widths)}px;">')
    out.append("<colgroup>")
    for width in sizes.col_widths:
        out.append(f'<col style="width:{width}px">')
    out.append("</colgroup>")
    out.append("<tbody>")

    for row in range(row_count):
        out.append(f'<tr style="height:{sizes.row_heights[row]}px">')
        for col in range(col_count):
            if plan.suppressed[row][col]:
                continue
            out.append(_cell_html(grid.cell(row, col), plan.anchors[row][col]))
        out.append("</tr>")

    out.append("</tbody>")
    out.append("</table>")
    return "\n".join(out)


def _cell_html(cell: CellData, anchor: MergeAnchor | None) -> str:
    attrs: list[str] = [f'style="{html_escape(style_css(resolve_cell_style(cell.fmt)))}"']
    if anchor is not None:
        attrs.append(f'rowspan="{anchor.rowspan}"')
        attrs.append(f'colspan="{anchor.colspan}"')

    content = _text_html(cell.value)
    if cell.hyperlink:
        content = f'<a href="{html_escape(cell.hyperlink)}" style="{LINK_STYLE}">{content}</a>'
    return f"<td {' '.join(attrs)}>{content}</td>"


def _text_html(value: str) -> str:
    return html_escape(value or "").replace("\r\n", "\n").replace("\n", "<br>")


def render_document_html(table_html: str, *, title: str) -> str:
    parts: list[str] = []
    parts.append("<!doctype html>")
    parts.append("<html>")
    parts.append("<head>")
    parts.append('<meta charset="utf-8">')
    parts.append(f"<title>{html_escape(title)}</title>")
    parts.append("</head>")
    parts.append("<body>")
    parts.append(table_html)
    parts.append("</body>")
    parts.append("</html>")
    return "\n".join(parts) + "\n"
