from __future__ import annotations

import math

from .model import BorderEdge, Borders, CellFormat, Rgb

DEFAULT_BACKGROUND = "#FFFFFF"
DEFAULT_TEXT_COLOR = "#000000"
DEFAULT_BORDER_COLOR = "#000000"
FALLBACK_BORDER = f"1px solid {DEFAULT_BORDER_COLOR}"

BORDER_STYLES = {
    "DOTTED": "1px dotted",
    "DASHED": "1px dashed",
    "SOLID": "1px solid",
    "SOLID_MEDIUM": "2px solid",
    "SOLID_THICK": "3px solid",
    "DOUBLE": "3px double",
}

H_ALIGN = {"LEFT": "left", "CENTER": "center", "RIGHT": "right"}
V_ALIGN = {"TOP": "top", "MIDDLE": "middle", "BOTTOM": "bottom"}


def color_to_hex(color: Rgb | None) -> str | None:
    """`Rgb(0.5, 0.0, 1.0)` -> `#8000FF`; None stays None ("no override")."""
    if color is None:
        return None
    return "#" + "".join(f"{_channel(v):02X}" for v in (color.red, color.green, color.blue))


def _channel(value: float) -> int:
    # Half-up, not Python's banker's rounding.
    return max(0, min(255, math.floor(value * 255 + 0.5)))


def resolve_background(fmt: CellFormat | None) -> str:
    return color_to_hex(fmt.background if fmt else None) or DEFAULT_BACKGROUND


def resolve_text_color(fmt: CellFormat | None) -> str:
    return color_to_hex(fmt.foreground if fmt else None) or DEFAULT_TEXT_COLOR


def resolve_font_weight(fmt: CellFormat | None) -> str:
    return "bold" if fmt and fmt.bold else "normal"


def resolve_font_style(fmt: CellFormat | None) -> str:
    return "italic" if fmt and fmt.italic else "normal"


def resolve_text_decoration(fmt: CellFormat | None) -> str:
    parts: list[str] = []
    if fmt and fmt.underline:
        parts.append("underline")
    if fmt and fmt.strikethrough:
        parts.append("line-through")
    return " ".join(parts) or "none"


def resolve_font_size(fmt: CellFormat | None) -> str | None:
    if fmt is None or not fmt.font_size:
        return None
    size = fmt.font_size
    return f"{int(size)}pt" if float(size).is_integer() else f"{size}pt"


def resolve_font_family(fmt: CellFormat | None) -> str | None:
    if fmt is None or not fmt.font_family:
        return None
    family = fmt.font_family.replace("'", "")
    return f"'{family}'"


def resolve_text_align(fmt: CellFormat | None) -> str:
    key = (fmt.horizontal_alignment or "") if fmt else ""
    return H_ALIGN.get(key.upper(), "left")


def resolve_vertical_align(fmt: CellFormat | None) -> str:
    key = (fmt.vertical_alignment or "") if fmt else ""
    return V_ALIGN.get(key.upper(), "middle")


def resolve_white_space(fmt: CellFormat | None) -> str:
    if fmt and (fmt.wrap_strategy or "").upper() == "WRAP":
        return "pre-wrap"
    return "nowrap"


def resolve_border_edge(edge: BorderEdge) -> str:
    style = (edge.style or "").upper()
    if style == "NONE":
        return "none"
    line = BORDER_STYLES.get(style, BORDER_STYLES["SOLID"])
    return f"{line} {color_to_hex(edge.color) or DEFAULT_BORDER_COLOR}"


def resolve_borders(borders: Borders | None) -> list[tuple[str, str]]:
    """Return `(property, value)` pairs.

    The uniform fallback only applies when no edge is described at all; a partially
    described record renders just the edges it names.
    """
    if borders is None or borders.is_empty():
        return [("border", FALLBACK_BORDER)]

    out: list[tuple[str, str]] = []
    for side in ("top", "right", "bottom", "left"):
        edge = getattr(borders, side)
        if edge is not None:
            out.append((f"border-{side}", resolve_border_edge(edge)))
    return out


def resolve_cell_style(fmt: CellFormat | None) -> list[tuple[str, str]]:
    decls: list[tuple[str, str]] = [
        ("background-color", resolve_background(fmt)),
        ("color", resolve_text_color(fmt)),
        ("font-weight", resolve_font_weight(fmt)),
        ("font-style", resolve_font_style(fmt)),
        ("text-decoration", resolve_text_decoration(fmt)),
    ]
    size = resolve_font_size(fmt)
    if size:
        decls.append(("font-size", size))
    family = resolve_font_family(fmt)
    if family:
        decls.append(("font-family", family))
    decls.append(("text-align", resolve_text_align(fmt)))
    decls.append(("vertical-align", resolve_vertical_align(fmt)))
    decls.append(("white-space", resolve_white_space(fmt)))
    decls.extend(resolve_borders(fmt.borders if fmt else None))
    return decls


def style_css(decls: list[tuple[str, str]]) -> str:
    return "".join(f"{prop}:{value};" for prop, value in decls)
