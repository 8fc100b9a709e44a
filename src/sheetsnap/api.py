from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from pydantic import ValidationError

from .client import SnapshotFetchError
from .model import RenderOptions, SnapshotGrid
from .parser.sheets_api import parse_payload, to_snapshot_grid
from .parser.utils import parse_range_ref, to_a1
from .render_html import render_grid_html

logger = logging.getLogger(__name__)


class GridSource(Protocol):
    def fetch_grid(self, spreadsheet_id: str, range_ref: str) -> Mapping[str, Any]: ...


@dataclass(slots=True)
class DocumentHandle:
    spreadsheet_id: str
    client: GridSource


def load_snapshot(payload: Mapping[str, Any]) -> SnapshotGrid | None:
    try:
        spreadsheet = parse_payload(payload)
    except ValidationError as e:
        logger.debug("Grid payload does not match the expected shape: %s", e)
        return None
    return to_snapshot_grid(spreadsheet)


def render_payload_html(payload: Mapping[str, Any], *, options: RenderOptions | None = None) -> str | None:
    grid = load_snapshot(payload)
    if grid is None:
        return None
    return render_grid_html(grid, options)


def render_range_html(
    document: DocumentHandle,
    range_ref: str,
    *,
    options: RenderOptions | None = None,
) -> str | None:
    opts = options or RenderOptions()
    try:
        range_ref = to_a1(parse_range_ref(range_ref))
    except ValueError as e:
        logger.debug("Not a bounded range, nothing fetched: %s", e)
        return None

    try:
        payload = document.client.fetch_grid(document.spreadsheet_id, range_ref)
    except SnapshotFetchError as e:
        logger.debug("Snapshot fetch failed for %s: %s", range_ref, e)
        if opts.debug:
            logger.warning(
                "Snapshot fetch failed: spreadsheet=%s range=%s status=%s detail=%s",
                document.spreadsheet_id,
                range_ref,
                e.status_code,
                e.detail,
            )
        return None

    html = render_payload_html(payload, options=opts)
    if html is None:
        logger.debug("No cells in %s; nothing to render", range_ref)
    return html


def render_section(
    document: DocumentHandle,
    range_ref: str,
    *,
    fallback: str = "",
    options: RenderOptions | None = None,
) -> str:
    html = render_range_html(document, range_ref, options=options)
    return fallback if html is None else html
