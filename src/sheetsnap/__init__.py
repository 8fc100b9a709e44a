from .api import DocumentHandle, render_payload_html, render_range_html, render_section
from .client import SheetsClient, SnapshotFetchError
from .config import SnapshotSettings
from .model import RenderOptions, SnapshotGrid
from .render_html import render_grid_html

__all__ = [
    "DocumentHandle",
    "RenderOptions",
    "SheetsClient",
    "SnapshotFetchError",
    "SnapshotGrid",
    "SnapshotSettings",
    "render_grid_html",
    "render_payload_html",
    "render_range_html",
    "render_section",
]
