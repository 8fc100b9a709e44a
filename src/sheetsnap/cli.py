from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .api import DocumentHandle, render_range_html
from .client import SheetsClient
from .config import SnapshotSettings
from .parser.utils import parse_range_ref, to_a1
from .render_html import render_document_html


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a Google Sheets range as an HTML table snapshot")
    parser.add_argument("spreadsheet_id", help="Spreadsheet ID")
    parser.add_argument("range", help="A1 range, e.g. \"'Sheet 1'!A1:F20\"")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output path")
    parser.add_argument(
        "--fragment",
        action="store_true",
        help="Write only the <table> markup instead of a standalone HTML document",
    )
    parser.add_argument("--api-key", help="Sheets API key (overrides SHEETSNAP_API_KEY)")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log status and response body when the fetch fails",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        rng = parse_range_ref(args.range)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    settings = SnapshotSettings()
    if args.api_key:
        settings.api_key = args.api_key
    if args.debug:
        settings.debug = True

    range_ref = to_a1(rng)
    with SheetsClient.from_settings(settings) as client:
        document = DocumentHandle(spreadsheet_id=args.spreadsheet_id, client=client)
        table = render_range_html(document, range_ref, options=settings.render_options())

    if table is None:
        print(f"error: no snapshot produced for {range_ref}", file=sys.stderr)
        return 1

    html = table + "\n" if args.fragment else render_document_html(table, title=range_ref)
    args.output.write_text(html, encoding="utf-8")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
