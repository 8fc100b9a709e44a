from __future__ import annotations

from sheetsnap.client import SheetsClient
from sheetsnap.config import SHEETS_API_BASE_URL, SnapshotSettings
from sheetsnap.model import RenderOptions


def test_defaults(monkeypatch) -> None:
    for key in ("SHEETSNAP_API_KEY", "SHEETSNAP_DEBUG", "SHEETSNAP_DEFAULT_COL_WIDTH"):
        monkeypatch.delenv(key, raising=False)
    settings = SnapshotSettings(_env_file=None)

    assert settings.base_url == SHEETS_API_BASE_URL
    assert settings.render_options() == RenderOptions(default_row_height=21, default_col_width=100, debug=False)


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("SHEETSNAP_DEBUG", "true")
    monkeypatch.setenv("SHEETSNAP_DEFAULT_COL_WIDTH", "120")
    monkeypatch.setenv("SHEETSNAP_API_KEY", "env-key")
    settings = SnapshotSettings(_env_file=None)

    assert settings.render_options() == RenderOptions(default_row_height=21, default_col_width=120, debug=True)

    client = SheetsClient.from_settings(settings)
    try:
        assert client.api_key == "env-key"
    finally:
        client.close()
