from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .model import DEFAULT_COL_WIDTH, DEFAULT_ROW_HEIGHT, RenderOptions

SHEETS_API_BASE_URL = "https://sheets.googleapis.com/v4"


class SnapshotSettings(BaseSettings):
    """Runtime configuration, read from `SHEETSNAP_*` environment variables or `.env`."""

    model_config = SettingsConfigDict(
        env_prefix="SHEETSNAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="Sheets API key (public sheets)")
    access_token: str | None = Field(default=None, description="OAuth bearer token")
    service_account_file: str | None = Field(default=None, description="Service account JSON path")
    base_url: str = Field(default=SHEETS_API_BASE_URL)
    timeout_seconds: float = Field(default=30.0, gt=0)
    debug: bool = False
    default_row_height: int = Field(default=DEFAULT_ROW_HEIGHT, ge=1)
    default_col_width: int = Field(default=DEFAULT_COL_WIDTH, ge=1)

    def render_options(self) -> RenderOptions:
        return RenderOptions(
            default_row_height=self.default_row_height,
            default_col_width=self.default_col_width,
            debug=self.debug,
        )
