"""
Sheets API client (read-only, synchronous).

Only responsible for I/O: one `spreadsheets.get` call per snapshot, returning the raw JSON.
Interpreting the payload lives in `parser.sheets_api`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.service_account import Credentials

from .config import SHEETS_API_BASE_URL, SnapshotSettings

logger = logging.getLogger(__name__)

READONLY_SCOPE = "https://www.googleapis.com/auth/spreadsheets.readonly"

GRID_FIELDS = (
    "sheets(merges,data(startRow,startColumn,"
    "rowData(values(formattedValue,effectiveValue,hyperlink,effectiveFormat)),"
    "rowMetadata(pixelSize),columnMetadata(pixelSize)))"
)


class SnapshotFetchError(Exception):
    """Transport or non-2xx failure while fetching grid data."""

    def __init__(self, message: str, *, status_code: int | None = None, detail: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class SheetsClient:
    def __init__(
        self,
        *,
        api_key: str | None = None,
        access_token: str | None = None,
        service_account_file: str | None = None,
        base_url: str = SHEETS_API_BASE_URL,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ):
        self.api_key = (api_key or "").strip()
        self.access_token = (access_token or "").strip()
        self.service_account_file = service_account_file
        self.base_url = base_url.rstrip("/")
        self._credentials = None
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=timeout,
            headers={"Accept": "application/json", "User-Agent": "sheetsnap/0.1"},
        )

    @classmethod
    def from_settings(cls, settings: SnapshotSettings, **kwargs: Any) -> "SheetsClient":
        return cls(
            api_key=settings.api_key,
            access_token=settings.access_token,
            service_account_file=settings.service_account_file,
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            **kwargs,
        )

    def __enter__(self) -> "SheetsClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def fetch_grid(self, spreadsheet_id: str, range_ref: str) -> dict[str, Any]:
        url = f"{self.base_url}/spreadsheets/{spreadsheet_id}"
        params: dict[str, Any] = {
            "ranges": range_ref,
            "includeGridData": "true",
            "fields": GRID_FIELDS,
        }
        headers = self._auth_headers()
        if not headers and self.api_key:
            params["key"] = self.api_key

        logger.debug("Fetching grid data for %s!%s", spreadsheet_id, range_ref)
        try:
            response = self._client.get(url, params=params, headers=headers or None)
        except httpx.HTTPError as e:
            raise SnapshotFetchError(f"Request failed: {e}", detail=str(e)) from e

        if not response.is_success:
            raise SnapshotFetchError(
                f"Sheets API returned HTTP {response.status_code}",
                status_code=response.status_code,
                detail=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise SnapshotFetchError(
                "Sheets API returned a non-JSON body",
                status_code=response.status_code,
                detail=response.text,
            ) from e

    def _auth_headers(self) -> dict[str, str]:
        token = self.access_token or self._service_account_token()
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def _service_account_token(self) -> str:
        if not self.service_account_file:
            return ""

        try:
            if self._credentials is None:
                self._credentials = Credentials.from_service_account_file(
                    self.service_account_file, scopes=[READONLY_SCOPE]
                )
            if not self._credentials.valid:
                self._credentials.refresh(Request())
        except (GoogleAuthError, OSError, ValueError) as e:
            raise SnapshotFetchError(f"Service account authorization failed: {e}", detail=str(e)) from e
        return self._credentials.token or ""
