from __future__ import annotations

import logging

import httpx
import pytest

from sheetsnap import client as client_module
from sheetsnap.api import DocumentHandle, render_payload_html, render_range_html, render_section
from sheetsnap.client import READONLY_SCOPE, SheetsClient, SnapshotFetchError
from sheetsnap.model import RenderOptions

from tests.helpers import cell, json_response, mock_client, payload, table_rows


def _document(handler, **client_kwargs) -> DocumentHandle:
    client = SheetsClient(http_client=mock_client(handler), **client_kwargs)
    return DocumentHandle(spreadsheet_id="sheet-123", client=client)


def test_two_by_two_example(two_by_two_payload) -> None:
    html = render_payload_html(two_by_two_payload)
    rows = table_rows(html)

    assert len(rows) == 2
    assert [len(row) for row in rows] == [2, 2]
    assert rows[0][0][1] == "A"
    assert rows[0][1][1] == '<a href="https://x" style="color:inherit;text-decoration:underline;">B</a>'
    assert rows[1][0][1] == ""
    assert rows[1][1][1] == "D"
    assert "font-weight:bold;" in rows[1][1][0]
    assert "font-weight:normal;" in rows[0][0][0]
    assert "rowspan" not in html
    assert "colspan" not in html


def test_render_range_fetches_bounded_range(two_by_two_payload) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return json_response(two_by_two_payload)

    html = render_range_html(_document(handler, api_key="k-1"), "'Leads'!$A$1:$B$2")

    assert html is not None and html.startswith("<table")
    (request,) = seen
    assert request.url.path == "/v4/spreadsheets/sheet-123"
    assert request.url.params["ranges"] == "Leads!A1:B2"
    assert request.url.params["includeGridData"] == "true"
    assert request.url.params["key"] == "k-1"
    assert "merges" in request.url.params["fields"]
    assert "Authorization" not in request.headers


def test_access_token_takes_precedence_over_api_key(two_by_two_payload) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return json_response(two_by_two_payload)

    render_range_html(_document(handler, api_key="k-1", access_token="tok"), "A1:B2")

    assert seen[0].headers["Authorization"] == "Bearer tok"
    assert "key" not in seen[0].url.params


def test_http_failure_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return json_response({"error": {"code": 403, "message": "denied"}}, status_code=403)

    assert render_range_html(_document(handler), "A1:B2") is None


def test_transport_failure_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    assert render_range_html(_document(handler), "A1:B2") is None


def test_debug_flag_logs_failure_detail(caplog) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="backend exploded")

    with caplog.at_level(logging.WARNING, logger="sheetsnap.api"):
        assert render_range_html(_document(handler), "A1:B2", options=RenderOptions(debug=True)) is None

    assert "status=500" in caplog.text
    assert "backend exploded" in caplog.text


def test_failure_is_quiet_without_debug(caplog) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="backend exploded")

    with caplog.at_level(logging.WARNING, logger="sheetsnap.api"):
        assert render_range_html(_document(handler), "A1:B2") is None

    assert "backend exploded" not in caplog.text


def test_empty_payload_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return json_response({"sheets": [{"data": [{}]}]})

    assert render_range_html(_document(handler), "A1:B2") is None


def test_malformed_payload_returns_none() -> None:
    assert render_payload_html({"sheets": "nope"}) is None


def test_merged_snapshot_from_offset_range() -> None:
    body = payload(
        [[cell("Client"), cell("")], [cell("Acme"), cell("Estimate")]],
        merges=[(9, 10, 3, 5), (0, 2, 0, 2)],
        start_row=9,
        start_col=3,
        row_sizes=[28],
        col_sizes=[None, 160],
    )
    rows = table_rows(render_payload_html(body))

    assert len(rows[0]) == 1
    assert 'rowspan="1" colspan="2"' in rows[0][0][0]
    assert [content for _, content in rows[1]] == ["Acme", "Estimate"]


def test_render_section_falls_back() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    assert render_section(_document(handler), "A1:B2", fallback="(snapshot unavailable)") == "(snapshot unavailable)"


def test_fetch_grid_raises_on_non_json_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    client = SheetsClient(http_client=mock_client(handler))
    with pytest.raises(SnapshotFetchError) as exc:
        client.fetch_grid("sheet-123", "A1")
    assert exc.value.status_code == 200


@pytest.mark.parametrize("range_ref", ["Leads", "A:C", "A1:B2,C3:D4", "Leads!"])
def test_unbounded_range_is_not_fetched(range_ref: str, two_by_two_payload) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return json_response(two_by_two_payload)

    assert render_range_html(_document(handler), range_ref) is None
    assert seen == []


class _ReadyCredentials:
    def __init__(self, token: str):
        self.token = token
        self.valid = True

    @classmethod
    def from_service_account_file(cls, filename, scopes=None):
        assert scopes == [READONLY_SCOPE]
        return cls(f"sa-token:{filename}")

    def refresh(self, request) -> None:
        raise AssertionError("already valid credentials must not be refreshed")


def test_service_account_token_is_sent_as_bearer(monkeypatch, two_by_two_payload) -> None:
    monkeypatch.setattr(client_module, "Credentials", _ReadyCredentials)
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return json_response(two_by_two_payload)

    document = _document(handler, api_key="k-1", service_account_file="sa.json")
    assert render_range_html(document, "A1:B2") is not None
    assert render_range_html(document, "A1:B2") is not None

    assert [r.headers["Authorization"] for r in seen] == ["Bearer sa-token:sa.json"] * 2
    assert all("key" not in r.url.params for r in seen)


def test_access_token_skips_service_account(monkeypatch, two_by_two_payload) -> None:
    class _Unused:
        @classmethod
        def from_service_account_file(cls, filename, scopes=None):
            raise AssertionError("service account must not be loaded when a token is set")

    monkeypatch.setattr(client_module, "Credentials", _Unused)
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return json_response(two_by_two_payload)

    document = _document(handler, access_token="tok", service_account_file="sa.json")
    assert render_range_html(document, "A1:B2") is not None
    assert seen[0].headers["Authorization"] == "Bearer tok"


@pytest.mark.parametrize("contents", [None, "{}", "not json"])
def test_unusable_service_account_file_returns_none(tmp_path, contents) -> None:
    path = tmp_path / "service-account.json"
    if contents is not None:
        path.write_text(contents, encoding="utf-8")
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return json_response({})

    document = _document(handler, service_account_file=str(path))
    assert render_range_html(document, "A1") is None
    assert seen == []

    with pytest.raises(SnapshotFetchError):
        document.client.fetch_grid(document.spreadsheet_id, "A1")
