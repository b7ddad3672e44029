"""Tests for catalog sources and payload unwrapping."""

from __future__ import annotations

import httpx
import pytest

from roadbrowse_core.source.backend import CatalogFetchError, extract_rows
from roadbrowse_core.source.http import HttpCatalogSource
from roadbrowse_core.source.memory import MemoryCatalogSource

ROWS = [{"id": 1}, {"id": 2}]
URL = "https://catalog.example.test/api/manga"


@pytest.mark.parametrize(
    "payload",
    [
        ROWS,
        {"data": ROWS},
        {"ok": True, "data": ROWS},
        {"rows": ROWS},
        {"data": "not a list", "rows": ROWS},
    ],
)
def test_extract_rows_accepts_known_shapes(payload) -> None:
    assert extract_rows(payload) == ROWS


@pytest.mark.parametrize("payload", [None, "text", 42, {}, {"items": ROWS}])
def test_extract_rows_unknown_shapes_are_empty(payload) -> None:
    assert extract_rows(payload) == []


def test_extract_rows_returns_a_copy() -> None:
    rows = extract_rows(ROWS)
    rows.append({"id": 3})

    assert len(ROWS) == 2


def test_extract_rows_raises_on_error_payload() -> None:
    with pytest.raises(CatalogFetchError, match="maintenance"):
        extract_rows({"ok": False, "message": "maintenance"})
    with pytest.raises(CatalogFetchError, match="API error"):
        extract_rows({"ok": False})


def test_memory_source_counts_fetches() -> None:
    source = MemoryCatalogSource({"data": ROWS})

    assert source.fetch() == ROWS
    assert source.fetch() == ROWS
    assert source.fetch_count == 2


def test_http_source_fetches_rows(fake_http, response) -> None:
    client_factory = fake_http(response(200, json={"ok": True, "data": ROWS}))

    rows = HttpCatalogSource(URL, timeout_s=5.0, user_agent="roadbrowse-test").fetch()

    assert rows == ROWS
    assert client_factory.calls == [(URL, {"limit": 200}, {"User-Agent": "roadbrowse-test"})]
    assert client_factory.client_kwargs[0]["timeout"] == 5.0


def test_http_source_without_limit(fake_http, response) -> None:
    client_factory = fake_http(response(200, json=ROWS))

    assert HttpCatalogSource(URL, limit=None).fetch() == ROWS
    assert client_factory.calls == [(URL, None, None)]


def test_http_source_does_not_retry_on_error_status(fake_http, response) -> None:
    client_factory = fake_http(response(503, text="unavailable"), response(200, json=ROWS))

    with pytest.raises(CatalogFetchError) as excinfo:
        HttpCatalogSource(URL).fetch()

    assert excinfo.value.message == "HTTP 503"
    assert excinfo.value.status_code == 503
    assert len(client_factory.calls) == 1


def test_http_source_prefers_error_body_message(fake_http, response) -> None:
    fake_http(response(500, json={"ok": False, "message": "database offline"}))

    with pytest.raises(CatalogFetchError) as excinfo:
        HttpCatalogSource(URL).fetch()

    assert excinfo.value.message == "database offline"
    assert excinfo.value.status_code == 500


def test_http_source_error_body_on_success_status(fake_http, response) -> None:
    fake_http(response(200, json={"ok": False, "message": "quota exceeded"}))

    with pytest.raises(CatalogFetchError, match="quota exceeded"):
        HttpCatalogSource(URL).fetch()


def test_http_source_wraps_transport_errors(fake_http) -> None:
    fake_http(httpx.ConnectError("connection refused"))

    with pytest.raises(CatalogFetchError, match="connection refused") as excinfo:
        HttpCatalogSource(URL).fetch()

    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_http_source_rejects_non_json_body(fake_http, response) -> None:
    fake_http(response(200, text="<html>login</html>"))

    with pytest.raises(CatalogFetchError, match="not valid JSON"):
        HttpCatalogSource(URL).fetch()
