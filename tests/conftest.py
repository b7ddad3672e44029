"""Shared pytest fixtures."""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
import pytest

from roadbrowse_core.catalog.item import Item
from roadbrowse_core.source import http as http_source


@pytest.fixture
def make_item():
    """Factory for Items with a fixed timestamp and the given overrides."""

    def _make(item_id: str, **overrides) -> Item:
        overrides.setdefault("title", f"Title {item_id}")
        overrides.setdefault("release_year", 2020)
        overrides.setdefault("added_at", datetime(2024, 1, 1, tzinfo=timezone.utc))
        return Item(id=item_id, **overrides)

    return _make


@pytest.fixture
def catalog_rows() -> list[dict]:
    """Raw rows in the mix of shapes the catalog API returns."""
    return [
        {
            "id": 1,
            "title": "Solo Leveling",
            "author": "Chugong",
            "type": "manhwa",
            "genres": ["Action", "Fantasy"],
            "tags": ["System", "Dungeons"],
            "release_year": 2018,
            "chapters": 179,
            "rating": 4.8,
            "age": "16+",
            "status": "completed",
            "views": 9000,
        },
        {
            "manga": {
                "id": "m-2",
                "title": "Berserk",
                "artist": "Kentaro Miura",
                "genres": '["Action", "Horror", "Drama"]',
                "tags": "Violence, Knights",
                "year": 1989,
                "chapters_count": "374",
                "rating10": 9.4,
                "age_rating": "18",
            },
            "views": 12000,
        },
        {
            "id": 3,
            "title": "Tower of God",
            "author": "SIU",
            "kind": "Manhwa",
            "categories": ["Fantasy", "Mystery"],
            "tags": ["System", "Gods"],
            "release_date": "2010-06-30",
            "chapters": 600,
            "rating": 8.6,
            "popularity": 15000,
            "views": 30000,
        },
        {
            "id": 4,
            "title": "Yotsuba&!",
            "author": "Kiyohiko Azuma",
            "genres": ["Comedy", "Slice of Life"],
            "created_at": "2003-03-21T00:00:00Z",
            "chapters": 111,
            "rating": 4.5,
            "age": "0+",
            "format": ["Print", "Color"],
            "views": 500,
        },
        {
            "id": 5,
            "title": "The King's Avatar",
            "author": "Butterfly Blue",
            "type": "маньхуа",
            "genres": ["Game", "Sports"],
            "tags": ["Gamers"],
            "release_year": 2011,
            "chapters": 1728,
            "rating": 3,
            "translation_status": "заброшен",
            "views": 7000,
        },
    ]


def http_response(status_code: int, *, json=None, text: str = "") -> httpx.Response:
    req = httpx.Request("GET", "https://catalog.example.test/api/manga")
    if json is not None:
        return httpx.Response(status_code=status_code, json=json, request=req)
    return httpx.Response(status_code=status_code, text=text, request=req)


class _ClientFactory:
    def __init__(self, sequence: list):
        self._sequence = list(sequence)
        self.calls: list[tuple[str, dict | None, dict | None]] = []
        self.client_kwargs: list[dict] = []

    def __call__(self, *args, **kwargs):
        factory = self
        factory.client_kwargs.append(kwargs)

        class _Client:
            def __enter__(self):
                return self

            def __exit__(self, exc_type, exc, tb):
                return False

            def get(self, url: str, params=None, headers=None):
                factory.calls.append((url, params, headers))
                if not factory._sequence:
                    raise AssertionError("No more fake HTTP responses configured")
                item = factory._sequence.pop(0)
                if isinstance(item, Exception):
                    raise item
                return item

        return _Client()


@pytest.fixture
def fake_http(monkeypatch: pytest.MonkeyPatch):
    """Install a fake httpx.Client serving the given responses in order."""

    def _install(*sequence) -> _ClientFactory:
        factory = _ClientFactory(list(sequence))
        monkeypatch.setattr(http_source.httpx, "Client", factory)
        return factory

    return _install


@pytest.fixture
def response():
    return http_response
