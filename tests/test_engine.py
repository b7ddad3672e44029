"""Tests for the browsing session."""

from __future__ import annotations

import logging

import pytest

from roadbrowse_core.catalog.item import Kind
from roadbrowse_core.catalog.vocabulary import CATEGORIES, FALLBACK_TAGS
from roadbrowse_core.engine import BrowseConfig, BrowseSession, SessionStatus
from roadbrowse_core.facets.state import (
    INITIAL_STATE,
    CycleTri,
    MultiField,
    RangeField,
    Reset,
    SetSearch,
    SetSort,
    ToggleMulti,
    TriField,
)
from roadbrowse_core.ranking.ranker import SortKey
from roadbrowse_core.source.backend import CatalogFetchError, CatalogSource
from roadbrowse_core.source.memory import MemoryCatalogSource


class _RaisingSource(CatalogSource):
    def __init__(self, error: Exception):
        self.error = error
        self.closed = False

    def fetch(self):
        raise self.error

    def close(self) -> None:
        self.closed = True


def _numbered_rows(count: int) -> list[dict]:
    return [
        {
            "id": i,
            "title": f"Title {i:03d}",
            "popularity": count - i,
            "type": "manhwa" if i < 3 else "manga",
            "tags": [],
        }
        for i in range(count)
    ]


@pytest.fixture
def session(catalog_rows) -> BrowseSession:
    return BrowseSession.from_records({"data": catalog_rows})


def test_load_normalizes_and_discovers_tags(session: BrowseSession) -> None:
    assert session.status is SessionStatus.READY
    assert session.error is None
    assert len(session.items) == 5
    assert session.tag_vocabulary == [
        "Dungeons", "Gamers", "Gods", "Knights", "System", "Violence",
    ]
    assert session.category_vocabulary == list(CATEGORIES)


def test_view_of_first_page(session: BrowseSession) -> None:
    view = session.view()

    assert [item.id for item in view] == ["3", "m-2", "1", "5", "4"]
    assert len(view) == 5
    assert view.total_results == 5
    assert view.total_pages == 1
    assert view.page == 1
    assert (view.first_index, view.last_index) == (1, 5)
    assert view.page_window == (1,)
    assert view.status is SessionStatus.READY


def test_dispatch_updates_results(session: BrowseSession) -> None:
    session.dispatch(CycleTri(TriField.CATEGORIES, "Action"))
    session.dispatch(SetSort(SortKey.NAME_ASCENDING))

    assert [item.title for item in session.results()] == ["Berserk", "Solo Leveling"]

    session.dispatch(Reset())
    assert session.state == INITIAL_STATE
    assert len(session.results()) == 5


def test_second_load_is_rejected(session: BrowseSession) -> None:
    with pytest.raises(RuntimeError):
        session.load()


def test_failed_load_is_reported(caplog: pytest.LogCaptureFixture) -> None:
    session = BrowseSession(MemoryCatalogSource({"ok": False, "message": "maintenance"}))

    with caplog.at_level(logging.ERROR, logger="roadbrowse_core.engine"):
        status = session.load()

    assert status is SessionStatus.FAILED
    assert session.error == "maintenance"
    assert session.items == ()
    assert session.tag_vocabulary == list(FALLBACK_TAGS)
    assert "maintenance" in caplog.text

    view = session.view()
    assert view.total_results == 0
    assert view.page == 1
    assert (view.first_index, view.last_index) == (0, 0)
    assert view.error == "maintenance"


def test_failed_session_still_accepts_actions() -> None:
    session = BrowseSession(_RaisingSource(CatalogFetchError("HTTP 502", status_code=502)))
    session.load()

    state = session.dispatch(SetSearch("solo"))

    assert state.search_text == "solo"
    assert session.results() == []
    assert session.next_page() == 1
    assert session.last_page() == 1


def test_unexpected_source_errors_fail_the_session() -> None:
    session = BrowseSession(_RaisingSource(ValueError("bad payload")))

    assert session.load() is SessionStatus.FAILED
    assert session.error == "bad payload"


def test_tag_vocabulary_falls_back_when_no_item_has_tags() -> None:
    session = BrowseSession.from_records(_numbered_rows(4))

    assert session.tag_vocabulary == list(FALLBACK_TAGS)
    assert len(session.tag_vocabulary) >= 1
    assert session.tag_counts().values == []


def test_paging_and_reset_on_facet_change() -> None:
    config = BrowseConfig(page_size=5)
    session = BrowseSession.from_records(_numbered_rows(23), config)

    assert session.view().total_pages == 5
    assert session.last_page() == 5
    view = session.view()
    assert [item.id for item in view] == ["20", "21", "22"]
    assert (view.first_index, view.last_index) == (21, 23)
    assert view.page_window == (1, 2, 3, 4, 5)

    session.dispatch(ToggleMulti(MultiField.KIND, Kind.MANHWA))

    view = session.view()
    assert view.page == 1
    assert view.total_pages == 1
    assert [item.id for item in view] == ["0", "1", "2"]


def test_noop_dispatch_keeps_page() -> None:
    session = BrowseSession.from_records(_numbered_rows(23), BrowseConfig(page_size=5))
    session.go_to_page(3)

    session.dispatch(SetSearch(""))

    assert session.page == 3


def test_page_navigation_is_clamped() -> None:
    session = BrowseSession.from_records(_numbered_rows(12), BrowseConfig(page_size=5))

    assert session.previous_page() == 1
    assert session.next_page() == 2
    assert session.next_page() == 3
    assert session.next_page() == 3
    assert session.go_to_page(42) == 3
    assert session.first_page() == 1


def test_range_text_entry(session: BrowseSession) -> None:
    session.enter_range_text(RangeField.CHAPTER_COUNT, "max", "179")
    assert session.state.chapter_count.max == 179.0
    assert [item.id for item in session.results()] == ["1", "4"]

    state = session.enter_range_text("chapterCount", "max", "17x")
    assert state.chapter_count.max == 179.0
    assert session.range_input("chapterCount").max_text == "17x"

    session.enter_range_text("chapterCount", "max", "")
    assert session.state.chapter_count.is_open


def test_reset_refreshes_range_text(session: BrowseSession) -> None:
    session.enter_range_text(RangeField.RATING, "min", "8,5")
    assert session.range_input(RangeField.RATING).min_text == "8.5"

    session.dispatch(Reset())

    assert session.range_input(RangeField.RATING).min_text == ""


def test_counts_follow_current_results(session: BrowseSession) -> None:
    session.dispatch(ToggleMulti(MultiField.KIND, "Manhwa"))

    tags = session.tag_counts()
    categories = session.category_counts()

    assert [(v.value, v.count) for v in tags.values] == [
        ("Dungeons", 1), ("Gods", 1), ("System", 2),
    ]
    assert {v.value: v.count for v in categories.values}["Fantasy"] == 2


def test_results_are_memoized(session: BrowseSession, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="roadbrowse_core.engine"):
        session.view()
        session.view()

    assert "Result cache hit" in caplog.text


def test_cache_can_be_disabled(catalog_rows, caplog: pytest.LogCaptureFixture) -> None:
    session = BrowseSession.from_records(catalog_rows, BrowseConfig(cache_enabled=False))

    with caplog.at_level(logging.DEBUG, logger="roadbrowse_core.engine"):
        first = session.view()
        second = session.view()

    assert first == second
    assert "Result cache hit" not in caplog.text


def test_load_is_logged(catalog_rows, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="roadbrowse_core.engine"):
        BrowseSession.from_records(catalog_rows)

    assert "Catalog loaded: 5 items, 6 tags" in caplog.text


def test_session_without_source_needs_catalog_url() -> None:
    with pytest.raises(ValueError):
        BrowseSession()


def test_session_uses_http_source_from_config(fake_http, response, catalog_rows) -> None:
    client_factory = fake_http(response(200, json={"data": catalog_rows}))
    config = BrowseConfig(
        catalog_url="https://catalog.example.test/api/manga",
        catalog_limit=50,
        cover_base_url="https://img.example",
    )

    with BrowseSession(config=config) as session:
        assert session.load() is SessionStatus.READY
        assert len(session.items) == 5

    assert client_factory.calls[0][1] == {"limit": 50}


def test_context_manager_closes_source() -> None:
    source = _RaisingSource(CatalogFetchError("down"))

    with BrowseSession(source) as session:
        session.load()

    assert source.closed


def test_config_from_env() -> None:
    config = BrowseConfig.from_env(
        {
            "ROADBROWSE_PAGE_SIZE": "10",
            "ROADBROWSE_CATALOG_URL": "https://catalog.example.test",
            "ROADBROWSE_COVER_BASE_URL": "https://img.example",
        }
    )

    assert config.page_size == 10
    assert config.catalog_url == "https://catalog.example.test"
    assert config.cover_base_url == "https://img.example"


@pytest.mark.parametrize("raw", ["abc", "0", "-4"])
def test_config_from_env_ignores_bad_page_size(raw: str) -> None:
    assert BrowseConfig.from_env({"ROADBROWSE_PAGE_SIZE": raw}).page_size == 24


def test_config_rejects_bad_page_size() -> None:
    with pytest.raises(ValueError):
        BrowseConfig(page_size=0)


@pytest.mark.parametrize("size", [0, -1])
def test_config_rejects_bad_cache_size(size: int) -> None:
    with pytest.raises(ValueError):
        BrowseConfig(cache_size=size)


def test_smallest_cache_evicts_between_states(catalog_rows) -> None:
    session = BrowseSession.from_records(catalog_rows, BrowseConfig(cache_size=1))

    session.dispatch(ToggleMulti(MultiField.KIND, Kind.MANHWA))
    assert [item.id for item in session.view()] == ["3", "1"]

    session.dispatch(Reset())
    assert len(session.view()) == 5
