"""RoadBrowse Core Engine - Browsing Session Implementation.

The BrowseSession is the primary interface for presentation code. It loads
the catalog once, keeps the facet state and the page cursor, and derives the
visible page from (items, state) on demand.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, Generator, List, Mapping, Optional, Tuple, Union

from roadbrowse_core.catalog.item import Item
from roadbrowse_core.catalog.normalizer import RecordNormalizer
from roadbrowse_core.catalog.vocabulary import CATEGORIES, FALLBACK_TAGS
from roadbrowse_core.facets.builder import FacetBuilder, FacetResult, discover_tags
from roadbrowse_core.facets.range_input import Bound, RangeInputBuffer
from roadbrowse_core.facets.state import (
    INITIAL_STATE,
    Action,
    FacetState,
    RangeField,
    apply,
)
from roadbrowse_core.query.executor import QueryExecutor
from roadbrowse_core.query.paginator import (
    DEFAULT_PAGE_SIZE,
    PageCursor,
    page_window,
    paginate,
)
from roadbrowse_core.source.backend import CatalogFetchError, CatalogSource
from roadbrowse_core.source.http import HttpCatalogSource
from roadbrowse_core.source.memory import MemoryCatalogSource

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    """Catalog load status of a session."""

    LOADING = auto()
    READY = auto()
    FAILED = auto()


@dataclass
class BrowseConfig:
    """Browsing engine configuration.

    Attributes:
        page_size: Items per page
        cover_base_url: Public base URL for bucket-relative cover references
        catalog_url: Catalog endpoint used when no source is given
        catalog_limit: ``limit`` parameter sent to the catalog endpoint
        request_timeout_s: Catalog request timeout in seconds
        cache_enabled: Memoize filtered/ordered results per facet state
        cache_size: Maximum memoized facet states
    """

    page_size: int = DEFAULT_PAGE_SIZE
    cover_base_url: Optional[str] = None
    catalog_url: Optional[str] = None
    catalog_limit: Optional[int] = 200
    request_timeout_s: float = 30.0
    cache_enabled: bool = True
    cache_size: int = 32

    def __post_init__(self):
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.cache_size < 1:
            raise ValueError(f"cache_size must be positive, got {self.cache_size}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BrowseConfig":
        """Build a config from ROADBROWSE_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Config with defaults for unset or invalid variables
        """
        env = os.environ if environ is None else environ
        config = cls(
            cover_base_url=env.get("ROADBROWSE_COVER_BASE_URL") or None,
            catalog_url=env.get("ROADBROWSE_CATALOG_URL") or None,
        )
        raw_page_size = env.get("ROADBROWSE_PAGE_SIZE")
        if raw_page_size:
            try:
                page_size = int(raw_page_size)
            except ValueError:
                page_size = 0
            if page_size >= 1:
                config.page_size = page_size
            else:
                logger.warning(f"Ignoring invalid ROADBROWSE_PAGE_SIZE: {raw_page_size!r}")
        return config


@dataclass(frozen=True)
class BrowseView:
    """Everything presentation code needs to render one page.

    Attributes:
        items: Items on the current page
        total_results: Items matching the facet state
        total_pages: Number of pages
        page: Current page number
        first_index: 1-based position of the first visible item (0 if none)
        last_index: 1-based position of the last visible item (0 if none)
        page_window: Page numbers for pagination controls, None for gaps
        status: Catalog load status
        error: Load failure message
    """

    items: Tuple[Item, ...] = ()
    total_results: int = 0
    total_pages: int = 1
    page: int = 1
    first_index: int = 0
    last_index: int = 0
    page_window: Tuple[Optional[int], ...] = (1,)
    status: SessionStatus = SessionStatus.LOADING
    error: Optional[str] = None

    def __len__(self) -> int:
        """Return number of visible items."""
        return len(self.items)

    def __iter__(self) -> Generator[Item, None, None]:
        """Iterate over visible items."""
        yield from self.items


class BrowseSession:
    """One user's browsing session over a catalog.

    Holds the working set, the facet state and the page cursor. Every
    derived value (result list, page, counts) is recomputed from the items
    and the state, so the session can be inspected at any point.
    """

    def __init__(
        self,
        source: Optional[CatalogSource] = None,
        config: Optional[BrowseConfig] = None,
    ):
        """Initialize session.

        Args:
            source: Catalog source; defaults to an HTTP source on
                ``config.catalog_url``
            config: Session configuration
        """
        self.config = config or BrowseConfig()
        if source is None:
            if not self.config.catalog_url:
                raise ValueError("A catalog source or config.catalog_url is required")
            source = HttpCatalogSource(
                self.config.catalog_url,
                limit=self.config.catalog_limit,
                timeout_s=self.config.request_timeout_s,
            )
        self._source = source
        self._status = SessionStatus.LOADING
        self._error: Optional[str] = None

        self._normalizer = RecordNormalizer(self.config.cover_base_url)
        self._executor = QueryExecutor()
        self._items: Tuple[Item, ...] = ()
        self._tag_vocabulary: List[str] = list(FALLBACK_TAGS)

        self._state: FacetState = INITIAL_STATE
        self._cursor = PageCursor(0, self.config.page_size)
        self._range_inputs: Dict[RangeField, RangeInputBuffer] = {}

        self._result_cache: Dict[Tuple[Any, ...], Tuple[Item, ...]] = {}

    @classmethod
    def from_records(
        cls,
        payload: Any,
        config: Optional[BrowseConfig] = None,
    ) -> "BrowseSession":
        """Create and load a session over an in-memory payload."""
        session = cls(MemoryCatalogSource(payload), config)
        session.load()
        return session

    def load(self) -> SessionStatus:
        """Fetch and normalize the catalog.

        A session loads exactly once. On failure the working set stays empty,
        the tag vocabulary falls back to the fixed list, and ``error`` holds
        a readable message; recovering means starting a new session.

        Returns:
            The resulting status

        Raises:
            RuntimeError: If the session was already loaded
        """
        if self._status is not SessionStatus.LOADING:
            raise RuntimeError("Catalog already loaded; start a new session to reload")

        try:
            rows = self._source.fetch()
        except CatalogFetchError as e:
            logger.error(f"Catalog load failed: {e.message}")
            self._fail(e.message)
            return self._status
        except Exception as e:
            logger.exception("Catalog source raised an unexpected error")
            self._fail(str(e) or "Load error")
            return self._status

        self._items = tuple(self._normalizer.normalize_all(rows))
        self._tag_vocabulary = discover_tags(self._items)
        self._result_cache.clear()
        self._status = SessionStatus.READY
        self._cursor.reset()
        self._cursor.resize(len(self._ordered()))

        logger.info(
            f"Catalog loaded: {len(self._items)} items, "
            f"{len(self._tag_vocabulary)} tags"
        )
        return self._status

    def _fail(self, message: str) -> None:
        self._items = ()
        self._tag_vocabulary = list(FALLBACK_TAGS)
        self._result_cache.clear()
        self._error = message
        self._status = SessionStatus.FAILED
        self._cursor.reset()
        self._cursor.resize(0)

    def dispatch(self, action: Action) -> FacetState:
        """Apply a facet transition.

        Any change of state sends the cursor back to page 1.

        Args:
            action: Facet action

        Returns:
            The new facet state
        """
        previous = self._state
        self._state = apply(previous, action)

        if self._state != previous:
            for range_field, buffer in self._range_inputs.items():
                buffer.follow(previous.range(range_field), self._state.range(range_field))
            self._cursor.reset()
        self._cursor.resize(len(self._ordered()))
        return self._state

    def range_input(self, range_field: Union[RangeField, str]) -> RangeInputBuffer:
        """Text staging buffer for a range facet, created on first use."""
        range_field = RangeField(range_field)
        if range_field not in self._range_inputs:
            self._range_inputs[range_field] = RangeInputBuffer(
                range_field, self._state.range(range_field)
            )
        return self._range_inputs[range_field]

    def enter_range_text(
        self,
        range_field: Union[RangeField, str],
        bound: Union[Bound, str],
        text: str,
    ) -> FacetState:
        """Feed typed text into a range facet, committing it when it parses."""
        action = self.range_input(range_field).enter(bound, text)
        if action is not None:
            return self.dispatch(action)
        return self._state

    def _ordered(self) -> Tuple[Item, ...]:
        """Filtered and ordered working set for the current state."""
        key = self._state.cache_key()
        if self.config.cache_enabled and key in self._result_cache:
            logger.debug("Result cache hit")
            return self._result_cache[key]

        ordered, _ = self._executor.execute(self._items, self._state)
        result = tuple(ordered)

        if self.config.cache_enabled:
            if len(self._result_cache) >= self.config.cache_size:
                self._result_cache.pop(next(iter(self._result_cache)))
            self._result_cache[key] = result
        return result

    def results(self) -> List[Item]:
        """Every matching item in order, across all pages."""
        return list(self._ordered())

    def view(self) -> BrowseView:
        """Render-ready snapshot of the current page."""
        ordered = self._ordered()
        self._cursor.resize(len(ordered))
        page = paginate(ordered, self._cursor.page, self.config.page_size)

        return BrowseView(
            items=page.items,
            total_results=page.total_items,
            total_pages=page.total_pages,
            page=page.number,
            first_index=page.first_index,
            last_index=page.last_index,
            page_window=tuple(page_window(page.number, page.total_pages)),
            status=self._status,
            error=self._error,
        )

    def tag_counts(self) -> FacetResult:
        """Tag values over the current results, with item counts."""
        return FacetBuilder("tags").add_items(self._ordered()).build()

    def category_counts(self) -> FacetResult:
        """Category values over the current results, with item counts."""
        return FacetBuilder("categories").add_items(self._ordered()).build()

    def _navigate(self, move: Callable[[], int]) -> int:
        self._cursor.resize(len(self._ordered()))
        return move()

    def go_to_page(self, page: int) -> int:
        return self._navigate(lambda: self._cursor.select(page))

    def first_page(self) -> int:
        return self._navigate(self._cursor.first)

    def previous_page(self) -> int:
        return self._navigate(self._cursor.prev)

    def next_page(self) -> int:
        return self._navigate(self._cursor.next)

    def last_page(self) -> int:
        return self._navigate(self._cursor.last)

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def state(self) -> FacetState:
        return self._state

    @property
    def items(self) -> Tuple[Item, ...]:
        """The full normalized working set."""
        return self._items

    @property
    def page(self) -> int:
        return self._cursor.page

    @property
    def tag_vocabulary(self) -> List[str]:
        return list(self._tag_vocabulary)

    @property
    def category_vocabulary(self) -> List[str]:
        return list(CATEGORIES)

    def close(self) -> None:
        """Release the catalog source."""
        self._source.close()

    def __enter__(self) -> "BrowseSession":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


__all__ = [
    "BrowseSession",
    "BrowseConfig",
    "BrowseView",
    "SessionStatus",
]
