"""RoadBrowse Paginator - Fixed-Size Result Pages.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from roadbrowse_core.catalog.item import Item

DEFAULT_PAGE_SIZE = 24

# Show every page number up to this many pages
WINDOW_FULL_LIMIT = 7


def count_pages(total_items: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages; an empty result still has one (empty) page."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, math.ceil(total_items / page_size))


def clamp_page(page: int, total_pages: int) -> int:
    return max(1, min(total_pages, page))


@dataclass(frozen=True)
class Page:
    """One page of an ordered result.

    Attributes:
        items: Items on this page
        number: 1-based page number
        page_size: Items per page
        total_items: Size of the whole result
        total_pages: Number of pages
    """

    items: Tuple[Item, ...]
    number: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def first_index(self) -> int:
        """1-based position of the first item shown, 0 when empty."""
        if not self.items:
            return 0
        return (self.number - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        """1-based position of the last item shown, 0 when empty."""
        if not self.items:
            return 0
        return self.first_index + len(self.items) - 1

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)


def paginate(items: Sequence[Item], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """Slice out one page, clamping the page number into range.

    Args:
        items: Ordered result
        page: Requested 1-based page
        page_size: Items per page

    Returns:
        The page
    """
    pages = count_pages(len(items), page_size)
    number = clamp_page(page, pages)
    start = (number - 1) * page_size
    return Page(
        items=tuple(items[start:start + page_size]),
        number=number,
        page_size=page_size,
        total_items=len(items),
        total_pages=pages,
    )


def page_window(page: int, total_pages: int) -> List[Optional[int]]:
    """Page numbers for pagination controls, None marking a gap.

    >>> page_window(5, 10)
    [1, None, 4, 5, 6, None, 10]
    """
    if total_pages <= WINDOW_FULL_LIMIT:
        return list(range(1, total_pages + 1))
    if page <= 3:
        return [1, 2, 3, None, total_pages]
    if page >= total_pages - 2:
        return [1, None, total_pages - 2, total_pages - 1, total_pages]
    return [1, None, page - 1, page, page + 1, None, total_pages]


class PageCursor:
    """Current page of a session, always kept within [1, total_pages]."""

    def __init__(self, total_items: int = 0, page_size: int = DEFAULT_PAGE_SIZE):
        self.page_size = page_size
        self.total_pages = count_pages(total_items, page_size)
        self.page = 1

    def select(self, page: int) -> int:
        self.page = clamp_page(page, self.total_pages)
        return self.page

    def first(self) -> int:
        return self.select(1)

    def prev(self) -> int:
        return self.select(self.page - 1)

    def next(self) -> int:
        return self.select(self.page + 1)

    def last(self) -> int:
        return self.select(self.total_pages)

    def reset(self) -> int:
        """Back to the first page."""
        self.page = 1
        return self.page

    def resize(self, total_items: int) -> int:
        """Adopt a new result size, pulling the page down if it fell off the end."""
        self.total_pages = count_pages(total_items, self.page_size)
        return self.select(self.page)

    def __repr__(self) -> str:
        return f"PageCursor(page={self.page}, total_pages={self.total_pages})"


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "Page",
    "PageCursor",
    "paginate",
    "page_window",
    "count_pages",
    "clamp_page",
]
