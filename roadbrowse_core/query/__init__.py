"""RoadBrowse Query Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from roadbrowse_core.query.executor import (
    ExecutionPhase,
    ExecutionStats,
    QueryExecutor,
    filter_items,
    matches,
)
from roadbrowse_core.query.paginator import (
    DEFAULT_PAGE_SIZE,
    Page,
    PageCursor,
    paginate,
    page_window,
)

__all__ = [
    "ExecutionPhase",
    "ExecutionStats",
    "QueryExecutor",
    "filter_items",
    "matches",
    "DEFAULT_PAGE_SIZE",
    "Page",
    "PageCursor",
    "paginate",
    "page_window",
]
