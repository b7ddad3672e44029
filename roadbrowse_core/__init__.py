"""RoadBrowse - Faceted Catalog Browsing for BlackRoad OS.

Loads a comic/manga catalog once, normalizes heterogeneous records into a
uniform item shape, and answers faceted browse requests (include/exclude
filters, ranges, text search, sorting, pagination) entirely in memory.

Architecture:
┌─────────────────────────────────────────────────────────────────────────────┐
│                           RoadBrowse Session                                │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────────────┐   │
│   │                        Catalog Layer                                │   │
│   │  ┌────────────┐  ┌────────────┐  ┌────────────┐                     │   │
│   │  │   Source   │→ │ Normalizer │→ │    Item    │                     │   │
│   │  │ HTTP / Mem │  │            │  │ Working Set│                     │   │
│   │  └────────────┘  └────────────┘  └────────────┘                     │   │
│   └─────────────────────────────────────────────────────────────────────┘   │
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────────────┐   │
│   │                        Facet Layer                                  │   │
│   │  ┌────────────┐  ┌────────────┐  ┌────────────┐  ┌────────────┐    │   │
│   │  │   Facet    │  │  Matchers  │  │   Range    │  │   Facet    │    │   │
│   │  │   State    │  │            │  │   Input    │  │  Builder   │    │   │
│   │  └────────────┘  └────────────┘  └────────────┘  └────────────┘    │   │
│   └─────────────────────────────────────────────────────────────────────┘   │
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────────────┐   │
│   │                        Query Pipeline                               │   │
│   │  ┌────────────┐  ┌────────────┐  ┌────────────┐                     │   │
│   │  │   Filter   │→ │    Sort    │→ │  Paginate  │                     │   │
│   │  └────────────┘  └────────────┘  └────────────┘                     │   │
│   └─────────────────────────────────────────────────────────────────────┘   │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Key Features:
- Tolerant record normalization with field fallback paths
- Tri-state include/exclude facets with strict (all) or any matching
- Multi-select and numeric range facets
- Stable multi-key sorting with locale-aware name ordering
- Windowed pagination with clamped page cursor

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

__version__ = "1.0.0"
__author__ = "BlackRoad OS"
__license__ = "Proprietary"

# Core engine
from roadbrowse_core.engine import (
    BrowseSession,
    BrowseConfig,
    BrowseView,
    SessionStatus,
)

# Catalog
from roadbrowse_core.catalog.item import (
    Item,
    Kind,
    AgeRating,
    TitleStatus,
    TranslationStatus,
)
from roadbrowse_core.catalog.normalizer import (
    RecordNormalizer,
    normalize,
    resolve_cover_url,
)

# Facets
from roadbrowse_core.facets.state import (
    FacetState,
    INITIAL_STATE,
    TriField,
    MultiField,
    RangeField,
    CycleTri,
    ClearTri,
    SetStrict,
    ToggleMulti,
    SetRange,
    SetSearch,
    SetSort,
    Reset,
    apply,
)
from roadbrowse_core.facets.matchers import (
    TriState,
    NumericRange,
    match_tri,
    match_multi,
    in_range,
)
from roadbrowse_core.facets.builder import (
    FacetBuilder,
    FacetResult,
    FacetValue,
)

# Ranking
from roadbrowse_core.ranking.ranker import (
    SortKey,
    sort_items,
)

# Query
from roadbrowse_core.query.executor import QueryExecutor
from roadbrowse_core.query.paginator import (
    Page,
    PageCursor,
    paginate,
    page_window,
)

# Sources
from roadbrowse_core.source.backend import (
    CatalogSource,
    CatalogFetchError,
    extract_rows,
)
from roadbrowse_core.source.memory import MemoryCatalogSource
from roadbrowse_core.source.http import HttpCatalogSource

__all__ = [
    # Version
    "__version__",
    "__author__",
    "__license__",
    # Core
    "BrowseSession",
    "BrowseConfig",
    "BrowseView",
    "SessionStatus",
    # Catalog
    "Item",
    "Kind",
    "AgeRating",
    "TitleStatus",
    "TranslationStatus",
    "RecordNormalizer",
    "normalize",
    "resolve_cover_url",
    # Facets
    "FacetState",
    "INITIAL_STATE",
    "TriField",
    "MultiField",
    "RangeField",
    "CycleTri",
    "ClearTri",
    "SetStrict",
    "ToggleMulti",
    "SetRange",
    "SetSearch",
    "SetSort",
    "Reset",
    "apply",
    "TriState",
    "NumericRange",
    "match_tri",
    "match_multi",
    "in_range",
    "FacetBuilder",
    "FacetResult",
    "FacetValue",
    # Ranking
    "SortKey",
    "sort_items",
    # Query
    "QueryExecutor",
    "Page",
    "PageCursor",
    "paginate",
    "page_window",
    # Sources
    "CatalogSource",
    "CatalogFetchError",
    "extract_rows",
    "MemoryCatalogSource",
    "HttpCatalogSource",
]
