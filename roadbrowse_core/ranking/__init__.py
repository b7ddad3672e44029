"""RoadBrowse Ranking Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from roadbrowse_core.ranking.ranker import (
    SortKey,
    SortSpec,
    SORT_SPECS,
    collation_key,
    compare,
    sort_items,
)

__all__ = ["SortKey", "SortSpec", "SORT_SPECS", "collation_key", "compare", "sort_items"]
