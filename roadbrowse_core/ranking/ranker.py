"""RoadBrowse Ranker - Multi-Key Item Ordering.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Tuple

from roadbrowse_core.catalog.item import Item


class SortKey(Enum):
    """Available orderings."""

    POPULARITY = "popularity"
    RATING = "rating"
    VIEWS = "views"
    RECENCY = "recency"
    RELEASE_YEAR = "releaseYear"
    CHAPTER_COUNT = "chapterCount"
    NAME_ASCENDING = "nameAscending"
    NAME_DESCENDING = "nameDescending"


def collation_key(text: str) -> Tuple[str, str]:
    """Accent- and case-insensitive sort key with the raw text as tiebreak.

    Decomposes the text, drops combining marks and case-folds, so "Élan",
    "elan" and "Elan" sort together and "ё" sorts with "е".
    """
    decomposed = unicodedata.normalize("NFKD", text)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c))
    return folded.casefold(), text


@dataclass(frozen=True)
class SortSpec:
    """How one SortKey orders items."""

    value: Callable[[Item], Any]
    descending: bool


SORT_SPECS: Dict[SortKey, SortSpec] = {
    SortKey.POPULARITY: SortSpec(lambda it: it.popularity_score, True),
    SortKey.RATING: SortSpec(lambda it: it.rating, True),
    SortKey.VIEWS: SortSpec(lambda it: it.view_count, True),
    SortKey.RECENCY: SortSpec(lambda it: it.added_at, True),
    SortKey.RELEASE_YEAR: SortSpec(lambda it: it.release_year, True),
    SortKey.CHAPTER_COUNT: SortSpec(lambda it: it.chapter_count, True),
    SortKey.NAME_ASCENDING: SortSpec(lambda it: collation_key(it.title), False),
    SortKey.NAME_DESCENDING: SortSpec(lambda it: collation_key(it.title), True),
}


def compare(a: Item, b: Item, key: SortKey) -> int:
    """Compare two items under a sort key.

    Args:
        a: First item
        b: Second item
        key: Sort key

    Returns:
        Negative if a sorts first, positive if b does, 0 on equal keys
    """
    spec = SORT_SPECS[SortKey(key)]
    left, right = spec.value(a), spec.value(b)
    if left == right:
        return 0
    result = -1 if left < right else 1
    return -result if spec.descending else result


def sort_items(items: Iterable[Item], key: SortKey = SortKey.POPULARITY) -> List[Item]:
    """Order items by key.

    sorted() is stable in both directions, so items with equal sort values
    keep their incoming order.
    """
    spec = SORT_SPECS[SortKey(key)]
    return sorted(items, key=spec.value, reverse=spec.descending)


__all__ = ["SortKey", "SortSpec", "SORT_SPECS", "collation_key", "compare", "sort_items"]
