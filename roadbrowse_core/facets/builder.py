"""RoadBrowse Facet Builder - Vocabulary Discovery and Value Counts.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from roadbrowse_core.catalog.item import Item
from roadbrowse_core.catalog.vocabulary import FALLBACK_TAGS
from roadbrowse_core.ranking.ranker import collation_key


@dataclass
class FacetValue:
    """A single facet value with count."""
    value: str
    count: int = 0


@dataclass
class FacetResult:
    """Result of facet computation."""
    name: str
    values: List[FacetValue] = field(default_factory=list)
    total: int = 0
    missing: int = 0

    @property
    def vocabulary(self) -> List[str]:
        return [v.value for v in self.values]


class FacetBuilder:
    """Collects the values of one multi-valued facet."""

    def __init__(self, field: str, size: Optional[int] = None):
        self.field = field
        self.size = size
        self._counts: Dict[str, int] = {}
        self._missing = 0

    def add(self, values: Optional[Sequence[str]]) -> None:
        if not values:
            self._missing += 1
            return
        for value in set(values):
            self._counts[value] = self._counts.get(value, 0) + 1

    def add_items(self, items: Iterable[Item]) -> "FacetBuilder":
        for item in items:
            self.add(getattr(item, self.field))
        return self

    def build(self) -> FacetResult:
        """Values in collation order, each with the number of items carrying it."""
        ordered = sorted(self._counts.items(), key=lambda x: collation_key(x[0]))
        if self.size is not None:
            ordered = ordered[:self.size]

        return FacetResult(
            name=self.field,
            values=[FacetValue(value=v, count=c) for v, c in ordered],
            total=sum(self._counts.values()),
            missing=self._missing,
        )


def discover_tags(items: Iterable[Item]) -> List[str]:
    """Sorted union of item tags, or the fallback list when there are none."""
    vocabulary = FacetBuilder("tags").add_items(items).build().vocabulary
    return vocabulary or list(FALLBACK_TAGS)


__all__ = ["FacetBuilder", "FacetValue", "FacetResult", "discover_tags"]
