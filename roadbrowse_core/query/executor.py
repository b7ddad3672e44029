"""RoadBrowse Query Executor - Facet Filtering and Ordering.

Executes a FacetState against the working set: every item is checked by the
free-text match, both tri-state facets, the multi-select facets and the
range facets, and the survivors are ordered by the state's sort key. The
result is a pure function of (items, state).

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Dict, Iterable, List, Sequence, Tuple, Union

from roadbrowse_core.catalog.item import Item
from roadbrowse_core.facets.matchers import in_range, match_multi, match_tri
from roadbrowse_core.facets.state import FacetState, MultiField, RangeField, TriField
from roadbrowse_core.ranking.ranker import sort_items

logger = logging.getLogger(__name__)


class ExecutionPhase(Enum):
    """Query execution phases."""

    FILTER = auto()
    SORT = auto()


TRI_VALUES: Dict[TriField, Callable[[Item], Sequence[str]]] = {
    TriField.CATEGORIES: lambda it: it.categories,
    TriField.TAGS: lambda it: it.tags,
}

MULTI_VALUES: Dict[MultiField, Callable[[Item], Union[str, Sequence[str]]]] = {
    MultiField.KIND: lambda it: it.kind.value,
    MultiField.AGE_RATING: lambda it: it.age_rating.value,
    MultiField.TITLE_STATUS: lambda it: it.title_status.value,
    MultiField.TRANSLATION_STATUS: lambda it: it.translation_status.value,
    MultiField.RELEASE_FORMAT: lambda it: it.release_formats,
    MultiField.OTHER_FLAGS: lambda it: it.other_flags,
    MultiField.USER_LIST_FLAGS: lambda it: it.user_list_flags,
}

RANGE_VALUES: Dict[RangeField, Callable[[Item], float]] = {
    RangeField.RELEASE_YEAR: lambda it: it.release_year,
    RangeField.CHAPTER_COUNT: lambda it: it.chapter_count,
    RangeField.RATING: lambda it: it.rating,
}


@dataclass
class ExecutionStats:
    """Statistics about one execution.

    Attributes:
        total_items: Items in the working set
        matched_items: Items that passed every facet
        phase_times: Milliseconds spent per phase
    """

    total_items: int = 0
    matched_items: int = 0
    phase_times: Dict[str, float] = field(default_factory=dict)

    def add_phase_time(self, phase: ExecutionPhase, time_ms: float) -> None:
        """Record time for execution phase."""
        self.phase_times[phase.name] = time_ms


def matches_search(item: Item, text: str) -> bool:
    """Case-insensitive substring match on title and author."""
    if not text:
        return True
    return text.lower() in f"{item.title} {item.author}".lower()


def matches(item: Item, state: FacetState) -> bool:
    """Check one item against every criterion of the state."""
    if not matches_search(item, state.search_text):
        return False

    for facet, values in TRI_VALUES.items():
        if not match_tri(state.tri_flags(facet), values(item), state.is_strict(facet)):
            return False

    for facet, value in MULTI_VALUES.items():
        if not match_multi(state.selected(facet), value(item)):
            return False

    for facet, value in RANGE_VALUES.items():
        if not in_range(value(item), state.range(facet)):
            return False

    return True


def filter_items(items: Iterable[Item], state: FacetState) -> List[Item]:
    """Items passing the state, in their original order."""
    return [item for item in items if matches(item, state)]


class QueryExecutor:
    """Runs the filter and sort phases over a working set."""

    def execute(
        self,
        items: Sequence[Item],
        state: FacetState,
    ) -> Tuple[List[Item], ExecutionStats]:
        """Filter then order items.

        Args:
            items: Working set
            state: Facet state

        Returns:
            Ordered matching items and execution statistics
        """
        stats = ExecutionStats(total_items=len(items))

        start = time.perf_counter()
        matched = filter_items(items, state)
        stats.add_phase_time(ExecutionPhase.FILTER, (time.perf_counter() - start) * 1000)

        start = time.perf_counter()
        ordered = sort_items(matched, state.sort_key)
        stats.add_phase_time(ExecutionPhase.SORT, (time.perf_counter() - start) * 1000)

        stats.matched_items = len(ordered)
        logger.debug(
            f"Matched {stats.matched_items}/{stats.total_items} items "
            f"sorted by {state.sort_key.value} ({stats.phase_times})"
        )
        return ordered, stats


__all__ = [
    "ExecutionPhase",
    "ExecutionStats",
    "QueryExecutor",
    "matches",
    "matches_search",
    "filter_items",
    "TRI_VALUES",
    "MULTI_VALUES",
    "RANGE_VALUES",
]
