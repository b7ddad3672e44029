"""RoadBrowse Facet Matchers - Per-Item Facet Predicates.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Iterable, Mapping, Optional, Sequence, Set, Tuple, Union


class TriState(Enum):
    """Active flag on a facet value. Neutral values are simply absent."""

    INCLUDE = 1
    EXCLUDE = -1


class _Unset:
    """Marker for a range bound that was not supplied."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


@dataclass(frozen=True)
class NumericRange:
    """Optional inclusive [min, max] interval."""

    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.min is None and self.max is None

    def merge(
        self,
        min: Union[Optional[float], _Unset] = UNSET,
        max: Union[Optional[float], _Unset] = UNSET,
    ) -> "NumericRange":
        """Return a range with the supplied bounds replaced.

        A bound left as UNSET keeps its current value; None clears it.
        """
        return NumericRange(
            min=self.min if isinstance(min, _Unset) else min,
            max=self.max if isinstance(max, _Unset) else max,
        )


def split_tri(flags: Mapping[str, TriState]) -> Tuple[Set[str], Set[str]]:
    """Partition a tri-state map into (include, exclude) sets."""
    include: Set[str] = set()
    exclude: Set[str] = set()
    for value, flag in flags.items():
        if flag is TriState.INCLUDE:
            include.add(value)
        elif flag is TriState.EXCLUDE:
            exclude.add(value)
    return include, exclude


def match_tri(
    flags: Mapping[str, TriState],
    values: Optional[Iterable[str]],
    strict: bool,
) -> bool:
    """Match item values against a tri-state map.

    An excluded value rejects the item outright, whatever else it carries.
    With no included values the item passes. Otherwise strict mode needs
    every included value on the item, and "any" mode needs at least one.

    Args:
        flags: Facet value -> TriState
        values: The item's values for this facet
        strict: Require all included values

    Returns:
        True if the item passes
    """
    item_values = set(values or ())
    include, exclude = split_tri(flags)

    if item_values & exclude:
        return False
    if not include:
        return True
    if strict:
        return include <= item_values
    return bool(include & item_values)


def match_multi(
    selected: AbstractSet[str],
    value: Union[str, Sequence[str], None],
) -> bool:
    """Match a single value or a value sequence against a selection set.

    An empty selection accepts everything.
    """
    if not selected:
        return True
    if isinstance(value, str):
        return value in selected
    return any(v in selected for v in (value or ()))


def in_range(value: float, bounds: NumericRange) -> bool:
    """Inclusive range check; a missing bound does not constrain."""
    if bounds.min is not None and value < bounds.min:
        return False
    if bounds.max is not None and value > bounds.max:
        return False
    return True


__all__ = [
    "TriState",
    "NumericRange",
    "UNSET",
    "split_tri",
    "match_tri",
    "match_multi",
    "in_range",
]
