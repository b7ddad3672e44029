"""RoadBrowse Facet State - Browsing Filter State Machine.

FacetState holds every active criterion of a browsing session. It only
changes through ``apply(state, action)``, which returns a new value and
never touches the old one, so any two snapshots can be compared directly.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Union

from roadbrowse_core.facets.matchers import UNSET, NumericRange, TriState, _Unset
from roadbrowse_core.ranking.ranker import SortKey


class TriField(Enum):
    """Facets with include/exclude flags."""

    CATEGORIES = "categories"
    TAGS = "tags"


class MultiField(Enum):
    """Facets with a plain set of accepted values."""

    KIND = "kind"
    AGE_RATING = "ageRating"
    TITLE_STATUS = "titleStatus"
    TRANSLATION_STATUS = "translationStatus"
    RELEASE_FORMAT = "releaseFormat"
    OTHER_FLAGS = "otherFlags"
    USER_LIST_FLAGS = "userListFlags"


class RangeField(Enum):
    """Numeric range facets."""

    RELEASE_YEAR = "releaseYear"
    CHAPTER_COUNT = "chapterCount"
    RATING = "rating"


# (flags attribute, strict attribute)
_TRI_ATTRS: Dict[TriField, Tuple[str, str]] = {
    TriField.CATEGORIES: ("category_flags", "category_strict"),
    TriField.TAGS: ("tag_flags", "tag_strict"),
}

_MULTI_ATTRS: Dict[MultiField, str] = {
    MultiField.KIND: "kind",
    MultiField.AGE_RATING: "age_rating",
    MultiField.TITLE_STATUS: "title_status",
    MultiField.TRANSLATION_STATUS: "translation_status",
    MultiField.RELEASE_FORMAT: "release_format",
    MultiField.OTHER_FLAGS: "other_flags",
    MultiField.USER_LIST_FLAGS: "user_list_flags",
}

_RANGE_ATTRS: Dict[RangeField, str] = {
    RangeField.RELEASE_YEAR: "release_year",
    RangeField.CHAPTER_COUNT: "chapter_count",
    RangeField.RATING: "rating",
}

# neutral -> include -> exclude -> neutral
_NEXT_FLAG: Dict[Optional[TriState], Optional[TriState]] = {
    None: TriState.INCLUDE,
    TriState.INCLUDE: TriState.EXCLUDE,
    TriState.EXCLUDE: None,
}


def _empty_flags() -> Mapping[str, TriState]:
    return MappingProxyType({})


@dataclass(frozen=True)
class FacetState:
    """All active filter criteria of a browsing session.

    Attributes:
        category_flags: Category value -> TriState (absent = neutral)
        tag_flags: Tag value -> TriState (absent = neutral)
        category_strict: Require all included categories
        tag_strict: Require all included tags
        kind: Accepted kinds
        age_rating: Accepted age ratings
        title_status: Accepted title statuses
        translation_status: Accepted translation statuses
        release_format: Accepted release formats
        other_flags: Accepted other flags
        user_list_flags: Accepted user lists
        release_year: Release year bounds
        chapter_count: Chapter count bounds
        rating: Rating bounds
        search_text: Case-insensitive title/author substring
        sort_key: Result ordering
    """

    category_flags: Mapping[str, TriState] = field(default_factory=_empty_flags)
    tag_flags: Mapping[str, TriState] = field(default_factory=_empty_flags)
    category_strict: bool = False
    tag_strict: bool = False
    kind: FrozenSet[str] = frozenset()
    age_rating: FrozenSet[str] = frozenset()
    title_status: FrozenSet[str] = frozenset()
    translation_status: FrozenSet[str] = frozenset()
    release_format: FrozenSet[str] = frozenset()
    other_flags: FrozenSet[str] = frozenset()
    user_list_flags: FrozenSet[str] = frozenset()
    release_year: NumericRange = NumericRange()
    chapter_count: NumericRange = NumericRange()
    rating: NumericRange = NumericRange()
    search_text: str = ""
    sort_key: SortKey = SortKey.POPULARITY

    def tri_flags(self, facet: Union[TriField, str]) -> Mapping[str, TriState]:
        return getattr(self, _TRI_ATTRS[TriField(facet)][0])

    def is_strict(self, facet: Union[TriField, str]) -> bool:
        return getattr(self, _TRI_ATTRS[TriField(facet)][1])

    def selected(self, facet: Union[MultiField, str]) -> FrozenSet[str]:
        return getattr(self, _MULTI_ATTRS[MultiField(facet)])

    def range(self, facet: Union[RangeField, str]) -> NumericRange:
        return getattr(self, _RANGE_ATTRS[RangeField(facet)])

    @property
    def is_empty(self) -> bool:
        """True when no criterion constrains the result set."""
        return (
            not self.category_flags
            and not self.tag_flags
            and all(not self.selected(f) for f in MultiField)
            and all(self.range(f).is_open for f in RangeField)
            and not self.search_text
        )

    def cache_key(self) -> Tuple[Any, ...]:
        """Hashable key that is equal for equal states."""
        return (
            tuple(sorted((k, v.value) for k, v in self.category_flags.items())),
            tuple(sorted((k, v.value) for k, v in self.tag_flags.items())),
            self.category_strict,
            self.tag_strict,
            tuple(tuple(sorted(self.selected(f))) for f in MultiField),
            tuple((self.range(f).min, self.range(f).max) for f in RangeField),
            self.search_text,
            self.sort_key.value,
        )


INITIAL_STATE = FacetState()


@dataclass(frozen=True)
class CycleTri:
    """Advance a value's flag: neutral -> include -> exclude -> neutral."""

    field: TriField
    value: str


@dataclass(frozen=True)
class ClearTri:
    """Drop every flag of one tri-state facet."""

    field: TriField


@dataclass(frozen=True)
class SetStrict:
    field: TriField
    value: bool


@dataclass(frozen=True)
class ToggleMulti:
    """Add the value to the selection if absent, else remove it."""

    field: MultiField
    value: Union[str, Enum]


@dataclass(frozen=True)
class SetRange:
    """Merge bounds into a range. UNSET keeps a bound, None clears it."""

    field: RangeField
    min: Union[Optional[float], _Unset] = UNSET
    max: Union[Optional[float], _Unset] = UNSET


@dataclass(frozen=True)
class SetSearch:
    text: str


@dataclass(frozen=True)
class SetSort:
    key: SortKey


@dataclass(frozen=True)
class Reset:
    pass


Action = Union[CycleTri, ClearTri, SetStrict, ToggleMulti, SetRange, SetSearch, SetSort, Reset]


def apply(state: FacetState, action: Action) -> FacetState:
    """Apply one transition.

    Args:
        state: Current state (left untouched)
        action: Transition to apply

    Returns:
        The new state

    Raises:
        ValueError: If the action names a field outside the schema
        TypeError: If the action type is unknown
    """
    if isinstance(action, CycleTri):
        attr = _TRI_ATTRS[TriField(action.field)][0]
        flags = dict(getattr(state, attr))
        next_flag = _NEXT_FLAG[flags.get(action.value)]
        if next_flag is None:
            flags.pop(action.value, None)
        else:
            flags[action.value] = next_flag
        return replace(state, **{attr: MappingProxyType(flags)})

    if isinstance(action, ClearTri):
        attr = _TRI_ATTRS[TriField(action.field)][0]
        return replace(state, **{attr: _empty_flags()})

    if isinstance(action, SetStrict):
        attr = _TRI_ATTRS[TriField(action.field)][1]
        return replace(state, **{attr: bool(action.value)})

    if isinstance(action, ToggleMulti):
        attr = _MULTI_ATTRS[MultiField(action.field)]
        value = action.value.value if isinstance(action.value, Enum) else str(action.value)
        current: FrozenSet[str] = getattr(state, attr)
        updated = current - {value} if value in current else current | {value}
        return replace(state, **{attr: updated})

    if isinstance(action, SetRange):
        attr = _RANGE_ATTRS[RangeField(action.field)]
        merged = getattr(state, attr).merge(min=action.min, max=action.max)
        return replace(state, **{attr: merged})

    if isinstance(action, SetSearch):
        return replace(state, search_text=action.text)

    if isinstance(action, SetSort):
        return replace(state, sort_key=SortKey(action.key))

    if isinstance(action, Reset):
        return INITIAL_STATE

    raise TypeError(f"Unknown facet action: {action!r}")


__all__ = [
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
    "Action",
    "apply",
]
