"""RoadBrowse Faceted Browsing Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from roadbrowse_core.facets.builder import (
    FacetBuilder,
    FacetValue,
    FacetResult,
    discover_tags,
)
from roadbrowse_core.facets.matchers import (
    TriState,
    NumericRange,
    UNSET,
    match_tri,
    match_multi,
    in_range,
)
from roadbrowse_core.facets.range_input import (
    Bound,
    RangeInputBuffer,
)
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

__all__ = [
    "FacetBuilder",
    "FacetValue",
    "FacetResult",
    "discover_tags",
    "TriState",
    "NumericRange",
    "UNSET",
    "match_tri",
    "match_multi",
    "in_range",
    "Bound",
    "RangeInputBuffer",
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
]
