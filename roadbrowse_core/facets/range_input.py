"""RoadBrowse Range Input - Staging for Typed Numeric Bounds.

Users type bounds character by character ("1", "12", "12.", "12.5"). The
buffer keeps whatever was typed and only produces a SetRange action when
the text is empty (clear the bound) or parses to a finite number.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import math
import re
from enum import Enum
from typing import Optional, Union

from roadbrowse_core.facets.matchers import NumericRange
from roadbrowse_core.facets.state import RangeField, SetRange

logger = logging.getLogger(__name__)

_PARTIAL_DECIMAL = re.compile(r"^\d*(\.\d*)?$")


class Bound(Enum):
    MIN = "min"
    MAX = "max"


def format_bound(value: Optional[float]) -> str:
    """Render a committed bound the way a user would type it."""
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


class RangeInputBuffer:
    """Text staging for the two bounds of one range facet."""

    def __init__(self, field: Union[RangeField, str], bounds: Optional[NumericRange] = None):
        self.field = RangeField(field)
        self.min_text = ""
        self.max_text = ""
        self.sync(bounds or NumericRange())

    def sync(self, bounds: NumericRange) -> None:
        """Refresh both texts from the committed range."""
        self.min_text = format_bound(bounds.min)
        self.max_text = format_bound(bounds.max)

    def follow(self, previous: NumericRange, current: NumericRange) -> None:
        """Refresh only the texts whose committed bound changed.

        Leaves in-progress text such as "12." alone while the committed
        value stays the same.
        """
        if previous.min != current.min:
            self.min_text = format_bound(current.min)
        if previous.max != current.max:
            self.max_text = format_bound(current.max)

    def text(self, bound: Union[Bound, str]) -> str:
        return self.min_text if Bound(bound) is Bound.MIN else self.max_text

    def enter(self, bound: Union[Bound, str], text: str) -> Optional[SetRange]:
        """Stage typed text for one bound.

        Args:
            bound: Which bound was edited
            text: Full text of the input

        Returns:
            The SetRange action to dispatch, or None to keep the range as is
        """
        bound = Bound(bound)
        staged = text.replace(",", ".")
        if bound is Bound.MIN:
            self.min_text = staged
        else:
            self.max_text = staged

        if not _PARTIAL_DECIMAL.match(staged):
            logger.debug(f"Ignoring non-numeric {bound.value} input: {staged!r}")
            return None

        if staged in ("", "."):
            return SetRange(self.field, **{bound.value: None})

        try:
            number = float(staged)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return SetRange(self.field, **{bound.value: number})


__all__ = ["Bound", "RangeInputBuffer", "format_bound"]
