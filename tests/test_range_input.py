"""Tests for typed range bound staging."""

from __future__ import annotations

import pytest

from roadbrowse_core.facets.matchers import UNSET, NumericRange
from roadbrowse_core.facets.range_input import Bound, RangeInputBuffer, format_bound
from roadbrowse_core.facets.state import RangeField, SetRange


@pytest.fixture
def buffer() -> RangeInputBuffer:
    return RangeInputBuffer(RangeField.RATING)


def test_typing_commits_each_parsable_prefix(buffer: RangeInputBuffer) -> None:
    assert buffer.enter(Bound.MIN, "1") == SetRange(RangeField.RATING, min=1.0)
    assert buffer.enter(Bound.MIN, "12") == SetRange(RangeField.RATING, min=12.0)
    assert buffer.enter(Bound.MIN, "12.") == SetRange(RangeField.RATING, min=12.0)
    assert buffer.text(Bound.MIN) == "12."
    assert buffer.enter(Bound.MIN, "12.5") == SetRange(RangeField.RATING, min=12.5)


def test_comma_is_a_decimal_separator(buffer: RangeInputBuffer) -> None:
    action = buffer.enter("max", "7,5")

    assert action == SetRange(RangeField.RATING, max=7.5)
    assert action.min is UNSET
    assert buffer.max_text == "7.5"


@pytest.mark.parametrize("text", ["", "."])
def test_empty_text_clears_the_bound(buffer: RangeInputBuffer, text: str) -> None:
    assert buffer.enter(Bound.MAX, text) == SetRange(RangeField.RATING, max=None)


@pytest.mark.parametrize("text", ["abc", "1e5", "-3", "1.2.3", "inf"])
def test_non_numeric_text_is_staged_without_committing(buffer: RangeInputBuffer, text: str) -> None:
    assert buffer.enter(Bound.MIN, text) is None
    assert buffer.min_text == text


def test_texts_start_from_committed_range() -> None:
    buffer = RangeInputBuffer("chapterCount", NumericRange(3.0, 7.5))

    assert buffer.field is RangeField.CHAPTER_COUNT
    assert (buffer.min_text, buffer.max_text) == ("3", "7.5")

    buffer.sync(NumericRange())
    assert (buffer.min_text, buffer.max_text) == ("", "")


def test_follow_only_refreshes_changed_bounds(buffer: RangeInputBuffer) -> None:
    buffer.enter(Bound.MIN, "12.")
    buffer.enter(Bound.MAX, "20")

    buffer.follow(NumericRange(12.0, 20.0), NumericRange(12.0, None))

    assert buffer.min_text == "12."
    assert buffer.max_text == ""


@pytest.mark.parametrize(
    ("value", "text"),
    [(None, ""), (5.0, "5"), (5, "5"), (2.25, "2.25"), (0.0, "0")],
)
def test_format_bound(value, text: str) -> None:
    assert format_bound(value) == text
