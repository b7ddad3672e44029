"""RoadBrowse Record Normalizer - Raw Record to Canonical Item.

Catalog rows arrive in several shapes: different column names for the same
logical field, values wrapped in a nested ``manga`` object, arrays encoded as
JSON strings or comma lists, ratings on two scales. Every logical field is
resolved through FIELD_PATHS, an ordered list of candidate paths, by one
generic lookup (``first_non_empty``). New source shapes only need new paths.

Normalization is total: any input, including ``{}`` or a non-mapping,
produces a structurally valid Item.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import math
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from roadbrowse_core.catalog.item import (
    AgeRating,
    Item,
    Kind,
    TitleStatus,
    TranslationStatus,
)
from roadbrowse_core.catalog.vocabulary import DEFAULT_RELEASE_FORMAT

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"
DEFAULT_AUTHOR = "Unknown author"

WRAPPER_KEY = "manga"

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)
_PARTIAL_DATE = re.compile(r"^\s*(\d{4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?")


def _paths(*names: str) -> Tuple[str, ...]:
    """Candidate paths: top-level names first, then the wrapped variants."""
    return names + tuple(f"{WRAPPER_KEY}.{name}" for name in names)


FIELD_PATHS: Dict[str, Tuple[str, ...]] = {
    "id": _paths("id"),
    "title": _paths("title"),
    "author": _paths("author", "artist"),
    "kind": _paths("type", "kind"),
    "categories": _paths("genres", "categories"),
    "tags": _paths("tags"),
    "release_year": _paths("release_year", "year"),
    "release_date": _paths("release_date"),
    "added_at": _paths("date_added", "created_at"),
    "chapter_count": _paths("chapters", "chapters_count"),
    "rating10": _paths("rating10"),
    "rating": _paths("rating"),
    "age_rating": _paths("age", "age_rating", "ageRating"),
    "title_status": _paths("title_status", "status"),
    "translation_status": _paths("translation_status"),
    "release_formats": _paths("format"),
    "other_flags": _paths("other"),
    "user_list_flags": _paths("my"),
    "view_count": _paths("views", "view_count"),
    "popularity_score": _paths("popularity", "views", "view_count"),
    "cover_image": _paths("cover_url", "cover", "image", "poster", "thumbnail"),
}

_KIND_ALIASES: Dict[str, Kind] = {
    "manga": Kind.MANGA,
    "манга": Kind.MANGA,
    "manhwa": Kind.MANHWA,
    "манхва": Kind.MANHWA,
    "manhua": Kind.MANHUA,
    "маньхуа": Kind.MANHUA,
}

_AGE_ALIASES: Dict[str, AgeRating] = {
    "0+": AgeRating.ALL_AGES,
    "0": AgeRating.ALL_AGES,
    "12+": AgeRating.TEEN,
    "12": AgeRating.TEEN,
    "16+": AgeRating.OLDER_TEEN,
    "16": AgeRating.OLDER_TEEN,
    "18+": AgeRating.ADULT,
    "18": AgeRating.ADULT,
}

_TITLE_STATUS_ALIASES: Dict[str, TitleStatus] = {
    "ongoing": TitleStatus.ONGOING,
    "releasing": TitleStatus.ONGOING,
    "онгоинг": TitleStatus.ONGOING,
    "выпускается": TitleStatus.ONGOING,
    "продолжается": TitleStatus.ONGOING,
    "completed": TitleStatus.COMPLETED,
    "finished": TitleStatus.COMPLETED,
    "end": TitleStatus.COMPLETED,
    "завершен": TitleStatus.COMPLETED,
    "завершён": TitleStatus.COMPLETED,
    "завершено": TitleStatus.COMPLETED,
    "paused": TitleStatus.PAUSED,
    "hiatus": TitleStatus.PAUSED,
    "пауза": TitleStatus.PAUSED,
}

_TRANSLATION_STATUS_ALIASES: Dict[str, TranslationStatus] = {
    "ongoing": TranslationStatus.ONGOING,
    "продолжается": TranslationStatus.ONGOING,
    "completed": TranslationStatus.COMPLETED,
    "завершен": TranslationStatus.COMPLETED,
    "завершён": TranslationStatus.COMPLETED,
    "завершено": TranslationStatus.COMPLETED,
    "dropped": TranslationStatus.DROPPED,
    "abandoned": TranslationStatus.DROPPED,
    "заброшен": TranslationStatus.DROPPED,
    "заброшено": TranslationStatus.DROPPED,
}


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


def _resolve_path(record: Any, path: str) -> Any:
    value = record
    for part in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value


def first_non_empty(record: Any, *paths: str) -> Any:
    """Return the value at the first path holding a non-empty value.

    Paths are dotted (``"manga.title"``). A value counts as empty when it
    is None, a blank string, or an empty list.

    Args:
        record: Raw record
        *paths: Candidate paths, in priority order

    Returns:
        The first non-empty value, or None
    """
    for path in paths:
        value = _resolve_path(record, path)
        if _is_present(value):
            return value
    return None


def _to_float(value: Any) -> Optional[float]:
    """Parse a finite number from a number or numeric string."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _to_count(value: Any) -> int:
    """Non-negative integer, 0 when missing or invalid."""
    number = _to_float(value)
    if number is None or number < 0:
        return 0
    return int(number)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _alias_key(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip().lower()


def as_str_list(value: Any) -> Optional[List[str]]:
    """Coerce an array-ish field to a list of strings.

    Accepts a native sequence, a JSON array embedded in a string, or a
    comma-separated string. Any other scalar becomes a one-element list.
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None]
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            decoded = None
        if isinstance(decoded, list):
            return [str(v) for v in decoded if v is not None]
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(value)]


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO date/timestamp, epoch number, or partial date."""
    if value is None or isinstance(value, bool):
        return None

    parsed: Optional[datetime] = None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        # Epoch milliseconds when too large to be seconds
        seconds = value / 1000 if abs(value) > 1e11 else value
        try:
            parsed = datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            match = _PARTIAL_DATE.match(text)
            if not match:
                return None
            year, month, day = match.groups()
            try:
                parsed = datetime(int(year), int(month or 1), int(day or 1))
            except ValueError:
                return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def map_kind(value: Any) -> Kind:
    return _KIND_ALIASES.get(_alias_key(value), Kind.MANGA)


def map_age_rating(value: Any) -> AgeRating:
    key = re.sub(r"\s", "", _alias_key(value))
    return _AGE_ALIASES.get(key, AgeRating.TEEN)


def map_title_status(value: Any) -> TitleStatus:
    return _TITLE_STATUS_ALIASES.get(_alias_key(value), TitleStatus.ONGOING)


def map_translation_status(value: Any) -> TranslationStatus:
    return _TRANSLATION_STATUS_ALIASES.get(
        _alias_key(value), TranslationStatus.ONGOING
    )


def _bucket_url(bucket: str, path: str, base_url: Optional[str]) -> str:
    base = (base_url or "").rstrip("/")
    if base:
        return f"{base}/{bucket}/{path}"
    return f"https://{bucket}.s3.wasabisys.com/{path}"


def resolve_cover_url(value: Any, base_url: Optional[str] = None) -> Optional[str]:
    """Resolve a cover reference to an absolute URL.

    Accepted forms:
        - ``https://cdn.example/cover.jpg`` (returned as-is)
        - ``bucket:path/to/cover.jpg`` or ``bucket/path/to/cover.jpg``
        - mappings exposing ``url``, ``href``, or ``path`` (+ ``bucket``)

    Args:
        value: Raw cover reference
        base_url: Public base URL for bucket-relative references

    Returns:
        Absolute URL, or None when the reference is not understood
    """
    if not value:
        return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if _ABSOLUTE_URL.match(text):
            return text

        by_colon = text.split(":")
        by_slash = text.split("/")
        bucket: Optional[str] = None
        path: Optional[str] = None
        if len(by_colon) == 2:
            bucket, path = by_colon
        elif len(by_slash) > 1 and by_slash[1]:
            bucket, path = by_slash[0], "/".join(by_slash[1:])

        if bucket and path:
            return _bucket_url(bucket, path, base_url)
        return None

    if isinstance(value, Mapping):
        for key in ("url", "href"):
            if isinstance(value.get(key), str):
                return resolve_cover_url(value[key], base_url)
        path = value.get("path")
        if isinstance(path, str):
            bucket = value.get("bucket") or value.get("bucketName")
            if bucket:
                return _bucket_url(str(bucket), path, base_url)
            return resolve_cover_url(path, base_url)

    return None


class RecordNormalizer:
    """Turns raw catalog rows into canonical Items."""

    def __init__(self, cover_base_url: Optional[str] = None):
        self.cover_base_url = cover_base_url

    def _get(self, record: Mapping[str, Any], field_name: str) -> Any:
        return first_non_empty(record, *FIELD_PATHS[field_name])

    def _str_tuple(self, record: Mapping[str, Any], field_name: str) -> Optional[Tuple[str, ...]]:
        values = as_str_list(self._get(record, field_name))
        return tuple(values) if values is not None else None

    def _release_year(self, record: Mapping[str, Any]) -> int:
        year = _to_float(self._get(record, "release_year"))
        if year is not None and year > 0:
            return int(year)

        for field_name in ("release_date", "added_at"):
            parsed = _parse_datetime(self._get(record, field_name))
            if parsed is not None:
                return parsed.year

        logger.debug("No usable release year, using current year")
        return datetime.now(timezone.utc).year

    def _rating(self, record: Mapping[str, Any]) -> float:
        rating10 = _to_float(self._get(record, "rating10"))
        if rating10 is not None:
            return _clamp(rating10, 0.0, 10.0)

        rating = _to_float(self._get(record, "rating"))
        if rating is None:
            return 0.0
        # Values on a 0-5 scale are doubled; a genuine 5/10 is doubled too
        if rating <= 5:
            rating *= 2
        return _clamp(rating, 0.0, 10.0)

    def normalize(self, raw: Any) -> Item:
        """Normalize one raw record.

        Args:
            raw: Raw record (normally a mapping)

        Returns:
            Canonical Item
        """
        record: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

        raw_id = self._get(record, "id")
        if raw_id is None:
            item_id = str(uuid.uuid4())
            logger.debug(f"Record without id, generated {item_id}")
        else:
            item_id = str(raw_id)

        title = self._get(record, "title")
        author = self._get(record, "author")
        added_at = _parse_datetime(self._get(record, "added_at"))
        view_count = _to_count(self._get(record, "view_count"))

        return Item(
            id=item_id,
            title=str(title) if title is not None else DEFAULT_TITLE,
            author=str(author) if author is not None else DEFAULT_AUTHOR,
            kind=map_kind(self._get(record, "kind")),
            categories=self._str_tuple(record, "categories") or (),
            tags=self._str_tuple(record, "tags") or (),
            release_year=self._release_year(record),
            chapter_count=_to_count(self._get(record, "chapter_count")),
            rating=self._rating(record),
            age_rating=map_age_rating(self._get(record, "age_rating")),
            title_status=map_title_status(self._get(record, "title_status")),
            translation_status=map_translation_status(
                self._get(record, "translation_status")
            ),
            release_formats=(
                self._str_tuple(record, "release_formats")
                or (DEFAULT_RELEASE_FORMAT,)
            ),
            other_flags=self._str_tuple(record, "other_flags") or (),
            user_list_flags=self._str_tuple(record, "user_list_flags") or (),
            view_count=view_count,
            popularity_score=_to_count(self._get(record, "popularity_score")),
            added_at=added_at or datetime.now(timezone.utc),
            cover_image=resolve_cover_url(
                self._get(record, "cover_image"), self.cover_base_url
            ),
        )

    def normalize_all(self, rows: Iterable[Any]) -> List[Item]:
        """Normalize a batch of rows, preserving order."""
        return [self.normalize(row) for row in rows]


def normalize(raw: Any, cover_base_url: Optional[str] = None) -> Item:
    """Normalize one raw record with a throwaway normalizer."""
    return RecordNormalizer(cover_base_url).normalize(raw)


__all__ = [
    "FIELD_PATHS",
    "RecordNormalizer",
    "normalize",
    "first_non_empty",
    "as_str_list",
    "resolve_cover_url",
    "map_kind",
    "map_age_rating",
    "map_title_status",
    "map_translation_status",
]
