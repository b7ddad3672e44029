"""RoadBrowse Catalog Item - Canonical Item Representation.

The Item is the fully-typed shape every downstream component works with.
It is produced once per fetch by the normalizer and never mutated.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from roadbrowse_core.catalog.vocabulary import DEFAULT_RELEASE_FORMAT


class Kind(Enum):
    """Release format of a title."""

    MANGA = "Manga"
    MANHWA = "Manhwa"
    MANHUA = "Manhua"


class AgeRating(Enum):
    """Age rating."""

    ALL_AGES = "0+"
    TEEN = "12+"
    OLDER_TEEN = "16+"
    ADULT = "18+"


class TitleStatus(Enum):
    """Publication status of the original work."""

    ONGOING = "Ongoing"
    COMPLETED = "Completed"
    PAUSED = "Paused"


class TranslationStatus(Enum):
    """Status of the translation."""

    ONGOING = "Ongoing"
    COMPLETED = "Completed"
    DROPPED = "Dropped"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Item:
    """Canonical catalog item.

    Attributes:
        id: Item identifier
        title: Display title
        author: Author or artist
        kind: Release format
        categories: Values from the fixed category vocabulary
        tags: Free-form tags
        release_year: Year of first release
        chapter_count: Number of chapters
        rating: Rating on a 0-10 scale
        age_rating: Age rating
        title_status: Publication status
        translation_status: Translation status
        release_formats: Release format flags (web, print, ...)
        other_flags: Miscellaneous flags used only for filtering
        user_list_flags: User list memberships used only for filtering
        view_count: Total views
        popularity_score: Popularity used by the default ordering
        added_at: When the item was added to the catalog
        cover_image: Resolved cover URL
    """

    id: str
    title: str = "Untitled"
    author: str = "Unknown author"
    kind: Kind = Kind.MANGA
    categories: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    release_year: int = field(default_factory=lambda: _utcnow().year)
    chapter_count: int = 0
    rating: float = 0.0
    age_rating: AgeRating = AgeRating.TEEN
    title_status: TitleStatus = TitleStatus.ONGOING
    translation_status: TranslationStatus = TranslationStatus.ONGOING
    release_formats: Tuple[str, ...] = (DEFAULT_RELEASE_FORMAT,)
    other_flags: Tuple[str, ...] = ()
    user_list_flags: Tuple[str, ...] = ()
    view_count: int = 0
    popularity_score: int = 0
    added_at: datetime = field(default_factory=_utcnow)
    cover_image: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "kind": self.kind.value,
            "categories": list(self.categories),
            "tags": list(self.tags),
            "release_year": self.release_year,
            "chapter_count": self.chapter_count,
            "rating": self.rating,
            "age_rating": self.age_rating.value,
            "title_status": self.title_status.value,
            "translation_status": self.translation_status.value,
            "release_formats": list(self.release_formats),
            "other_flags": list(self.other_flags),
            "user_list_flags": list(self.user_list_flags),
            "view_count": self.view_count,
            "popularity_score": self.popularity_score,
            "added_at": self.added_at.isoformat(),
            "cover_image": self.cover_image,
        }


__all__ = [
    "Item",
    "Kind",
    "AgeRating",
    "TitleStatus",
    "TranslationStatus",
]
