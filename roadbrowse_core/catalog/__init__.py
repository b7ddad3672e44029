"""RoadBrowse Catalog Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from roadbrowse_core.catalog.item import (
    Item,
    Kind,
    AgeRating,
    TitleStatus,
    TranslationStatus,
)
from roadbrowse_core.catalog.normalizer import (
    FIELD_PATHS,
    RecordNormalizer,
    normalize,
    first_non_empty,
    as_str_list,
    resolve_cover_url,
)
from roadbrowse_core.catalog.vocabulary import (
    CATEGORIES,
    FALLBACK_TAGS,
    RELEASE_FORMATS,
    OTHER_FLAGS,
    USER_LISTS,
)

__all__ = [
    "Item",
    "Kind",
    "AgeRating",
    "TitleStatus",
    "TranslationStatus",
    "FIELD_PATHS",
    "RecordNormalizer",
    "normalize",
    "first_non_empty",
    "as_str_list",
    "resolve_cover_url",
    "CATEGORIES",
    "FALLBACK_TAGS",
    "RELEASE_FORMATS",
    "OTHER_FLAGS",
    "USER_LISTS",
]
