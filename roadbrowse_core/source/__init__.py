"""RoadBrowse Catalog Sources.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from roadbrowse_core.source.backend import CatalogSource, CatalogFetchError, extract_rows
from roadbrowse_core.source.memory import MemoryCatalogSource
from roadbrowse_core.source.http import HttpCatalogSource

__all__ = [
    "CatalogSource",
    "CatalogFetchError",
    "extract_rows",
    "MemoryCatalogSource",
    "HttpCatalogSource",
]
