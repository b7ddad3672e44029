"""RoadBrowse Memory Source - In-Process Catalog Payloads.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Any, Dict, List

from roadbrowse_core.source.backend import CatalogSource, extract_rows


class MemoryCatalogSource(CatalogSource):
    """Serves an already-decoded payload in any of the accepted shapes."""

    def __init__(self, payload: Any):
        self.payload = payload
        self.fetch_count = 0

    def fetch(self) -> List[Dict[str, Any]]:
        self.fetch_count += 1
        return extract_rows(self.payload)


__all__ = ["MemoryCatalogSource"]
