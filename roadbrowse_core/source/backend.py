"""RoadBrowse Catalog Source - Abstract Catalog Retrieval Interface.

A catalog source answers one read with the raw catalog rows. Upstream APIs
wrap the rows differently (bare list, ``{"data": [...]}``, ``{"rows": [...]}``)
and report failure in-band as ``{"ok": false, "message": ...}``;
``extract_rows`` turns all of them into a plain list or an error.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional


class CatalogFetchError(Exception):
    """The catalog could not be retrieved."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def extract_rows(payload: Any) -> List[Dict[str, Any]]:
    """Pull the row list out of a catalog payload.

    Args:
        payload: Decoded JSON body

    Returns:
        Raw rows (empty for unrecognized shapes)

    Raises:
        CatalogFetchError: If the payload is an ``{"ok": false}`` error
    """
    if isinstance(payload, Mapping):
        if payload.get("ok") is False:
            raise CatalogFetchError(str(payload.get("message") or "API error"))
        if isinstance(payload.get("data"), list):
            return list(payload["data"])
        if isinstance(payload.get("rows"), list):
            return list(payload["rows"])
        return []
    if isinstance(payload, list):
        return list(payload)
    return []


class CatalogSource(ABC):
    """Abstract catalog source."""

    @abstractmethod
    def fetch(self) -> List[Dict[str, Any]]:
        """Return raw catalog rows or raise CatalogFetchError."""
        pass

    def close(self) -> None:
        pass


__all__ = ["CatalogSource", "CatalogFetchError", "extract_rows"]
