"""RoadBrowse HTTP Source - Catalog Retrieval over HTTP.

One GET per session, no retry: a failed fetch is reported to the session,
which surfaces it instead of trying again.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from roadbrowse_core.source.backend import CatalogFetchError, CatalogSource, extract_rows

logger = logging.getLogger(__name__)


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class HttpCatalogSource(CatalogSource):
    """Fetches the catalog from a JSON endpoint."""

    def __init__(
        self,
        url: str,
        *,
        limit: Optional[int] = 200,
        timeout_s: float = 30.0,
        user_agent: Optional[str] = None,
    ):
        """Initialize source.

        Args:
            url: Catalog endpoint
            limit: Value for the ``limit`` query parameter (None to omit)
            timeout_s: Request timeout in seconds
            user_agent: User-Agent header (optional)
        """
        self.url = url
        self.limit = limit
        self.timeout_s = timeout_s
        self.user_agent = user_agent

    def fetch(self) -> List[Dict[str, Any]]:
        """Fetch and unwrap the catalog rows.

        Raises:
            CatalogFetchError: On transport errors, non-2xx responses, bodies
                that are not JSON, or ``{"ok": false}`` bodies
        """
        params = {"limit": self.limit} if self.limit is not None else None
        headers = {"User-Agent": self.user_agent} if self.user_agent else None

        try:
            with httpx.Client(timeout=self.timeout_s, follow_redirects=True) as client:
                response = client.get(self.url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            logger.error(f"Catalog request to {self.url} failed: {exc}")
            raise CatalogFetchError(f"Request failed: {exc}") from exc

        payload = _decode_json(response)

        if not response.is_success:
            # Prefer the message of an {ok: false} body
            message = f"HTTP {response.status_code}"
            if isinstance(payload, dict) and payload.get("ok") is False and payload.get("message"):
                message = str(payload["message"])
            raise CatalogFetchError(message, status_code=response.status_code)

        if payload is None:
            raise CatalogFetchError("Catalog response is not valid JSON", status_code=response.status_code)

        rows = extract_rows(payload)
        logger.debug(f"Fetched {len(rows)} catalog rows from {self.url}")
        return rows


__all__ = ["HttpCatalogSource"]
