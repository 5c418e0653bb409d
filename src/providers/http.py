"""Provider fetching the position export over HTTP."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import requests

from .base import DataNotAvailable, PositionDataProvider, ProviderError, decode_records

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpPositionProvider(PositionDataProvider):
    """Fetches trade rows from a URL serving a JSON array.

    Expected environment variables:
        * ``POSITIONS_URL`` - Location of the published ``positions.json``.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.url = url or os.getenv("POSITIONS_URL", "")
        self.timeout = float(timeout)
        self.session = session or requests.Session()

    @property
    def name(self) -> str:
        return "http"

    def load_records(self) -> List[Dict[str, Any]]:
        if not self.url:
            raise ProviderError("No positions URL configured (set POSITIONS_URL)")
        try:
            response = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ProviderError(f"Failed to fetch {self.url}: {exc}") from exc

        if response.status_code == 404:
            raise DataNotAvailable(f"{self.url} not found - export positions first")
        if response.status_code != 200:
            raise ProviderError(f"Failed to load {self.url}: HTTP {response.status_code}")

        logger.debug("Fetched %d bytes of positions from %s", len(response.content), self.url)
        return decode_records(response.text, self.url)


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "HttpPositionProvider"]
