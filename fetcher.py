# fetcher.py
from __future__ import annotations

import logging
import time

import httpx

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """The published sheet could not be downloaded."""
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TsvFetcher:
    """Downloads the published TSV, bypassing intermediate caches."""
    def __init__(self, url: str, timeout: float = 15.0, transport: httpx.BaseTransport | None = None):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    def fetch(self) -> str:
        params = {"t": str(int(time.time() * 1000))}
        headers = {"Cache-Control": "no-cache"}
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport,
                              follow_redirects=True) as client:
                res = client.get(self.url, params=params, headers=headers)
                res.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(f"HTTP {e.response.status_code}", status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Network error: {e}") from e
        logger.info("Fetched %d bytes from sheet", len(res.content))
        return res.text


__all__ = ["FetchError", "TsvFetcher"]
