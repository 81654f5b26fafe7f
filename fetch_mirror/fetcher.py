"""HTTP fetching with a single redirect hop."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urljoin

import requests

from .config import MirrorConfig
from .errors import FetchError

logger = logging.getLogger("fetch_mirror")

REDIRECT_CODES = {301, 302, 307}


class Fetcher:
    """Thin wrapper around a requests session used for pages and assets."""

    def __init__(
        self,
        config: MirrorConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = config.timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": config.user_agent})

    def _get(self, url: str) -> requests.Response:
        logger.debug("GET %s", url)
        try:
            return self.session.get(url, timeout=self.timeout, allow_redirects=False)
        except (requests.RequestException, ValueError) as exc:
            raise FetchError(f"{url}: {exc}") from exc

    def fetch(self, url: str) -> bytes:
        """Return the response body for ``url``, following at most one redirect."""
        response = self._get(url)
        location = response.headers.get("Location")
        if response.status_code in REDIRECT_CODES and location:
            target = urljoin(url, location)
            logger.debug("Redirected %s -> %s", url, target)
            response = self._get(target)
            url = target

        if not 200 <= response.status_code < 300:
            raise FetchError(f"{url}: HTTP {response.status_code}")
        return response.content

    def close(self) -> None:
        self.session.close()
