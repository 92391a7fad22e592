"""
HTTP page fetcher with classified failures.
"""

from __future__ import annotations

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.exceptions import ReadTimeoutError

from icon_scraper.scraping.config.models import IconScrapingSettings
from icon_scraper.scraping.errors import FetchError, FetchTimeoutError, PageNotFoundError
from icon_scraper.scraping.logging_utils import log_event

logger = logging.getLogger(__name__)


def _is_body_read_timeout(exc: requests.RequestException) -> bool:
    # A stall while reading the body surfaces as ConnectionError wrapping
    # urllib3's ReadTimeoutError rather than as requests.Timeout.
    return any(isinstance(arg, ReadTimeoutError) for arg in exc.args)


def build_session(*, pool_size: int) -> requests.Session:
    """
    Create a session whose connection pool can serve `pool_size` threads.
    """

    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


class PageFetcher:
    """
    Fetches page bodies and maps transport failures onto the error taxonomy.

    Safe to share between worker threads.
    """

    def __init__(
        self,
        *,
        settings: IconScrapingSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._session = session or build_session(pool_size=settings.max_concurrency)
        self._timeout_seconds = settings.timeout_seconds
        self.request_headers = {"User-Agent": settings.user_agent}

    def fetch(self, url: str) -> str:
        """
        GET `url` and return the decoded body text.
        """

        try:
            response = self._session.get(
                url,
                headers=self.request_headers,
                timeout=self._timeout_seconds,
                allow_redirects=True,
            )
        except requests.Timeout as exc:
            raise FetchTimeoutError(url=url, timeout_seconds=self._timeout_seconds) from exc
        except requests.RequestException as exc:
            if _is_body_read_timeout(exc):
                raise FetchTimeoutError(url=url, timeout_seconds=self._timeout_seconds) from exc
            raise FetchError(f"Request failed for {url}: {exc}", url=url) from exc

        if response.status_code == 404:
            raise PageNotFoundError(url=url)
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            log_event(
                logger,
                logging.DEBUG,
                "page_fetch_http_error",
                url=url,
                status_code=response.status_code,
            )
            raise FetchError(
                f"HTTP {response.status_code} for {url}",
                url=url,
                status_code=response.status_code,
            ) from exc
        return response.text

    def close(self) -> None:
        self._session.close()
