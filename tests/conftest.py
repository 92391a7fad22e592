"""
Shared fixtures for scraping tests.

All HTTP traffic is served from in-memory pages; no test touches the network.
"""

from __future__ import annotations

import io
import threading

import pytest

from icon_scraper.scraping.config import IconScrapingSettings
from icon_scraper.scraping.progress import ProgressReporter

BASE_URL = "https://poedb.tw"


class FakeFetcher:
    """
    Page source mapping absolute URLs to bodies or exceptions.
    """

    def __init__(self) -> None:
        self.pages: dict[str, str | Exception] = {}
        self.requested: list[str] = []
        self._lock = threading.Lock()

    def add(self, path: str, body: str | Exception) -> None:
        self.pages[f"{BASE_URL}{path}"] = body

    def fetch(self, url: str) -> str:
        with self._lock:
            self.requested.append(url)
        body = self.pages.get(url)
        if body is None:
            raise AssertionError(f"Unexpected fetch: {url}")
        if isinstance(body, Exception):
            raise body
        return body


def listing_html(*anchors: tuple[str | None, str | None]) -> str:
    """Listing page with one `a.uniqueitem` per (href, name) pair."""
    parts = []
    for href, name in anchors:
        href_attr = f' href="{href}"' if href is not None else ""
        name_span = f'<span class="uniqueName">{name}</span>' if name is not None else ""
        parts.append(f'<a class="uniqueitem"{href_attr}>{name_span}<span class="type">Ring</span></a>')
    return f"<html><body><div class='items'>{''.join(parts)}</div></body></html>"


def detail_html(icon: str | None, *, label: str = "Icon") -> str:
    """Detail page with a key/value table, optionally carrying an icon row."""
    rows = ["<tr><td>Level</td><td>48</td></tr>"]
    if icon is not None:
        rows.append(f"<tr><td>{label}</td><td>{icon}</td></tr>")
    rows.append("<tr><td>Tags</td><td>ring, default</td></tr>")
    return f"<html><body><table>{''.join(rows)}</table></body></html>"


@pytest.fixture()
def settings() -> IconScrapingSettings:
    return IconScrapingSettings(base_url=BASE_URL, max_concurrency=4)


@pytest.fixture()
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture()
def console() -> io.StringIO:
    return io.StringIO()


@pytest.fixture()
def reporter(console: io.StringIO) -> ProgressReporter:
    return ProgressReporter(stream=console)
