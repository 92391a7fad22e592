"""
icon_scraper/services/icon_scraping_service.py

Service orchestration for unique item icon scraping.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from functools import lru_cache

from icon_scraper.domain import ScrapeRunSummary
from icon_scraper.scraping.config import IconScrapingSettings, get_icon_scraping_settings
from icon_scraper.scraping.engine import (
    STATUS_DISCOVERY_FAILED,
    STATUS_WRITE_FAILED,
    UniqueIconScrapingEngine,
)
from icon_scraper.scraping.fetcher import PageFetcher
from icon_scraper.scraping.progress import ProgressReporter

EXIT_CODES = {
    STATUS_DISCOVERY_FAILED: 1,
    STATUS_WRITE_FAILED: 2,
}


class IconScrapingService:
    """
    Runs the icon scraping pipeline with optional setting overrides.
    """

    def __init__(self, settings: IconScrapingSettings | None = None) -> None:
        self._settings = settings or get_icon_scraping_settings()

    def scrape(
        self,
        *,
        output_path: str | None = None,
        max_concurrency: int | None = None,
        listing_path: str | None = None,
        reporter: ProgressReporter | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ScrapeRunSummary:
        settings = self._apply_overrides(
            output_path=output_path,
            max_concurrency=max_concurrency,
            listing_path=listing_path,
        )
        fetcher = PageFetcher(settings=settings)
        try:
            engine = UniqueIconScrapingEngine(
                settings=settings,
                fetcher=fetcher,
                reporter=reporter,
            )
            return engine.run(cancel_event=cancel_event)
        finally:
            fetcher.close()

    def _apply_overrides(
        self,
        *,
        output_path: str | None,
        max_concurrency: int | None,
        listing_path: str | None,
    ) -> IconScrapingSettings:
        overrides: dict[str, object] = {}
        if output_path:
            overrides["output_path"] = output_path
        if max_concurrency is not None:
            overrides["max_concurrency"] = max(1, max_concurrency)
        if listing_path:
            overrides["listing_path"] = listing_path
        if not overrides:
            return self._settings
        return replace(self._settings, **overrides)


def exit_code_for(summary: ScrapeRunSummary) -> int:
    return EXIT_CODES.get(summary.status, 0)


@lru_cache(maxsize=1)
def get_icon_scraping_service() -> IconScrapingService:
    """
    Build and cache the icon scraping service.
    """

    return IconScrapingService()
