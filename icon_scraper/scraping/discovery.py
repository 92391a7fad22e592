"""
Listing page discovery of unique item detail targets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from icon_scraper.domain import DiscoveryTarget
from icon_scraper.scraping.config.models import IconScrapingSettings
from icon_scraper.scraping.logging_utils import log_event
from icon_scraper.scraping.parsing import HTMLDocument

logger = logging.getLogger(__name__)


class PageSource(Protocol):
    def fetch(self, url: str) -> str: ...


@dataclass(frozen=True)
class DiscoveryResult:
    """
    Deduplicated detail targets found on one listing page.
    """

    listing_url: str
    targets: list[DiscoveryTarget] = field(default_factory=list)
    matched_elements: int = 0

    @property
    def nothing_found(self) -> bool:
        return self.matched_elements == 0


class ListingDiscoverer:
    """
    Collects detail page links from the catalog listing page.
    """

    def __init__(self, *, settings: IconScrapingSettings, fetcher: PageSource) -> None:
        self._settings = settings
        self._fetcher = fetcher

    def discover(self, listing_url: str | None = None) -> DiscoveryResult:
        """
        Fetch and parse the listing page; raises FetchError or ParseError.
        """

        url = listing_url or self._settings.listing_url
        log_event(logger, logging.INFO, "listing_fetch_started", listing_url=url)

        document = HTMLDocument.parse(self._fetcher.fetch(url))
        elements = document.select(self._settings.listing_selector)
        if not elements:
            log_event(
                logger,
                logging.WARNING,
                "listing_nothing_found",
                listing_url=url,
                selector=self._settings.listing_selector,
            )
            return DiscoveryResult(listing_url=url)

        # href -> display name; first occurrence wins
        seen: dict[str, str] = {}
        for element in elements:
            name_element = document.select_first(element, self._settings.name_selector)
            if name_element is None:
                continue
            name = document.text_of(name_element)
            if not name:
                continue
            href = document.attribute(element, "href")
            if not href:
                continue
            if not self._is_item_reference(href, listing_url=url):
                continue
            if href not in seen:
                seen[href] = name

        targets = [
            DiscoveryTarget(identifier=href, display_name=name)
            for href, name in seen.items()
        ]
        log_event(
            logger,
            logging.INFO,
            "listing_discovered",
            listing_url=url,
            matched_elements=len(elements),
            targets=len(targets),
        )
        return DiscoveryResult(
            listing_url=url,
            targets=targets,
            matched_elements=len(elements),
        )

    def _is_item_reference(self, href: str, *, listing_url: str) -> bool:
        if not href.startswith(self._settings.item_path_prefix):
            return False
        if "#" in href or "?" in href:
            return False
        if href == self._settings.listing_path:
            return False
        return self._settings.resolve_url(href) != listing_url
