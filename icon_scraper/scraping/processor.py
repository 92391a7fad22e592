"""
Detail page processing for a single discovery target.
"""

from __future__ import annotations

import logging

from icon_scraper.domain import DiscoveryTarget, ExtractedRecord, ItemOutcome, OutcomeStatus
from icon_scraper.scraping.config.models import IconScrapingSettings
from icon_scraper.scraping.discovery import PageSource
from icon_scraper.scraping.errors import (
    ExtractionMiss,
    FetchTimeoutError,
    PageNotFoundError,
)
from icon_scraper.scraping.logging_utils import log_event
from icon_scraper.scraping.parsing import DetailFieldExtractor, HTMLDocument

logger = logging.getLogger(__name__)


class ItemProcessor:
    """
    Fetches one detail page and extracts the labelled icon path.

    `process` never raises; every failure becomes an ItemOutcome so one bad
    page cannot abort the run. Counters and storage are left to the caller.
    """

    def __init__(self, *, settings: IconScrapingSettings, fetcher: PageSource) -> None:
        self._settings = settings
        self._fetcher = fetcher

    def process(self, target: DiscoveryTarget) -> ItemOutcome:
        url = self._settings.resolve_url(target.identifier)
        try:
            icon_path = self._extract(url)
        except PageNotFoundError:
            return ItemOutcome.failure(target, OutcomeStatus.NOT_FOUND, "404")
        except FetchTimeoutError:
            return ItemOutcome.failure(target, OutcomeStatus.TIMEOUT, "Timeout")
        except ExtractionMiss as exc:
            return ItemOutcome.failure(target, OutcomeStatus.FIELD_NOT_FOUND, str(exc))
        except Exception as exc:
            log_event(
                logger,
                logging.DEBUG,
                "item_processing_failed",
                url=url,
                item=target.display_name,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return ItemOutcome.failure(target, OutcomeStatus.FAILED, str(exc))

        return ItemOutcome.success(
            target,
            ExtractedRecord(name=target.display_name, icon_path=icon_path),
        )

    def _extract(self, url: str) -> str:
        document = HTMLDocument.parse(self._fetcher.fetch(url))
        label = self._settings.field_label
        value = DetailFieldExtractor.find_labelled_value(document, label=label)
        if value is None:
            raise ExtractionMiss(label=label, url=url)
        return value
