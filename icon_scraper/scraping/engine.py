"""
Unique item icon scraping engine.
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path

from icon_scraper.domain import ScrapeRunSummary
from icon_scraper.scraping.config.models import IconScrapingSettings
from icon_scraper.scraping.coordinator import ConcurrencyCoordinator
from icon_scraper.scraping.discovery import ListingDiscoverer, PageSource
from icon_scraper.scraping.errors import OutputWriteError, ScrapeError
from icon_scraper.scraping.fetcher import PageFetcher
from icon_scraper.scraping.logging_utils import log_event
from icon_scraper.scraping.processor import ItemProcessor
from icon_scraper.scraping.progress import ProgressReporter
from icon_scraper.scraping.storage import ResultStore
from icon_scraper.scraping.writer import DelimitedResultWriter

logger = logging.getLogger(__name__)

STATUS_SUCCESS = "success"
STATUS_NOTHING_FOUND = "nothing_found"
STATUS_DISCOVERY_FAILED = "discovery_failed"
STATUS_WRITE_FAILED = "write_failed"


class UniqueIconScrapingEngine:
    """
    Orchestrates discovery, concurrent item processing and the final write.
    """

    def __init__(
        self,
        *,
        settings: IconScrapingSettings,
        fetcher: PageSource | None = None,
        reporter: ProgressReporter | None = None,
    ) -> None:
        self._settings = settings
        self._fetcher = fetcher or PageFetcher(settings=settings)
        self._reporter = reporter or ProgressReporter()
        self.store = ResultStore()

    def run(self, *, cancel_event: threading.Event | None = None) -> ScrapeRunSummary:
        """
        Execute one full scrape. Each call starts from an empty store; `store`
        holds the records of the most recent run.
        """

        settings = self._settings
        listing_url = settings.listing_url
        started_at = time.monotonic()
        self.store = ResultStore()

        self._reporter.line(f"Starting to scrape unique items from {settings.base_url}...")
        self._reporter.line(f"Max concurrent requests: {settings.max_concurrency}\n")
        self._reporter.line(f"Fetching page: {listing_url}")

        discoverer = ListingDiscoverer(settings=settings, fetcher=self._fetcher)
        try:
            discovery = discoverer.discover(listing_url)
        except ScrapeError as exc:
            message = f"ERROR scraping page {listing_url}: {exc}"
            self._reporter.line(message)
            log_event(
                logger,
                logging.ERROR,
                "listing_discovery_failed",
                listing_url=listing_url,
                error=str(exc),
            )
            return ScrapeRunSummary(
                listing_url=listing_url,
                status=STATUS_DISCOVERY_FAILED,
                elapsed_seconds=time.monotonic() - started_at,
                errors=[message],
            )

        if discovery.nothing_found:
            self._reporter.line("No unique items found on page")
            return ScrapeRunSummary(
                listing_url=listing_url,
                status=STATUS_NOTHING_FOUND,
                elapsed_seconds=time.monotonic() - started_at,
            )

        self._reporter.line(
            f"Found {discovery.matched_elements} total elements matching "
            f"'{settings.listing_selector}'"
        )
        self._reporter.line(
            f"After filtering and deduplication: {len(discovery.targets)} unique items to process"
        )
        self._reporter.line("Starting parallel processing...\n")

        coordinator = ConcurrencyCoordinator(
            processor=ItemProcessor(settings=settings, fetcher=self._fetcher),
            store=self.store,
            max_concurrency=settings.max_concurrency,
            progress_interval=settings.progress_interval,
            reporter=self._reporter,
        )
        counters = coordinator.run(discovery.targets, cancel_event=cancel_event)
        self.store.freeze()

        self._reporter.line("\n\n=== SUMMARY ===")
        self._reporter.line(f"Total items processed: {counters.processed}")
        self._reporter.line(f"Successful: {counters.succeeded}")
        self._reporter.line(f"Failed: {counters.failed}")
        if counters.duplicates:
            self._reporter.line(f"Duplicate names: {counters.duplicates}")
        if counters.skipped:
            self._reporter.line(f"Skipped after cancellation: {counters.skipped}")
        self._reporter.line(f"Unique items saved: {len(self.store)}")
        self._reporter.line("\nWriting to output file...")

        output_path = str(Path(settings.output_path))
        writer = DelimitedResultWriter(delimiter=settings.delimiter)
        status = STATUS_SUCCESS
        errors: list[str] = []
        try:
            written = writer.write(self.store, output_path)
        except OutputWriteError as exc:
            status = STATUS_WRITE_FAILED
            errors.append(str(exc))
            self._reporter.line(f"\nERROR writing output file: {exc}")
        else:
            self._reporter.line(f"\nSuccessfully saved {written} unique items")
            self._reporter.line(f"Format: {writer.format_description}")
            self._reporter.line(f"\nDone! Results saved to: {output_path}")

        summary = ScrapeRunSummary(
            listing_url=listing_url,
            status=status,
            discovered=counters.total_discovered,
            processed=counters.processed,
            succeeded=counters.succeeded,
            duplicates=counters.duplicates,
            failed=counters.failed,
            skipped=counters.skipped,
            items_saved=len(self.store),
            output_path=output_path if status == STATUS_SUCCESS else None,
            elapsed_seconds=time.monotonic() - started_at,
            errors=errors,
        )
        log_event(logger, logging.INFO, "scrape_run_completed", **summary.to_dict())
        return summary
