"""
Bounded-concurrency coordinator for detail page processing.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from typing import Protocol

from icon_scraper.domain import DiscoveryTarget, ItemOutcome, OutcomeStatus, RunCounters
from icon_scraper.scraping.logging_utils import log_event
from icon_scraper.scraping.progress import ProgressReporter
from icon_scraper.scraping.storage import RecordStore

logger = logging.getLogger(__name__)


class TargetProcessor(Protocol):
    def process(self, target: DiscoveryTarget) -> ItemOutcome: ...


class ConcurrencyCoordinator:
    """
    Runs the item processor over every target with at most `max_concurrency`
    items in flight.

    Worker threads only produce outcomes. The calling thread folds each
    outcome into the counters and the store, so both are updated together
    and by a single owner.
    """

    def __init__(
        self,
        *,
        processor: TargetProcessor,
        store: RecordStore,
        max_concurrency: int = 50,
        progress_interval: int = 50,
        reporter: ProgressReporter | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1.")
        self._processor = processor
        self._store = store
        self._max_concurrency = max_concurrency
        self._progress_interval = max(1, progress_interval)
        self._reporter = reporter or ProgressReporter()
        self._clock = clock

    def run(
        self,
        targets: Iterable[DiscoveryTarget],
        *,
        cancel_event: threading.Event | None = None,
    ) -> RunCounters:
        """
        Process all targets and return the final counters once every
        scheduled item has been folded.

        When `cancel_event` is set, items that have not started yet are
        skipped; items already in flight still complete.
        """

        pending = list(targets)
        counters = RunCounters(total_discovered=len(pending))
        if not pending:
            return counters

        started_at = self._clock()
        workers = min(self._max_concurrency, len(pending))
        log_event(
            logger,
            logging.INFO,
            "item_processing_started",
            targets=len(pending),
            max_concurrency=workers,
        )

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="icon-scrape") as executor:
            futures = [
                executor.submit(self._process_one, target, cancel_event)
                for target in pending
            ]
            for future in as_completed(futures):
                self._fold(future.result(), counters=counters, started_at=started_at)

        elapsed = self._clock() - started_at
        self._reporter.line(f"\nCompleted in {elapsed:.1f} seconds")
        self._reporter.line(f"Success: {counters.succeeded}, Failed: {counters.failed}")
        log_event(
            logger,
            logging.INFO,
            "item_processing_completed",
            elapsed_seconds=round(elapsed, 3),
            processed=counters.processed,
            succeeded=counters.succeeded,
            duplicates=counters.duplicates,
            failed=counters.failed,
            skipped=counters.skipped,
        )
        return counters

    def _process_one(
        self,
        target: DiscoveryTarget,
        cancel_event: threading.Event | None,
    ) -> ItemOutcome:
        if cancel_event is not None and cancel_event.is_set():
            return ItemOutcome.failure(target, OutcomeStatus.SKIPPED, "cancelled")
        try:
            return self._processor.process(target)
        except Exception as exc:
            log_event(
                logger,
                logging.ERROR,
                "item_processor_raised",
                item=target.display_name,
                identifier=target.identifier,
                error=str(exc),
            )
            return ItemOutcome.failure(target, OutcomeStatus.FAILED, str(exc))

    def _fold(self, outcome: ItemOutcome, *, counters: RunCounters, started_at: float) -> None:
        if outcome.status is OutcomeStatus.SUCCESS and outcome.record is not None:
            if not self._store.insert_if_absent(outcome.record):
                outcome = replace(outcome, status=OutcomeStatus.DUPLICATE)

        counters.record(outcome.status)
        self._reporter.item(
            outcome,
            position=counters.processed,
            total=counters.total_discovered,
        )
        log_event(
            logger,
            logging.DEBUG,
            "item_completed",
            item=outcome.target.display_name,
            identifier=outcome.target.identifier,
            status=outcome.status.value,
            message=outcome.message,
            processed=counters.processed,
        )

        if outcome.status is OutcomeStatus.SKIPPED:
            return
        if counters.processed % self._progress_interval == 0:
            self._reporter.progress(
                counters,
                elapsed_seconds=self._clock() - started_at,
            )
