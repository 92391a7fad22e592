"""
Serialized console reporting for scrape runs.
"""

from __future__ import annotations

import sys
import threading
from typing import TextIO

from icon_scraper.domain import ItemOutcome, OutcomeStatus, RunCounters

_MARKS = {
    OutcomeStatus.SUCCESS: "✓",
    OutcomeStatus.DUPLICATE: "=",
    OutcomeStatus.NOT_FOUND: "✗",
    OutcomeStatus.TIMEOUT: "⏱",
    OutcomeStatus.FIELD_NOT_FOUND: "✗",
    OutcomeStatus.FAILED: "✗",
    OutcomeStatus.SKIPPED: "-",
}


class ProgressReporter:
    """
    Writes human-readable run lines to one stream under a lock so lines
    from different threads never interleave.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout
        self._lock = threading.Lock()

    def line(self, text: str = "") -> None:
        with self._lock:
            self._stream.write(f"{text}\n")
            self._stream.flush()

    def item(self, outcome: ItemOutcome, *, position: int, total: int) -> None:
        mark = _MARKS[outcome.status]
        text = f"[{position}/{total}] {mark} {outcome.target.display_name}"
        if outcome.status is OutcomeStatus.DUPLICATE:
            text = f"{text} -> duplicate"
        elif outcome.status is not OutcomeStatus.SUCCESS and outcome.message:
            text = f"{text} -> {outcome.message}"
        self.line(text)

    def progress(self, counters: RunCounters, *, elapsed_seconds: float) -> None:
        self.line(
            f"\n>>> Progress: {counters.processed}/{counters.total_discovered} "
            f"({counters.succeeded} success, {counters.failed} failed) "
            f"- Elapsed: {elapsed_seconds:.1f}s\n"
        )
