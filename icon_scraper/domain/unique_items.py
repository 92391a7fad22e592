"""
icon_scraper/domain/unique_items.py

Domain models for unique item discovery, extraction and run accounting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class DiscoveryTarget:
    """
    One detail page to fetch, as discovered on the listing page.
    """

    identifier: str
    display_name: str


@dataclass(frozen=True)
class ExtractedRecord:
    """
    Name and icon path pair persisted to the output file.
    """

    name: str
    icon_path: str


class OutcomeStatus(str, Enum):
    """
    Terminal classification of one processed target.

    DUPLICATE and SKIPPED are assigned by the coordinator, never by the
    item processor.
    """

    SUCCESS = "success"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    FIELD_NOT_FOUND = "field_not_found"
    FAILED = "failed"
    SKIPPED = "skipped"

    @property
    def is_failure(self) -> bool:
        return self in _FAILURE_STATUSES


_FAILURE_STATUSES = frozenset(
    {
        OutcomeStatus.NOT_FOUND,
        OutcomeStatus.TIMEOUT,
        OutcomeStatus.FIELD_NOT_FOUND,
        OutcomeStatus.FAILED,
    }
)


@dataclass(frozen=True)
class ItemOutcome:
    """
    Result of processing one discovery target.
    """

    target: DiscoveryTarget
    status: OutcomeStatus
    record: ExtractedRecord | None = None
    message: str | None = None

    @classmethod
    def success(cls, target: DiscoveryTarget, record: ExtractedRecord) -> "ItemOutcome":
        return cls(target=target, status=OutcomeStatus.SUCCESS, record=record)

    @classmethod
    def failure(
        cls,
        target: DiscoveryTarget,
        status: OutcomeStatus,
        message: str | None = None,
    ) -> "ItemOutcome":
        return cls(target=target, status=status, message=message)


@dataclass
class RunCounters:
    """
    Progress counters for one coordinator run.

    Mutated only by the thread that folds outcomes.
    """

    total_discovered: int = 0
    processed: int = 0
    succeeded: int = 0
    duplicates: int = 0
    failed: int = 0
    skipped: int = 0

    def record(self, status: OutcomeStatus) -> None:
        if status is OutcomeStatus.SKIPPED:
            self.skipped += 1
            return

        self.processed += 1
        if status is OutcomeStatus.SUCCESS:
            self.succeeded += 1
        elif status is OutcomeStatus.DUPLICATE:
            self.duplicates += 1
        elif status.is_failure:
            self.failed += 1


@dataclass(frozen=True)
class ScrapeRunSummary:
    """
    Summary for one complete scrape run.
    """

    listing_url: str
    status: str
    discovered: int = 0
    processed: int = 0
    succeeded: int = 0
    duplicates: int = 0
    failed: int = 0
    skipped: int = 0
    items_saved: int = 0
    output_path: str | None = None
    elapsed_seconds: float = 0.0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "listing_url": self.listing_url,
            "status": self.status,
            "discovered": self.discovered,
            "processed": self.processed,
            "succeeded": self.succeeded,
            "duplicates": self.duplicates,
            "failed": self.failed,
            "skipped": self.skipped,
            "items_saved": self.items_saved,
            "output_path": self.output_path,
            "elapsed_seconds": round(self.elapsed_seconds, 1),
            "errors": list(self.errors),
        }
