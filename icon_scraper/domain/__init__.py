"""
Domain models for unique item icon scraping.
"""

from icon_scraper.domain.unique_items import (
    DiscoveryTarget,
    ExtractedRecord,
    ItemOutcome,
    OutcomeStatus,
    RunCounters,
    ScrapeRunSummary,
)

__all__ = [
    "DiscoveryTarget",
    "ExtractedRecord",
    "ItemOutcome",
    "OutcomeStatus",
    "RunCounters",
    "ScrapeRunSummary",
]
