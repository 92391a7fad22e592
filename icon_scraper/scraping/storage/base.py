"""
Storage layer interfaces for extracted records.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from icon_scraper.domain import ExtractedRecord


class RecordStore(ABC):
    """
    Storage abstraction for extracted records keyed by name.
    """

    @abstractmethod
    def insert_if_absent(self, record: ExtractedRecord) -> bool:
        """
        Store `record` unless its name is already present; return whether it was stored.
        """

    @abstractmethod
    def records(self) -> list[ExtractedRecord]:
        """
        Return a snapshot of all stored records.
        """
