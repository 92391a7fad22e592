"""
In-memory result store shared by the scrape coordinator and writer.
"""

from __future__ import annotations

import threading

from icon_scraper.domain import ExtractedRecord
from icon_scraper.scraping.storage.base import RecordStore


class ResultStore(RecordStore):
    """
    Thread-safe name -> record mapping with insert-if-absent semantics.

    The store is frozen once scraping finishes; later inserts are rejected.
    """

    def __init__(self) -> None:
        self._records: dict[str, ExtractedRecord] = {}
        self._lock = threading.Lock()
        self._frozen = False

    def insert_if_absent(self, record: ExtractedRecord) -> bool:
        with self._lock:
            if self._frozen:
                raise RuntimeError("ResultStore is frozen; no further inserts are accepted.")
            if record.name in self._records:
                return False
            self._records[record.name] = record
            return True

    def get(self, name: str) -> ExtractedRecord | None:
        with self._lock:
            return self._records.get(name)

    def records(self) -> list[ExtractedRecord]:
        with self._lock:
            return list(self._records.values())

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
