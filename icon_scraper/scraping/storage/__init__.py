"""
Storage layer exports.
"""

from icon_scraper.scraping.storage.base import RecordStore
from icon_scraper.scraping.storage.result_store import ResultStore

__all__ = ["RecordStore", "ResultStore"]
