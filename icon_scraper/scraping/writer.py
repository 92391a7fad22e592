"""
Delimited text export of extracted records.
"""

from __future__ import annotations

import logging
from pathlib import Path

from icon_scraper.domain import ExtractedRecord
from icon_scraper.scraping.errors import OutputWriteError
from icon_scraper.scraping.logging_utils import log_event
from icon_scraper.scraping.storage import RecordStore

logger = logging.getLogger(__name__)


class DelimitedResultWriter:
    """
    Renders stored records as `name<delimiter>icon_path` lines.

    Lines are sorted by name in code point order and always end with a newline.
    Delimiters inside names or values are written unchanged; readers
    splitting on the delimiter will misparse such lines.
    """

    def __init__(self, *, delimiter: str = ";") -> None:
        if len(delimiter) != 1:
            raise ValueError("delimiter must be a single character.")
        self._delimiter = delimiter

    @property
    def format_description(self) -> str:
        return f"ItemName{self._delimiter}IconPath"

    def render(self, records: list[ExtractedRecord]) -> str:
        lines: list[str] = []
        for record in sorted(records, key=lambda item: item.name):
            if self._delimiter in record.name or self._delimiter in record.icon_path:
                log_event(
                    logger,
                    logging.WARNING,
                    "record_contains_delimiter",
                    name=record.name,
                    icon_path=record.icon_path,
                    delimiter=self._delimiter,
                )
            lines.append(f"{record.name}{self._delimiter}{record.icon_path}\n")
        return "".join(lines)

    def write(self, store: RecordStore, path: str | Path) -> int:
        """
        Replace `path` with every stored record and return the line count.

        Content goes to a sibling temp file first; a failed write leaves any
        previous output untouched.
        """

        records = store.records()
        content = self.render(records)
        target = Path(path)
        staging = target.with_name(f"{target.name}.tmp")
        try:
            with staging.open("w", encoding="utf-8", newline="\n") as handle:
                handle.write(content)
            staging.replace(target)
        except OSError as exc:
            staging.unlink(missing_ok=True)
            log_event(
                logger,
                logging.ERROR,
                "output_write_failed",
                path=str(target),
                error=str(exc),
            )
            raise OutputWriteError(f"Failed to write {target}: {exc}", path=str(target)) from exc

        log_event(
            logger,
            logging.INFO,
            "output_written",
            path=str(target),
            records=len(records),
        )
        return len(records)
