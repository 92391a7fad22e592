"""
Run unique item icon scraping from CLI.
"""

from __future__ import annotations

import argparse
import json
import sys

from icon_scraper.scraping.logging_utils import configure_logging
from icon_scraper.scraping.progress import ProgressReporter
from icon_scraper.services import get_icon_scraping_service
from icon_scraper.services.icon_scraping_service import exit_code_for


def main() -> int:
    parser = argparse.ArgumentParser(description="Scrape unique item icon paths into a text file.")
    parser.add_argument(
        "--output",
        dest="output",
        default=None,
        help="Output file path. Defaults to ICON_SCRAPE_OUTPUT_PATH.",
    )
    parser.add_argument(
        "--concurrency",
        dest="concurrency",
        type=int,
        default=None,
        help="Maximum detail pages fetched at once. Defaults to ICON_SCRAPE_MAX_CONCURRENCY.",
    )
    parser.add_argument(
        "--listing-path",
        dest="listing_path",
        default=None,
        help="Listing page path on the base URL. Defaults to ICON_SCRAPE_LISTING_PATH.",
    )
    args = parser.parse_args()

    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8")
    configure_logging()
    service = get_icon_scraping_service()
    summary = service.scrape(
        output_path=args.output,
        max_concurrency=args.concurrency,
        listing_path=args.listing_path,
        # stdout carries only the JSON summary
        reporter=ProgressReporter(stream=sys.stderr),
    )
    print(json.dumps(summary.to_dict(), indent=2))
    return exit_code_for(summary)


if __name__ == "__main__":
    raise SystemExit(main())
