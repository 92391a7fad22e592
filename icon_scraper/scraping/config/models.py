"""
Scraping configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urljoin

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


@dataclass(frozen=True)
class IconScrapingSettings:
    """
    Runtime settings for unique item icon scraping.
    """

    base_url: str = "https://poedb.tw"
    listing_path: str = "/us/Unique_item"
    item_path_prefix: str = "/us/"
    listing_selector: str = "a.uniqueitem"
    name_selector: str = "span.uniqueName"
    field_label: str = "Icon"
    output_path: str = "unique_items_output.txt"
    delimiter: str = ";"
    max_concurrency: int = 50
    timeout_seconds: float = 30.0
    progress_interval: int = 50
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def listing_url(self) -> str:
        return self.resolve_url(self.listing_path)

    def resolve_url(self, identifier: str) -> str:
        """
        Return an absolute URL for a site-relative path or pass one through.
        """

        if identifier.startswith(("http://", "https://")):
            return identifier
        return urljoin(f"{self.base_url.rstrip('/')}/", identifier.lstrip("/"))
