"""
Config helpers for icon scraping.
"""

from icon_scraper.scraping.config.loader import build_icon_scraping_settings, get_icon_scraping_settings
from icon_scraper.scraping.config.models import IconScrapingSettings

__all__ = [
    "IconScrapingSettings",
    "build_icon_scraping_settings",
    "get_icon_scraping_settings",
]
