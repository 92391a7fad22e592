"""
Service layer exports.
"""

from icon_scraper.services.icon_scraping_service import IconScrapingService, get_icon_scraping_service

__all__ = ["IconScrapingService", "get_icon_scraping_service"]
