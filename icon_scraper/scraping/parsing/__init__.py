"""
HTML parsing layer exports.
"""

from icon_scraper.scraping.parsing.html_parsers import DetailFieldExtractor, HTMLDocument

__all__ = ["DetailFieldExtractor", "HTMLDocument"]
