"""
BeautifulSoup-based document queries for listing and detail pages.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from icon_scraper.scraping.errors import ParseError


class HTMLDocument:
    """
    Queryable view over one parsed HTML page.
    """

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    @classmethod
    def parse(cls, text: str) -> "HTMLDocument":
        if not text or not text.strip():
            raise ParseError("Document is empty.")
        return cls(BeautifulSoup(text, "html.parser"))

    def select(self, selector: str) -> list[Tag]:
        return list(self._soup.select(selector))

    @staticmethod
    def select_first(element: Tag, selector: str) -> Tag | None:
        return element.select_one(selector)

    @staticmethod
    def text_of(element: Tag) -> str:
        return element.get_text().strip()

    @staticmethod
    def attribute(element: Tag, name: str) -> str | None:
        value = element.get(name)
        if value is None:
            return None
        # Multi-valued attributes such as class come back as lists.
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    @staticmethod
    def next_sibling_element(element: Tag) -> Tag | None:
        return element.find_next_sibling()


class DetailFieldExtractor:
    """
    Reads labelled values from the key/value tables on detail pages.
    """

    @classmethod
    def find_labelled_value(cls, document: HTMLDocument, *, label: str) -> str | None:
        """
        Return the trimmed text of the cell following the first `label` cell
        whose sibling carries text, or None when no such cell exists.
        """

        cells = document.select("td")
        if not cells:
            raise ParseError("Document has no table cells.")

        for cell in cells:
            if document.text_of(cell) != label:
                continue
            sibling = document.next_sibling_element(cell)
            if sibling is None:
                continue
            value = document.text_of(sibling)
            if value:
                return value
        return None
