"""
tests/test_listing_discovery.py

Unit tests for ListingDiscoverer against in-memory listing pages.

Coverage
--------
- Self-link and fragment filtering
- Path prefix and query filtering
- Missing name span / href skipping
- First-name-wins deduplication by href
- Nothing-found soft condition
- Fatal fetch and parse errors
"""

from __future__ import annotations

import pytest
from conftest import FakeFetcher, listing_html

from icon_scraper.domain import DiscoveryTarget
from icon_scraper.scraping.config import IconScrapingSettings
from icon_scraper.scraping.discovery import ListingDiscoverer
from icon_scraper.scraping.errors import FetchError, ParseError

LISTING_PATH = "/us/Unique_item"


@pytest.fixture()
def discoverer(settings: IconScrapingSettings, fetcher: FakeFetcher) -> ListingDiscoverer:
    return ListingDiscoverer(settings=settings, fetcher=fetcher)


class TestFiltering:
    def test_self_link_and_fragment_are_dropped(
        self, discoverer: ListingDiscoverer, fetcher: FakeFetcher
    ) -> None:
        fetcher.add(
            LISTING_PATH,
            listing_html(
                ("/us/Ring_of_X", "Ring of X"),
                ("/us/Unique_item", "Unique item"),
                ("/us/Ring_of_X#notes", "Ring of X"),
            ),
        )

        result = discoverer.discover()

        assert result.targets == [
            DiscoveryTarget(identifier="/us/Ring_of_X", display_name="Ring of X")
        ]
        assert result.matched_elements == 3
        assert result.nothing_found is False

    def test_query_and_foreign_prefix_are_dropped(
        self, discoverer: ListingDiscoverer, fetcher: FakeFetcher
    ) -> None:
        fetcher.add(
            LISTING_PATH,
            listing_html(
                ("/us/Ring_of_X?lang=en", "Ring of X"),
                ("/tw/Ring_of_X", "Ring of X"),
                ("https://poedb.tw/us/Ring_of_Y", "Ring of Y"),
                ("/us/Belt_of_Z", "Belt of Z"),
            ),
        )

        result = discoverer.discover()

        assert [target.identifier for target in result.targets] == ["/us/Belt_of_Z"]

    def test_elements_without_name_or_href_are_skipped(
        self, discoverer: ListingDiscoverer, fetcher: FakeFetcher
    ) -> None:
        fetcher.add(
            LISTING_PATH,
            listing_html(
                ("/us/No_Name", None),
                (None, "No Href"),
                ("", "Empty Href"),
                ("/us/Kept", "Kept"),
            ),
        )

        result = discoverer.discover()

        assert [target.display_name for target in result.targets] == ["Kept"]
        assert result.matched_elements == 4

    def test_blank_name_is_skipped(
        self, discoverer: ListingDiscoverer, fetcher: FakeFetcher
    ) -> None:
        fetcher.add(
            LISTING_PATH,
            listing_html(
                ("/us/Blank", "   "),
                ("/us/Kept", "Kept"),
            ),
        )

        result = discoverer.discover()

        assert [target.display_name for target in result.targets] == ["Kept"]

    def test_name_text_is_trimmed(
        self, discoverer: ListingDiscoverer, fetcher: FakeFetcher
    ) -> None:
        fetcher.add(LISTING_PATH, listing_html(("/us/Padded", "  Padded Name \n")))

        result = discoverer.discover()

        assert result.targets[0].display_name == "Padded Name"


class TestDeduplication:
    def test_first_name_wins_for_repeated_href(
        self, discoverer: ListingDiscoverer, fetcher: FakeFetcher
    ) -> None:
        fetcher.add(
            LISTING_PATH,
            listing_html(
                ("/us/Ring_of_X", "Ring of X"),
                ("/us/Ring_of_X", "Ring of X (Legacy)"),
            ),
        )

        result = discoverer.discover()

        assert result.targets == [
            DiscoveryTarget(identifier="/us/Ring_of_X", display_name="Ring of X")
        ]

    def test_same_name_with_different_href_is_kept(
        self, discoverer: ListingDiscoverer, fetcher: FakeFetcher
    ) -> None:
        fetcher.add(
            LISTING_PATH,
            listing_html(
                ("/us/Ring_of_X", "Ring of X"),
                ("/us/Ring_of_X_legacy", "Ring of X"),
            ),
        )

        result = discoverer.discover()

        assert len(result.targets) == 2


class TestSoftAndFatalConditions:
    def test_no_marker_elements_is_nothing_found(
        self, discoverer: ListingDiscoverer, fetcher: FakeFetcher
    ) -> None:
        fetcher.add(LISTING_PATH, "<html><body><p>Maintenance</p></body></html>")

        result = discoverer.discover()

        assert result.nothing_found is True
        assert result.targets == []

    def test_all_filtered_is_not_nothing_found(
        self, discoverer: ListingDiscoverer, fetcher: FakeFetcher
    ) -> None:
        fetcher.add(LISTING_PATH, listing_html(("/us/Unique_item", "Unique item")))

        result = discoverer.discover()

        assert result.nothing_found is False
        assert result.targets == []

    def test_fetch_error_propagates(
        self, discoverer: ListingDiscoverer, fetcher: FakeFetcher
    ) -> None:
        fetcher.add(
            LISTING_PATH,
            FetchError("HTTP 503", url="https://poedb.tw/us/Unique_item", status_code=503),
        )

        with pytest.raises(FetchError):
            discoverer.discover()

    def test_empty_document_raises_parse_error(
        self, discoverer: ListingDiscoverer, fetcher: FakeFetcher
    ) -> None:
        fetcher.add(LISTING_PATH, "   ")

        with pytest.raises(ParseError):
            discoverer.discover()

    def test_explicit_listing_url_is_used(
        self, discoverer: ListingDiscoverer, fetcher: FakeFetcher
    ) -> None:
        fetcher.add("/us/Unique_ring", listing_html(("/us/Ring_of_X", "Ring of X")))

        result = discoverer.discover("https://poedb.tw/us/Unique_ring")

        assert result.listing_url == "https://poedb.tw/us/Unique_ring"
        assert fetcher.requested == ["https://poedb.tw/us/Unique_ring"]
