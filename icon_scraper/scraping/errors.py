"""
Error taxonomy for the scraping pipeline.
"""

from __future__ import annotations


class ScrapeError(RuntimeError):
    """
    Base class for scraping pipeline failures.
    """


class FetchError(ScrapeError):
    """
    Raised when a page cannot be fetched.
    """

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class PageNotFoundError(FetchError):
    """
    Raised when the server answers HTTP 404.
    """

    def __init__(self, *, url: str) -> None:
        super().__init__(f"Page not found: {url}", url=url, status_code=404)


class FetchTimeoutError(FetchError):
    """
    Raised when a request exceeds its timeout.
    """

    def __init__(self, *, url: str, timeout_seconds: float) -> None:
        super().__init__(
            f"Request timed out after {timeout_seconds:g}s: {url}",
            url=url,
        )
        self.timeout_seconds = timeout_seconds


class ParseError(ScrapeError):
    """
    Raised when a document lacks the structure the extractor expects.
    """


class ExtractionMiss(ScrapeError):
    """
    Raised when a parsed document does not contain the requested field.
    """

    def __init__(self, *, label: str, url: str) -> None:
        super().__init__(f"{label} not found")
        self.label = label
        self.url = url


class OutputWriteError(ScrapeError):
    """
    Raised when the output artifact cannot be written.
    """

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path
