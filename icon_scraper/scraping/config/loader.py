"""
Environment config loader for icon scraping.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import TypeVar

from icon_scraper.scraping.config.models import DEFAULT_USER_AGENT, IconScrapingSettings

T = TypeVar("T")

ENV_FILENAMES = (".env", ".env.local")


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def read_env_file(path: Path) -> dict[str, str]:
    """
    Parse KEY=VALUE lines, ignoring blanks, comments and lines without `=`.
    """

    values: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = raw_line.strip().partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        values[key] = value.strip().strip("\"'")
    return values


def apply_env_files(directory: Path | None = None) -> None:
    """
    Export `.env` then `.env.local` from `directory` (default: project root)
    into the process environment. Variables already set are kept.
    """

    root = directory or _project_root()
    for filename in ENV_FILENAMES:
        env_path = root / filename
        if env_path.is_file():
            for key, value in read_env_file(env_path).items():
                os.environ.setdefault(key, value)


def _env(name: str, default: T, parse: Callable[[str], T]) -> T:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return parse(raw)
    except ValueError:
        return default


def _non_blank(raw: str) -> str:
    value = raw.strip()
    if not value:
        raise ValueError("blank")
    return value


def _single_char(raw: str) -> str:
    # Whitespace delimiters are legal, so the value is not stripped.
    if len(raw) != 1:
        raise ValueError("delimiter must be one character")
    return raw


def build_icon_scraping_settings() -> IconScrapingSettings:
    """
    Build scraper settings from the current environment.
    """

    return IconScrapingSettings(
        base_url=_env("ICON_SCRAPE_BASE_URL", "https://poedb.tw", _non_blank).rstrip("/"),
        listing_path=_env("ICON_SCRAPE_LISTING_PATH", "/us/Unique_item", _non_blank),
        item_path_prefix=_env("ICON_SCRAPE_ITEM_PATH_PREFIX", "/us/", _non_blank),
        listing_selector=_env("ICON_SCRAPE_LISTING_SELECTOR", "a.uniqueitem", _non_blank),
        name_selector=_env("ICON_SCRAPE_NAME_SELECTOR", "span.uniqueName", _non_blank),
        field_label=_env("ICON_SCRAPE_FIELD_LABEL", "Icon", _non_blank),
        output_path=_env("ICON_SCRAPE_OUTPUT_PATH", "unique_items_output.txt", _non_blank),
        delimiter=_env("ICON_SCRAPE_DELIMITER", ";", _single_char),
        max_concurrency=max(
            1,
            _env("ICON_SCRAPE_MAX_CONCURRENCY", 50, int),
        ),
        timeout_seconds=max(
            1.0,
            _env("ICON_SCRAPE_TIMEOUT_SECONDS", 30.0, float),
        ),
        progress_interval=max(
            1,
            _env("ICON_SCRAPE_PROGRESS_INTERVAL", 50, int),
        ),
        user_agent=_env("ICON_SCRAPE_USER_AGENT", DEFAULT_USER_AGENT, _non_blank),
    )


@lru_cache(maxsize=1)
def get_icon_scraping_settings() -> IconScrapingSettings:
    """
    Return cached scraper settings from `.env` files and environment variables.
    """

    apply_env_files()
    return build_icon_scraping_settings()
