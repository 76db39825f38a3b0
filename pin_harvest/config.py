"""Configuration objects and constants for the scraper."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_SEARCH_URL = "https://www.pinterest.com/search/pins/"
DEFAULT_RESULT_CLASS = "Grid__Item"
DEFAULT_RESULT_SELECTOR = "div.Grid__Item"
DEFAULT_CAPTION_SELECTOR = ".PinAttributionTitle__title"
DEFAULT_SCROLL_THRESHOLD = 250
DEFAULT_TITLE_LENGTH = 20


@dataclass
class ScrapeConfig:
    """Settings that control rendering, probing and downloading.

    ``None`` for any timeout means no timeout of our own: the wait lasts
    as long as the underlying browser or HTTP client lets it.
    """

    search_url: str = DEFAULT_SEARCH_URL
    viewport_width: int = 1200
    viewport_height: int = 800
    headless: bool = True
    scroll_threshold: int = DEFAULT_SCROLL_THRESHOLD
    scroll_interval: float = 0.0
    scroll_timeout: Optional[float] = None
    navigation_timeout: Optional[float] = None
    result_class: str = DEFAULT_RESULT_CLASS
    result_selector: str = DEFAULT_RESULT_SELECTOR
    caption_selector: str = DEFAULT_CAPTION_SELECTOR
    probe_timeout: Optional[float] = None
    download_timeout: Optional[float] = None
    max_concurrency: Optional[int] = None
    title_length: int = DEFAULT_TITLE_LENGTH
    unique_filenames: bool = False
    atomic_downloads: bool = False

    def search_page_url(self, query: str) -> str:
        """Interpolate the query into the search URL without escaping it."""
        return f"{self.search_url}?q={query}"
