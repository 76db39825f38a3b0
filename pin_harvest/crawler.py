"""Rendering the search page and driving its infinite scroll."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from playwright.async_api import Playwright

from .config import DEFAULT_RESULT_CLASS, ScrapeConfig

logger = logging.getLogger("pin_harvest")

SCROLL_TO_BOTTOM_SCRIPT = "() => window.scrollTo(0, document.body.scrollHeight)"
COUNT_RESULTS_SCRIPT = "(name) => document.getElementsByClassName(name).length"


class ScrollTimeoutError(TimeoutError):
    """The page did not load enough results before the scroll timeout."""


async def _poll_results(page: Any, threshold: int, class_name: str, interval: float) -> int:
    ticks = 0
    while True:
        ticks += 1
        await page.evaluate(SCROLL_TO_BOTTOM_SCRIPT)
        count = await page.evaluate(COUNT_RESULTS_SCRIPT, class_name)
        logger.debug("Scroll tick %d: %d result(s) loaded", ticks, count)
        if count > threshold:
            return count
        await asyncio.sleep(interval)


async def scroll_until_loaded(
    page: Any,
    threshold: int,
    class_name: str = DEFAULT_RESULT_CLASS,
    interval: float = 0.0,
    timeout: Optional[float] = None,
) -> int:
    """Scroll to the bottom until more than ``threshold`` results exist.

    With ``timeout=None`` this waits forever if the page never yields
    enough results. Returns the final result count.
    """
    if timeout is None:
        return await _poll_results(page, threshold, class_name, interval)
    try:
        return await asyncio.wait_for(
            _poll_results(page, threshold, class_name, interval), timeout
        )
    except asyncio.TimeoutError as exc:
        raise ScrollTimeoutError(
            f"Fewer than {threshold + 1} results loaded after {timeout:.1f}s"
        ) from exc


async def render_search_page(
    playwright: Playwright,
    query: str,
    config: ScrapeConfig,
) -> str:
    """Load the search results for ``query``, scroll them in and return the HTML."""
    browser = await playwright.chromium.launch(headless=config.headless)
    try:
        page = await browser.new_page()
        await page.set_viewport_size(
            {"width": config.viewport_width, "height": config.viewport_height}
        )
        if config.navigation_timeout is not None:
            page.set_default_navigation_timeout(config.navigation_timeout * 1000)
        url = config.search_page_url(query)
        logger.info("Loading %s", url)
        await page.goto(url)
        count = await scroll_until_loaded(
            page,
            config.scroll_threshold,
            class_name=config.result_class,
            interval=config.scroll_interval,
            timeout=config.scroll_timeout,
        )
        logger.debug("Scrolling finished with %d result(s)", count)
        html = await page.content()
    finally:
        await browser.close()
    return html
