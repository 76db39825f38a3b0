"""High-level orchestration: render, extract, probe and download."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, TypeVar

import requests
from playwright.async_api import async_playwright

from .config import ScrapeConfig
from .content import extract_candidates
from .crawler import render_search_page
from .images import download_image, probe_candidate
from .models import ImageCandidate, ProbedImage

logger = logging.getLogger("pin_harvest")

T = TypeVar("T")


async def _in_thread(
    func: Callable[..., T],
    *args: Any,
    semaphore: Optional[asyncio.Semaphore] = None,
    **kwargs: Any,
) -> T:
    """Run a blocking call off the event loop, optionally under a semaphore."""
    if semaphore is None:
        return await asyncio.to_thread(func, *args, **kwargs)
    async with semaphore:
        return await asyncio.to_thread(func, *args, **kwargs)


def _limiter(config: ScrapeConfig) -> Optional[asyncio.Semaphore]:
    if config.max_concurrency is None:
        return None
    return asyncio.Semaphore(config.max_concurrency)


async def probe_candidates(
    candidates: Sequence[ImageCandidate],
    config: ScrapeConfig,
    session: Any = None,
) -> List[ProbedImage]:
    """Probe every candidate concurrently and drop the ones that fail."""
    semaphore = _limiter(config)
    results = await asyncio.gather(
        *(
            _in_thread(
                probe_candidate,
                candidate,
                session=session,
                timeout=config.probe_timeout,
                semaphore=semaphore,
            )
            for candidate in candidates
        )
    )
    probed = [result for result in results if result is not None]
    logger.info("Probed %d/%d image(s)", len(probed), len(candidates))
    return probed


async def scrape(
    query: str,
    config: Optional[ScrapeConfig] = None,
    session: Any = None,
) -> List[ProbedImage]:
    """Search for ``query`` and return the probed images found on the page.

    Browser failures propagate. The browser is closed before any probing.
    """
    config = config or ScrapeConfig()
    async with async_playwright() as playwright:
        html = await render_search_page(playwright, query, config)

    candidates = extract_candidates(
        html,
        result_selector=config.result_selector,
        caption_selector=config.caption_selector,
    )
    logger.info("Extracted %d candidate(s)", len(candidates))
    if session is not None:
        return await probe_candidates(candidates, config, session)
    with requests.Session() as owned:
        return await probe_candidates(candidates, config, owned)


async def _download_batch(
    images: Sequence[ProbedImage],
    destination_dir: Path,
    config: ScrapeConfig,
    session: Any,
) -> List[Path]:
    semaphore = _limiter(config)
    return list(
        await asyncio.gather(
            *(
                _in_thread(
                    download_image,
                    image,
                    destination_dir,
                    config=config,
                    session=session,
                    semaphore=semaphore,
                )
                for image in images
            )
        )
    )


async def download_all(
    images: Sequence[ProbedImage],
    destination_dir: Path,
    config: Optional[ScrapeConfig] = None,
    session: Any = None,
) -> List[Path]:
    """Download every image concurrently; the first failure fails the batch."""
    config = config or ScrapeConfig()
    if session is not None:
        return await _download_batch(images, destination_dir, config, session)
    with requests.Session() as owned:
        return await _download_batch(images, destination_dir, config, owned)
