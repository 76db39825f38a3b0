"""HTML extraction of image candidates from a rendered search page."""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup
from bs4.element import Tag

from .config import DEFAULT_CAPTION_SELECTOR, DEFAULT_RESULT_SELECTOR
from .models import ImageCandidate
from .utils import derive_title, normalize_whitespace, to_original_src


def _candidate_from_container(container: Tag, caption_selector: str) -> ImageCandidate:
    """Build a candidate from one result container; missing parts become empty."""
    image = container.find("img")
    caption = container.select_one(caption_selector)

    tags = normalize_whitespace(image.get("alt") or "") if image else ""
    image_url = (image.get("src") or "") if image else ""
    caption_text = normalize_whitespace(caption.get_text()) if caption else ""

    return ImageCandidate(
        image_src=to_original_src(image_url),
        title=derive_title(caption_text, tags),
    )


def extract_candidates(
    html: str,
    result_selector: str = DEFAULT_RESULT_SELECTOR,
    caption_selector: str = DEFAULT_CAPTION_SELECTOR,
) -> List[ImageCandidate]:
    """Return one candidate per result container, in document order."""
    soup = BeautifulSoup(html, "html.parser")
    return [
        _candidate_from_container(container, caption_selector)
        for container in soup.select(result_selector)
    ]
