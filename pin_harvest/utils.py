"""Utility helpers for string normalization and filename handling."""

from __future__ import annotations

import hashlib
import re
from urllib.parse import quote

WHITESPACE_PATTERN = re.compile(r"\s+")
SIZE_TOKEN_PATTERN = re.compile(r"\d+x\d*")

# Characters a browser's encodeURIComponent leaves untouched.
_COMPONENT_SAFE = "-_.!~*'()"


def normalize_whitespace(value: str) -> str:
    """Collapse whitespace runs to one space and strip both ends."""
    return WHITESPACE_PATTERN.sub(" ", value.strip())


def to_original_src(src: str) -> str:
    """Rewrite the first ``<w>x<h>`` thumbnail size token to ``originals``."""
    return SIZE_TOKEN_PATTERN.sub("originals", src, count=1)


def derive_title(caption: str, tags: str) -> str:
    """Prefer the caption; otherwise use the first comma-separated tag."""
    if caption:
        return caption
    return tags.split(",")[0]


def truncate_utf16(value: str, length: int) -> str:
    """Keep the first ``length`` UTF-16 code units of ``value``.

    A surrogate pair split by the cut is dropped entirely.
    """
    units = value.encode("utf-16-le")[: length * 2]
    return units.decode("utf-16-le", errors="ignore")


def encode_title(title: str, length: int = 20) -> str:
    """Truncate a title and percent-encode it for use in a filename."""
    return quote(truncate_utf16(title, length), safe=_COMPONENT_SAFE)


def build_filename(
    title: str,
    extension: str,
    length: int = 20,
    unique_key: str | None = None,
) -> str:
    """Derive ``<encoded title>.<extension>``, optionally with a short digest."""
    stem = encode_title(title, length)
    if unique_key is not None:
        digest = hashlib.sha1(unique_key.encode("utf-8")).hexdigest()[:8]
        stem = f"{stem}-{digest}"
    return f"{stem}.{extension}"
