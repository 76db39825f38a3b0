"""Image probing and downloading utilities."""

from __future__ import annotations

import logging
import struct
from io import BytesIO
from pathlib import Path
from typing import Any, Optional

import imagesize
import requests
from filetype import guess
from PIL import ImageFile

from .config import ScrapeConfig
from .models import ImageCandidate, ImageProbe, ProbedImage
from .utils import build_filename, encode_title

logger = logging.getLogger("pin_harvest")

PROBE_CHUNK_BYTES = 4096
SIGNATURE_BYTES = 262
MAX_HEADER_BYTES = 1024 * 1024
DOWNLOAD_CHUNK_BYTES = 8192


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpeg":
            return "jpg"
        return ext
    return None


def _header_size(parser: ImageFile.Parser, head: bytes) -> Optional[tuple[int, int]]:
    """Return dimensions once either Pillow or imagesize can read them."""
    if parser.image is not None:
        return parser.image.size
    try:
        width, height = imagesize.get(BytesIO(head))
    except (struct.error, ValueError):
        return None
    if width > 0 and height > 0:
        return width, height
    return None


def probe_image(
    url: str,
    session: Any = None,
    timeout: Optional[float] = None,
) -> ImageProbe:
    """Read just enough of ``url`` to decode the image header.

    Reading stops at the first chunk once the signature shows the body is
    not an image, and after ``MAX_HEADER_BYTES`` when no size was found.
    Raises on HTTP errors and when the bytes never decode as an image.
    """
    http = session or requests
    with http.get(url, stream=True, timeout=timeout) as resp:
        resp.raise_for_status()
        parser = ImageFile.Parser()
        head = b""
        detected: Optional[str] = None
        size = None
        for chunk in resp.iter_content(chunk_size=PROBE_CHUNK_BYTES):
            head += chunk
            parser.feed(chunk)
            if detected is None and len(head) >= SIGNATURE_BYTES:
                detected = detect_image_format(head)
                if detected is None:
                    raise ValueError(f"Response from {url} is not an image")
            if detected is not None:
                size = _header_size(parser, head)
                if size is not None:
                    break
            if len(head) >= MAX_HEADER_BYTES:
                break

        if detected is None:
            detected = detect_image_format(head)
        if size is None and detected is not None:
            size = _header_size(parser, head)
        if detected is None or size is None:
            raise ValueError(f"Could not decode an image header from {url}")

        fmt, mime = detected, guess(head).mime
        return ImageProbe(
            width=size[0],
            height=size[1],
            type=fmt,
            mime=mime,
            wUnits="px",
            hUnits="px",
            length=int(resp.headers.get("Content-Length") or 0),
            url=resp.url or url,
        )


def probe_candidate(
    candidate: ImageCandidate,
    session: Any = None,
    timeout: Optional[float] = None,
) -> Optional[ProbedImage]:
    """Probe a candidate, returning ``None`` instead of raising on failure."""
    try:
        probe = probe_image(candidate.image_src, session=session, timeout=timeout)
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("Failed to probe image %s: %s", candidate.image_src, exc)
        return None
    return ProbedImage.from_candidate(candidate, probe)


def _stream_to_file(resp: Any, destination: Path) -> None:
    with destination.open("wb") as handle:
        for chunk in resp.iter_content(chunk_size=DOWNLOAD_CHUNK_BYTES):
            if chunk:
                handle.write(chunk)


def download_image(
    image: ProbedImage,
    destination_dir: Path,
    config: Optional[ScrapeConfig] = None,
    session: Any = None,
) -> Path:
    """Stream one probed image into ``destination_dir`` and return its path.

    Without ``atomic_downloads`` a failed transfer can leave a partial file.
    """
    config = config or ScrapeConfig()
    http = session or requests

    logger.info("Downloading %s", encode_title(image.title, config.title_length))
    filename = build_filename(
        image.title,
        image.probe.type,
        length=config.title_length,
        unique_key=image.image_src if config.unique_filenames else None,
    )
    destination = Path(destination_dir) / filename
    target = destination.with_name(filename + ".part") if config.atomic_downloads else destination

    try:
        with http.get(image.image_src, stream=True, timeout=config.download_timeout) as resp:
            resp.raise_for_status()
            _stream_to_file(resp, target)
    except BaseException:
        if config.atomic_downloads:
            target.unlink(missing_ok=True)
        raise

    if config.atomic_downloads:
        target.replace(destination)
    logger.debug("Saved %s", destination)
    return destination
