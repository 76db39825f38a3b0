"""Command-line entry point for the image scraper."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence

from .config import ScrapeConfig
from .pipeline import download_all, scrape

logger = logging.getLogger("pin_harvest.cli")

# Relative --output paths are resolved against the installed package,
# not the caller's working directory.
PACKAGE_DIR = Path(__file__).resolve().parent


class InputError(ValueError):
    """A required command-line input is missing or empty."""


class OutputDirectoryError(FileNotFoundError):
    """The output path does not exist or is not a directory."""


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Search an image-sharing site and download the results.",
    )
    parser.add_argument("--query", default="", help="Search query")
    parser.add_argument(
        "--output",
        default="",
        help="Existing directory, relative to the installed package, for the images",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    argv = list(sys.argv[1:] if argv is None else argv)
    return parser.parse_args(argv)


def resolve_output_dir(output: str, base: Path = PACKAGE_DIR) -> Path:
    """Join ``output`` under ``base``, absolute paths included."""
    path = Path(output)
    if path.is_absolute():
        path = path.relative_to(path.anchor)
    return base / path


def validate_inputs(query: str, output: str, base: Path = PACKAGE_DIR) -> Path:
    """Check the inputs and return the resolved output directory."""
    if not query or not output:
        raise InputError("Input parameters missing")
    output_path = resolve_output_dir(output, base)
    if not output_path.is_dir():
        raise OutputDirectoryError("Output directory cannot be found")
    return output_path


async def run(
    query: str,
    output: str,
    config: Optional[ScrapeConfig] = None,
    base: Path = PACKAGE_DIR,
) -> List[Path]:
    """Validate, scrape and download; returns the written file paths."""
    logger.info("Query: %s, output: %s", query, output)
    output_path = validate_inputs(query, output, base)
    config = config or ScrapeConfig()

    images = await scrape(query, config)
    paths = await download_all(images, output_path, config)
    logger.info("Done")
    return paths


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    overall_start = time.perf_counter()
    paths = asyncio.run(run(args.query, args.output))
    logger.debug(
        "Downloaded %d file(s) in %.2fs",
        len(paths),
        time.perf_counter() - overall_start,
    )


if __name__ == "__main__":
    main()
