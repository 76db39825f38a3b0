"""Data models used throughout the scraping pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ImageCandidate:
    """Image reference scraped from one result container, not yet probed."""

    image_src: str
    title: str


@dataclass
class ImageProbe:
    """Intrinsic metadata read from the head of an image resource."""

    width: int
    height: int
    type: str
    mime: str
    wUnits: str
    hUnits: str
    length: int
    url: str


@dataclass
class ProbedImage:
    """Candidate that survived probing."""

    image_src: str
    title: str
    probe: ImageProbe

    @classmethod
    def from_candidate(cls, candidate: ImageCandidate, probe: ImageProbe) -> "ProbedImage":
        return cls(image_src=candidate.image_src, title=candidate.title, probe=probe)
