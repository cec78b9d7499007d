# pen_harvest/crawler/models.py
"""
Data models shared by the search paginator, the pen extractor and the pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True, slots=True)
class PenReference:
    """A pen found by search or given directly: its title and detail page URL."""

    title: str
    url: str

    @property
    def display_title(self) -> str:
        return self.title.strip()


@dataclass(slots=True)
class ExtractedPenContent:
    """Compiled code bodies of one pen plus its external resources, in site order."""

    markup: str = ""
    style: str = ""
    script: str = ""
    external_scripts: List[str] = field(default_factory=list)
    external_styles: List[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class IndexEntry:
    """One anchor of the index page."""

    title: str
    filename: str
