# File: tests/conftest.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlsplit

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from pen_harvest.config import HarvestConfig

SEARCH_URL = "https://codepen.io/search/pens"

PEN_TEMPLATE = (
    "<title>{{title}}</title><link rel=canonical href=\"{{url}}\">\n"
    "{{resources.style}}\n<style>{{style}}</style>\n"
    "{{html}}\n{{resources.javascript}}\n<script>{{javascript}}</script>\n"
)
INDEX_TEMPLATE = "<nav>{{list}}</nav>\n"


@dataclass
class FakePen:
    """What the fake browser shows on one pen detail page."""

    editors: List[Optional[str]] = field(default_factory=lambda: ["<p>hi</p>", "p{}", "go()"])
    javascript: List[str] = field(default_factory=list)
    css: List[str] = field(default_factory=list)
    missing: Tuple[str, ...] = ()
    screenshot_fails: bool = False


@dataclass
class FakeSite:
    """Search result pages (page number -> [(title, href)]) and pen pages (url -> FakePen)."""

    search_pages: Dict[int, List[Tuple[str, str]]] = field(default_factory=dict)
    pens: Dict[str, FakePen] = field(default_factory=dict)
    unreachable: Tuple[str, ...] = ()


class FakePage:
    """In-memory stand-in for the Playwright page calls used by PenHarvest."""

    def __init__(self, site: FakeSite) -> None:
        self.site = site
        self.url = "about:blank"
        self.visited: List[str] = []
        self.actions: List[Tuple[str, str]] = []
        self.screenshots: List[str] = []
        self.wait_until: List[Optional[str]] = []

    async def goto(self, url: str, wait_until: Optional[str] = None, timeout=None):
        if url in self.site.unreachable or url.split("?")[0].rstrip("/") in self.site.unreachable:
            raise PlaywrightTimeoutError(f"Timeout exceeded while navigating to {url}")
        self.url = url
        self.visited.append(url)
        self.wait_until.append(wait_until)

    async def content(self) -> str:
        query = parse_qs(urlsplit(self.url).query)
        number = int(query.get("page", ["1"])[0])
        items = "".join(
            f'<div class="meta"><div class="item-title"><a href="{href}">{title}</a></div></div>'
            for title, href in self.site.search_pages.get(number, [])
        )
        return f"<html><body><div class='results'>{items}</div></body></html>"

    def _pen(self) -> FakePen:
        return self.site.pens.get(self.url, FakePen())

    def _check(self, selector: str) -> None:
        if selector in self._pen().missing:
            raise PlaywrightTimeoutError(f"Timeout waiting for selector {selector}")

    async def wait_for_selector(self, selector: str, timeout=None):
        self._check(selector)
        self.actions.append(("wait", selector))

    async def click(self, selector: str, timeout=None):
        self._check(selector)
        self.actions.append(("click", selector))

    async def evaluate(self, expression: str, arg=None):
        pen = self._pen()
        if "CodeMirror" in expression:
            return list(pen.editors)
        return {"javascript": list(pen.javascript), "css": list(pen.css)}

    async def screenshot(self, path: str, full_page: bool = False):
        if self._pen().screenshot_fails:
            raise PlaywrightError("Target closed")
        self.screenshots.append(path)

    async def set_viewport_size(self, viewport):
        self.viewport = viewport


def pen_url(slug: str) -> str:
    return f"https://codepen.io/someone/pen/{slug}"


@pytest.fixture()
def templates(tmp_path) -> Dict[str, Path]:
    pen = tmp_path / "pen.html"
    index = tmp_path / "index.html"
    pen.write_text(PEN_TEMPLATE, encoding="utf-8")
    index.write_text(INDEX_TEMPLATE, encoding="utf-8")
    return {"pen": pen, "index": index}


@pytest.fixture()
def make_config(tmp_path, templates):
    """Build a HarvestConfig writing into tmp_path."""

    def _make(**overrides) -> HarvestConfig:
        values = dict(
            search_query="flexbox",
            search_url=SEARCH_URL,
            start_page=1,
            end_page=1,
            output_dir=tmp_path / "pens",
            debug_dir=tmp_path / "debug",
            pen_template=templates["pen"],
            index_template=templates["index"],
        )
        values.update(overrides)
        return HarvestConfig(**values)

    return _make


@pytest.fixture()
def site() -> FakeSite:
    return FakeSite()


@pytest.fixture()
def fake_page(site) -> FakePage:
    return FakePage(site)
