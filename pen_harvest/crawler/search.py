# pen_harvest/crawler/search.py
"""
Search paginator: requests result pages of the pen search and scrapes
the (title, url) pairs listed on them.
"""
from __future__ import annotations

from typing import AsyncIterator, List, Optional, Tuple
from urllib.parse import urlencode, urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag
from playwright.async_api import Page

from pen_harvest.crawler.models import PenReference
from pen_harvest.logger import logger

__all__ = ("RESULT_LINK_SELECTOR", "SearchPaginator", "parse_results")

RESULT_LINK_SELECTOR = ".meta > .item-title > a"


def parse_results(html: str, base_url: str) -> List[PenReference]:
    """
    Extract every result title link from a search page, in document order.

    Links without href are ignored; relative hrefs are made absolute.
    """
    soup = BeautifulSoup(html, "html.parser")
    pens: List[PenReference] = []
    for tag in soup.select(RESULT_LINK_SELECTOR):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str) or not href_val.strip():
            continue
        pens.append(PenReference(title=tag.get_text(), url=urljoin(base_url, href_val.strip())))
    return pens


class SearchPaginator:
    """Walks search result pages with the shared browser page."""

    def __init__(self, page: Page, search_url: str, *, timeout: Optional[float] = None) -> None:
        self.page = page
        self.search_url = str(search_url).rstrip("/")
        self.timeout = timeout

    def build_url(self, query: str, page_number: int) -> str:
        params = {"limit": "all", "q": query, "page": page_number}
        return f"{self.search_url}/?{urlencode(params)}"

    async def search(self, query: str, page_number: int) -> List[PenReference]:
        """Load one result page and return its pens."""
        url = self.build_url(query, page_number)
        logger.info('Search for "%s", PAGE #%d', query, page_number)
        await self.page.goto(url, wait_until="load", timeout=self.timeout)
        html = await self.page.content()
        pens = parse_results(html, url)
        logger.debug("Found %d pens on page %d", len(pens), page_number)
        return pens

    async def iter_pages(
        self, query: str, start_page: int, end_page: int
    ) -> AsyncIterator[Tuple[int, List[PenReference]]]:
        """Yield ``(page_number, pens)`` for every page in ``[start_page, end_page]``."""
        for page_number in range(start_page, end_page + 1):
            yield page_number, await self.search(query, page_number)
