# File: pen_harvest/engine.py
"""pen_harvest.engine: orchestration of search, extraction, rendering and the index."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional

from playwright.async_api import Page

from pen_harvest.config import HarvestConfig
from pen_harvest.crawler.extractor import PenExtractor
from pen_harvest.crawler.models import IndexEntry, PenReference
from pen_harvest.crawler.search import SearchPaginator
from pen_harvest.crawler.session import BrowserSession
from pen_harvest.exceptions import PenExtractionError
from pen_harvest.logger import logger
from pen_harvest.report.index_page import render_index
from pen_harvest.report.pen_page import load_template, render_pen
from pen_harvest.summary import PenFailure, RunReport
from pen_harvest.utils import ensure_dir, normalize_title, short_hash, write_text_atomic

__all__ = ["HarvestPipeline", "start_harvest"]


class HarvestPipeline:
    """Runs one harvest over a single, already opened browser page.

    Pens come either from ``config.links`` (one batch) or from the search
    pages ``start_page..end_page``. A pen whose output file already exists is
    not extracted again but is still listed in the index. The index is
    rewritten after every batch from the pens seen so far in this run.
    """

    def __init__(
        self,
        config: HarvestConfig,
        page: Page,
        *,
        extractor: Optional[PenExtractor] = None,
        paginator: Optional[SearchPaginator] = None,
    ) -> None:
        self.config = config
        self.page = page
        self.output_dir = Path(config.output_dir)
        self.index_path = self.output_dir / config.index_filename
        self.extractor = extractor or PenExtractor(
            page,
            debug=config.debug,
            debug_dir=config.debug_dir,
            timeout=config.timeout_ms,
        )
        self.paginator = paginator or SearchPaginator(
            page, str(config.search_url), timeout=config.timeout_ms
        )
        self.pen_template = load_template(config.pen_template)
        self.index_template = load_template(config.index_template)
        self.entries: List[IndexEntry] = []
        self._claimed: Dict[str, str] = {}
        self.report = RunReport()

    async def run(self) -> RunReport:
        """Process every batch and return the run report."""
        ensure_dir(self.output_dir)
        if self.config.debug:
            ensure_dir(self.config.debug_dir)

        if self.config.links:
            logger.info("Processing %d direct link(s)", len(self.config.links))
            pens = [PenReference(title=link.title, url=str(link.url)) for link in self.config.links]
            await self.process_batch(pens)
        else:
            self.report.query = self.config.search_query
            async for page_number, pens in self.paginator.iter_pages(
                self.config.search_query, self.config.start_page, self.config.end_page
            ):
                self.report.pages.append(page_number)
                await self.process_batch(pens)

        logger.info("Harvest finished: %s", self.report.summary_line())
        for failure in self.report.failed:
            logger.warning("Failed %s (%s) at step '%s'", failure.title, failure.url, failure.step)
        return self.report

    async def process_batch(self, pens: Iterable[PenReference]) -> None:
        """Process one page worth of pens, then checkpoint the index."""
        for pen in pens:
            await self.process_pen(pen)
        self.write_index()

    async def process_pen(self, pen: PenReference) -> None:
        filename = self.claim_filename(pen)
        target = self.output_dir / filename

        if target.exists():
            logger.info('Pen "%s" already saved!', target)
            self.entries.append(IndexEntry(pen.display_title, filename))
            self.report.skipped.append(filename)
            return

        logger.info('Processing "%s" @ %s', pen.display_title, pen.url)
        try:
            content = await self.extractor.extract(pen, Path(filename).stem)
        except PenExtractionError as exc:
            logger.error('Could not extract "%s": %s', pen.display_title, exc)
            self.report.failed.append(
                PenFailure(title=pen.display_title, url=pen.url, step=exc.step, error=exc.reason)
            )
            return

        write_text_atomic(target, render_pen(self.pen_template, pen, content))
        self.entries.append(IndexEntry(pen.display_title, filename))
        self.report.downloaded.append(filename)
        logger.info('... saved to "%s"', target)

    def claim_filename(self, pen: PenReference) -> str:
        """Pick the output filename of *pen*, keeping different pens apart.

        The first pen to claim a slug in this run gets ``<slug>.html``; another
        URL with the same slug gets ``<slug>-<hash>.html``. Names depend on the
        order pens are met in, so a later run that meets the second URL first
        resolves it to the existing ``<slug>.html`` and skips it.
        """
        slug = normalize_title(pen.title) or f"pen-{short_hash(pen.url)}"
        owner = self._claimed.setdefault(slug, pen.url)
        if owner != pen.url:
            slug = f"{slug}-{short_hash(pen.url)}"
            self._claimed.setdefault(slug, pen.url)
        return f"{slug}.html"

    def write_index(self) -> Path:
        write_text_atomic(self.index_path, render_index(self.index_template, self.entries))
        self.report.index_path = str(self.index_path)
        logger.debug("Index updated with %d pens: %s", len(self.entries), self.index_path)
        return self.index_path


async def start_harvest(cfg: HarvestConfig) -> RunReport:
    """
    Open a browser session, run the pipeline and close the browser.

    Parameters
    ----------
    cfg : HarvestConfig
        Configuration of the run.

    Returns
    -------
    RunReport
        Downloaded, skipped and failed pens.
    """
    async with BrowserSession(cfg) as session:
        pipeline = HarvestPipeline(cfg, session.page)
        return await pipeline.run()
