# === FILE: pen_harvest/crawler/session.py ===
"""Controlled browser session: one Chromium page driven through Playwright."""
from __future__ import annotations

from typing import Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from pen_harvest.config import HarvestConfig
from pen_harvest.exceptions import BrowserSessionError
from pen_harvest.logger import logger

__all__ = ("BrowserSession",)


class BrowserSession:
    """Async context manager owning the Playwright driver, browser and page.

    Usage::

        async with BrowserSession(cfg) as session:
            await session.page.goto(url)
    """

    def __init__(self, config: HarvestConfig) -> None:
        self.config = config
        self._playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    async def __aenter__(self) -> BrowserSession:
        self._playwright = await async_playwright().start()
        try:
            self.browser = await self._playwright.chromium.launch(headless=self.config.is_headless)
            logger.debug("Browser launched; headless=%s", self.config.is_headless)

            self.context = await self.browser.new_context(ignore_https_errors=True)
            self.page = await self.context.new_page()
            if self.config.debug:
                await self.page.set_viewport_size(
                    {"width": self.config.viewport_width, "height": self.config.viewport_height}
                )
        except PlaywrightError as exc:
            await self.close()
            raise BrowserSessionError(f"Browser setup failed: {exc}") from exc
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Tear the session down; safe to call more than once.

        Each stage is closed even when an earlier one raises.
        """
        context, browser, playwright = self.context, self.browser, self._playwright
        self.page = self.context = self.browser = self._playwright = None
        try:
            if context is not None:
                await context.close()
        finally:
            try:
                if browser is not None:
                    await browser.close()
            finally:
                if playwright is not None:
                    await playwright.stop()
                logger.debug("Browser session closed")
