# === FILE: pen_harvest/crawler/extractor.py ===
"""
Pen extractor: forces every editor of a pen into its compiled view and reads
the resulting code plus the external resources declared by the author.

The UI sequence is a fixed table of :class:`UiStep`; when the site markup
changes, only :data:`PEN_UI_STEPS` and the selectors below need updating.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from pen_harvest.crawler.models import ExtractedPenContent, PenReference
from pen_harvest.exceptions import PenExtractionError
from pen_harvest.logger import logger

__all__ = ("UiStep", "PEN_UI_STEPS", "PenExtractor")

WAIT = "wait"
CLICK = "click"


@dataclass(frozen=True, slots=True)
class UiStep:
    """One blocking interaction with the pen page."""

    name: str
    action: str
    selector: str
    failure: str


PEN_UI_STEPS: Sequence[UiStep] = (
    UiStep("iframe-ready", WAIT, '.result-iframe[src^="https"]',
           "result preview never loaded over https"),
    UiStep("html-menu", CLICK, "#box-html .editor-actions-right > button",
           "HTML editor menu button not found"),
    UiStep("html-compiled", CLICK, "#html-view-compiled",
           "HTML 'view compiled' action not found"),
    UiStep("css-menu", CLICK, "#box-css .editor-actions-right > button",
           "CSS editor menu button not found"),
    UiStep("css-compiled", CLICK, "#css-view-compiled",
           "CSS 'view compiled' action not found"),
    UiStep("js-menu", CLICK, "#box-js .editor-actions-right > button",
           "JS editor menu button not found"),
    UiStep("js-compiled", CLICK, "#js-view-compiled",
           "JS 'view compiled' action not found"),
)

EDITOR_SELECTOR = ".code-wrap .CodeMirror"
JS_RESOURCES_SELECTOR = "#js-external-resources input.external-resource.tt-input"
CSS_RESOURCES_SELECTOR = "#css-external-resources input.external-resource.tt-input"

_READ_EDITORS_JS = """
(selector) => Array.from(
    document.querySelectorAll(selector),
    (editor) => editor.CodeMirror ? editor.CodeMirror.getValue() : null
)
"""

_READ_RESOURCES_JS = """
([jsSelector, cssSelector]) => {
    const values = (selector) => Array.from(document.querySelectorAll(selector))
        .map((input) => (input.value || "").trim())
        .filter((value) => value.length > 0);
    return {javascript: values(jsSelector), css: values(cssSelector)};
}
"""


def _slot(values: Sequence[Any], index: int) -> str:
    if index < len(values) and values[index]:
        return str(values[index])
    return ""


class PenExtractor:
    """Turns one :class:`PenReference` into :class:`ExtractedPenContent` using a single page."""

    def __init__(
        self,
        page: Page,
        *,
        debug: bool = False,
        debug_dir: Optional[Path] = None,
        timeout: Optional[float] = None,
        steps: Sequence[UiStep] = PEN_UI_STEPS,
    ) -> None:
        self.page = page
        self.debug = debug
        self.debug_dir = Path(debug_dir) if debug_dir is not None else Path("debug")
        self.timeout = timeout
        self.steps = tuple(steps)

    async def extract(self, pen: PenReference, slug: str = "pen") -> ExtractedPenContent:
        """Run the whole UI sequence for *pen*.

        Raises:
            PenExtractionError: navigation, a UI step or a debug screenshot failed.
        """
        try:
            await self.page.goto(pen.url, wait_until="networkidle", timeout=self.timeout)
        except PlaywrightError as exc:
            raise PenExtractionError(pen.url, "navigate", "page did not load", {"error": exc}) from exc

        if self.debug:
            await self._screenshot(pen, slug, "before")

        for step in self.steps:
            await self._run_step(pen, step)

        try:
            editors = await self.page.evaluate(_READ_EDITORS_JS, EDITOR_SELECTOR)
            resources = await self.page.evaluate(
                _READ_RESOURCES_JS, [JS_RESOURCES_SELECTOR, CSS_RESOURCES_SELECTOR]
            )
        except PlaywrightError as exc:
            raise PenExtractionError(pen.url, "read", "could not read editors", {"error": exc}) from exc

        if self.debug:
            await self._screenshot(pen, slug, "after")

        editors = list(editors or [])
        resources = resources or {}
        content = ExtractedPenContent(
            markup=_slot(editors, 0),
            style=_slot(editors, 1),
            script=_slot(editors, 2),
            external_scripts=list(resources.get("javascript") or []),
            external_styles=list(resources.get("css") or []),
        )
        logger.debug(
            "Extracted %s: %d editors, %d scripts, %d styles",
            pen.url, len(editors), len(content.external_scripts), len(content.external_styles),
        )
        return content

    async def _run_step(self, pen: PenReference, step: UiStep) -> None:
        logger.debug("Step %s on %s", step.name, pen.url)
        try:
            if step.action == WAIT:
                await self.page.wait_for_selector(step.selector, timeout=self.timeout)
            elif step.action == CLICK:
                await self.page.click(step.selector, timeout=self.timeout)
            else:
                raise ValueError(f"Unknown step action: {step.action}")
        except PlaywrightError as exc:
            raise PenExtractionError(
                pen.url, step.name, step.failure, {"selector": step.selector, "error": exc}
            ) from exc

    async def _screenshot(self, pen: PenReference, slug: str, stage: str) -> Path:
        path = self.debug_dir / f"{slug}-{stage}.png"
        try:
            await self.page.screenshot(path=str(path), full_page=True)
        except PlaywrightError as exc:
            raise PenExtractionError(
                pen.url, f"screenshot-{stage}", "screenshot failed", {"path": path, "error": exc}
            ) from exc
        logger.debug("Screenshot saved to %s", path)
        return path

    @property
    def step_names(self) -> List[str]:
        return [step.name for step in self.steps]
