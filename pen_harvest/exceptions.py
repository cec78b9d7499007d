"""Exception hierarchy for PenHarvest.

Browser failures while processing a single pen are wrapped in
:class:`PenExtractionError` so the pipeline can record them and move on.
Anything else (configuration, filesystem, browser launch) stays fatal.
"""
from __future__ import annotations

from typing import Any


class HarvestError(Exception):
    """Base class for all PenHarvest errors."""


class BrowserSessionError(HarvestError):
    """Raised when the controlled browser cannot be started."""


class PenExtractionError(HarvestError):
    """Raised when one of the UI steps for a pen cannot complete.

    Attributes:
        url: Detail page of the pen being processed.
        step: Name of the step that failed (e.g. ``"iframe-ready"``).
        reason: Human-readable description of what the step waits for.
    """

    def __init__(
        self,
        url: str,
        step: str,
        reason: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.url = url
        self.step = step
        self.reason = reason
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"Step '{self.step}' failed: {self.reason}", f"URL: {self.url}"]
        for key, value in self.context.items():
            parts.append(f"  {key}: {value}")
        return "\n".join(parts)


__all__ = ["HarvestError", "BrowserSessionError", "PenExtractionError"]
