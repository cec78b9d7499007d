# File: pen_harvest/summary.py
"""pen_harvest.summary: what happened during one harvest run."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class PenFailure:
    """A pen whose extraction could not complete."""

    title: str
    url: str
    step: str
    error: str


@dataclass(slots=True)
class RunReport:
    """Outcome of a run: downloaded, skipped and failed pens plus the pages visited."""

    query: Optional[str] = None
    pages: List[int] = field(default_factory=list)
    downloaded: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[PenFailure] = field(default_factory=list)
    index_path: Optional[str] = None

    @property
    def total(self) -> int:
        return len(self.downloaded) + len(self.skipped) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed

    def as_dict(self) -> dict:
        data = asdict(self)
        data["total"] = self.total
        return data

    def json(self, *, pretty: bool = False) -> str:
        """JSON representation of the report."""
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)

    def summary_line(self) -> str:
        return (
            f"{len(self.downloaded)} downloaded, {len(self.skipped)} skipped, "
            f"{len(self.failed)} failed"
        )


__all__ = ["PenFailure", "RunReport"]
