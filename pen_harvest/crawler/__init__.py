"""Browser-driven part of PenHarvest: session, search paginator and pen extractor."""

from pen_harvest.crawler.extractor import PEN_UI_STEPS, PenExtractor, UiStep
from pen_harvest.crawler.models import ExtractedPenContent, IndexEntry, PenReference
from pen_harvest.crawler.search import SearchPaginator
from pen_harvest.crawler.session import BrowserSession

__all__ = [
    "BrowserSession",
    "ExtractedPenContent",
    "IndexEntry",
    "PEN_UI_STEPS",
    "PenExtractor",
    "PenReference",
    "SearchPaginator",
    "UiStep",
]
