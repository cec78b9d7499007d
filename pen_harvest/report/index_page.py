# File: pen_harvest/report/index_page.py
"""pen_harvest.report.index_page: the index page listing every pen of the run."""

from __future__ import annotations

from typing import Sequence

from jinja2 import Environment

from pen_harvest.crawler.models import IndexEntry

#: name of the frame the index anchors open pens in
INDEX_FRAME = "iframe"
LIST_TOKEN = "{{list}}"

_ANCHORS = Environment(autoescape=False).from_string(
    '{% for entry in entries %}<a href="{{ entry.filename }}" target="{{ frame }}">'
    "{{ entry.title }}</a>{% endfor %}"
)


def index_anchors(entries: Sequence[IndexEntry]) -> str:
    return _ANCHORS.render(entries=entries, frame=INDEX_FRAME)


def render_index(template: str, entries: Sequence[IndexEntry]) -> str:
    """Replace every ``{{list}}`` with one anchor per entry, in the given order."""
    return template.replace(LIST_TOKEN, index_anchors(entries))


__all__ = ["INDEX_FRAME", "LIST_TOKEN", "index_anchors", "render_index"]
