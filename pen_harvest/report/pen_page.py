# File: pen_harvest/report/pen_page.py
"""pen_harvest.report.pen_page: rendering a single pen into a standalone HTML page."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Union

from jinja2 import Environment

from pen_harvest.crawler.models import ExtractedPenContent, PenReference

#: the only tokens a pen template may carry; any other text is copied as is
PEN_TOKEN_RE = re.compile(
    r"\{\{(title|url|html|style|javascript|resources\.javascript|resources\.style)\}\}"
)

# Fragments built by PenHarvest itself. Pen code is inserted verbatim, never escaped.
_ENV = Environment(autoescape=False)

_SCRIPT_TAGS = _ENV.from_string(
    "{% for src in urls %}{% if not loop.first %}\n{% endif %}"
    '<script src="{{ src }}"></script>{% endfor %}'
)
_STYLESHEET_TAGS = _ENV.from_string(
    "{% for href in urls %}{% if not loop.first %}\n{% endif %}"
    '<link rel="stylesheet" href="{{ href }}">{% endfor %}'
)


def load_template(path: Union[Path, str]) -> str:
    """Read a template file as UTF-8 text."""
    return Path(path).read_text(encoding="utf-8")


def script_tags(urls: Iterable[str]) -> str:
    return _SCRIPT_TAGS.render(urls=list(urls))


def stylesheet_tags(urls: Iterable[str]) -> str:
    return _STYLESHEET_TAGS.render(urls=list(urls))


def render_pen(template: str, pen: PenReference, content: ExtractedPenContent) -> str:
    """Fill the pen template with the extracted code of *pen*.

    Recognised tokens: ``{{title}}``, ``{{url}}``, ``{{html}}``, ``{{style}}``,
    ``{{javascript}}``, ``{{resources.javascript}}`` and ``{{resources.style}}``.
    Every occurrence is replaced; everything else in the template, other
    ``{{ ... }}`` blocks included, is left byte for byte.

    Args:
        template: template text.
        pen: the pen reference (title is trimmed before insertion).
        content: compiled code and resources of the pen.

    Returns:
        The complete HTML document.
    """
    values = {
        "title": pen.display_title,
        "url": pen.url,
        "html": content.markup or "",
        "style": content.style or "",
        "javascript": content.script or "",
        "resources.javascript": script_tags(content.external_scripts),
        "resources.style": stylesheet_tags(content.external_styles),
    }
    return PEN_TOKEN_RE.sub(lambda match: values[match.group(1)], template)


__all__ = ["PEN_TOKEN_RE", "load_template", "render_pen", "script_tags", "stylesheet_tags"]
