# File: pen_harvest/report/__init__.py
"""pen_harvest.report: rendering of pen pages, the index page and the JSON run report."""

from __future__ import annotations

from pen_harvest.report.index_page import render_index
from pen_harvest.report.json_report import render_json
from pen_harvest.report.pen_page import load_template, render_pen

__all__ = ["render_pen", "render_index", "render_json", "load_template"]
