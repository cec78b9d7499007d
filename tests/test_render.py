# File: tests/test_render.py
"""Tests for pen and index page rendering."""
from pen_harvest.config import TEMPLATES_DIR
from pen_harvest.crawler.models import ExtractedPenContent, IndexEntry, PenReference
from pen_harvest.report import load_template, render_index, render_pen

from conftest import INDEX_TEMPLATE, PEN_TEMPLATE

PEN = PenReference(title="  Flexbox Masonry ", url="https://codepen.io/osj2507/pen/ZYBBpw")


def test_empty_content_leaves_no_tokens():
    html = render_pen(PEN_TEMPLATE, PEN, ExtractedPenContent())

    assert "{{" not in html and "}}" not in html
    assert "<title>Flexbox Masonry</title>" in html
    assert PEN.url in html
    assert "None" not in html
    assert "undefined" not in html


def test_content_is_inserted_verbatim():
    content = ExtractedPenContent(
        markup='<div class="box">&amp;</div>',
        style=".box { display: flex; }",
        script="if (a < b && c) { run(); }",
    )
    html = render_pen(PEN_TEMPLATE, PEN, content)

    assert '<div class="box">&amp;</div>' in html
    assert "<style>.box { display: flex; }</style>" in html
    assert "<script>if (a < b && c) { run(); }</script>" in html


def test_resources_keep_order():
    content = ExtractedPenContent(
        external_scripts=["https://cdn/a.js", "https://cdn/b.js", "https://cdn/a.js"],
        external_styles=["https://cdn/reset.css", "https://cdn/theme.css"],
    )
    html = render_pen(PEN_TEMPLATE, PEN, content)

    assert (
        '<script src="https://cdn/a.js"></script>\n'
        '<script src="https://cdn/b.js"></script>\n'
        '<script src="https://cdn/a.js"></script>'
    ) in html
    assert (
        '<link rel="stylesheet" href="https://cdn/reset.css">\n'
        '<link rel="stylesheet" href="https://cdn/theme.css">'
    ) in html


def test_template_without_tokens_is_unchanged():
    assert render_pen("<p>static</p>", PEN, ExtractedPenContent(markup="x")) == "<p>static</p>"


def test_other_braces_pass_through():
    template = (
        "<div id=app>{{ message }}</div><title>{{title}}</title>"
        "[{{author}}][{{resources.fonts}}][{{ title }}]"
    )
    assert render_pen(template, PEN, ExtractedPenContent()) == (
        "<div id=app>{{ message }}</div><title>Flexbox Masonry</title>"
        "[{{author}}][{{resources.fonts}}][{{ title }}]"
    )


def test_template_syntax_lookalikes_are_not_interpreted():
    template = "<style>a{#x:1}</style>{% if x %}{{style}}{% endif %}{# note"
    html = render_pen(template, PEN, ExtractedPenContent(style="b{}"))
    assert html == "<style>a{#x:1}</style>{% if x %}b{}{% endif %}{# note"


def test_every_occurrence_is_filled():
    html = render_pen("{{title}}|{{title}}", PEN, ExtractedPenContent())
    assert html == "Flexbox Masonry|Flexbox Masonry"


def test_code_with_backslashes_and_tokens_is_inserted_as_is():
    content = ExtractedPenContent(script=r'const re = /\d+\1/; const t = "{{title}}";')
    html = render_pen("<script>{{javascript}}</script>", PEN, content)
    assert html == r'<script>const re = /\d+\1/; const t = "{{title}}";</script>'


def test_render_index_keeps_foreign_text():
    html = render_index("{% raw %}{#{{ list }}<nav>{{list}}</nav>", [IndexEntry("A", "a.html")])
    assert html == '{% raw %}{#{{ list }}<nav><a href="a.html" target="iframe">A</a></nav>'


def test_render_index_anchors_in_order():
    entries = [
        IndexEntry("Flexbox Masonry", "flexbox-masonry.html"),
        IndexEntry("Grid", "grid.html"),
    ]
    html = render_index(INDEX_TEMPLATE, entries)

    assert html == (
        '<nav><a href="flexbox-masonry.html" target="iframe">Flexbox Masonry</a>'
        '<a href="grid.html" target="iframe">Grid</a></nav>\n'
    )


def test_render_index_empty_list():
    assert render_index(INDEX_TEMPLATE, []) == "<nav></nav>\n"


def test_bundled_templates_render():
    pen_html = render_pen(
        load_template(TEMPLATES_DIR / "pen.html"),
        PEN,
        ExtractedPenContent(markup="<b>x</b>", external_scripts=["https://cdn/a.js"]),
    )
    index_html = render_index(
        load_template(TEMPLATES_DIR / "index.html"), [IndexEntry("A", "a.html")]
    )

    assert "{{" not in pen_html and "<b>x</b>" in pen_html
    assert '<script src="https://cdn/a.js"></script>' in pen_html
    assert '<a href="a.html" target="iframe">A</a>' in index_html
    assert '<iframe name="iframe">' in index_html
