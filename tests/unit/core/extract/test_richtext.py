"""Unit tests for core/extract/richtext.py"""

from folio.core.extract.richtext import has_math, inline_html, node_text, rich_text
from folio.core.parse import parse_markdown
from folio.core.render_math import MathCache


def _inline(md: str):
    tree = parse_markdown(md)
    return tree, tree.children[0].children[0].children


def test_rich_text_styles_accumulate():
    """Nested styles give each leaf the union of flags along its ancestors."""
    _, nodes = _inline("plain **bold *both*** [~~gone~~ **x**](https://e.com)\n")
    runs = rich_text(nodes)
    by_text = {r.content: r for r in runs}

    assert not by_text["plain "].bold
    assert by_text["bold "].bold and not by_text["bold "].italic
    assert by_text["both"].bold and by_text["both"].italic
    assert by_text["gone"].strikethrough and by_text["gone"].link == "https://e.com"
    assert by_text["x"].bold and by_text["x"].link == "https://e.com"
    assert all(not r.underline for r in runs)


def test_rich_text_inline_code_flag():
    _, nodes = _inline("call `f(x)` now\n")
    runs = rich_text(nodes)
    assert [r.content for r in runs] == ["call ", "f(x)", " now"]
    assert [r.code for r in runs] == [False, True, False]


def test_rich_text_fallback_to_plain_text():
    """With nothing to style, a single run holds the flattened text."""
    runs = rich_text([])
    assert len(runs) == 1
    assert runs[0].content == ""


def test_rich_text_separates_block_children():
    """Consecutive block children in a container are separated by a newline run."""
    tree = parse_markdown("> first\n>\n> second\n")
    runs = rich_text(tree.children[0].children)
    assert "".join(r.content for r in runs) == "first\nsecond"


def test_node_text_skips_images():
    _, nodes = _inline("see ![alt text](a.png) $x$\n")
    assert node_text(nodes) == "see  x"


def test_has_math_nested():
    _, nodes = _inline("**bold $x$**\n")
    assert has_math(nodes)
    _, nodes = _inline("no math here\n")
    assert not has_math(nodes)


def test_inline_html_tags_and_escaping():
    """Styles become inline tags, text is escaped, links open in a new tab."""
    tree, nodes = _inline("a < b **c** *d* `<e>` [f](https://x.com/?a=1&b=2)\n")
    items = [((0, 0, i), n) for i, n in enumerate(nodes)]
    html = inline_html(items, MathCache().prerender(tree))
    assert html.startswith("a &lt; b <strong>c</strong> <em>d</em> <code>&lt;e&gt;</code> ")
    assert '<a href="https://x.com/?a=1&amp;b=2" target="_blank" rel="noopener noreferrer" class="link-body">f</a>' in html


def test_inline_html_renders_math():
    tree, nodes = _inline("area $\\pi r^2$\n")
    items = [((0, 0, i), n) for i, n in enumerate(nodes)]
    html = inline_html(items, MathCache().prerender(tree))
    assert html.startswith("area <math")
