"""Unit tests for core/render_math.py"""

import logging

from folio.core import render_math as render_math_module
from folio.core.parse import parse_markdown
from folio.core.render_math import MathCache, render_math


def test_render_inline_math():
    """Inline math renders to inline MathML."""
    html = render_math("x^2")
    assert html.startswith("<math")
    assert 'display="inline"' in html
    assert "<msup>" in html


def test_render_display_math():
    """Display math renders with block display."""
    assert 'display="block"' in render_math(r"\frac{a}{b}", display=True)


def test_render_invalid_math_returns_source(caplog):
    """Invalid syntax falls back to the raw expression instead of raising."""
    with caplog.at_level(logging.WARNING, logger="folio.core.render_math"):
        assert render_math("x^") == "x^"
    assert "Math rendering failed" in caplog.text


def test_render_any_converter_error_returns_source(monkeypatch):
    """Any converter failure degrades to the source text."""
    def _boom(latex, display="inline"):
        raise RuntimeError("boom")
    monkeypatch.setattr(render_math_module, "convert", _boom)
    assert render_math(r"\alpha", display=True) == r"\alpha"


def test_math_cache_prerenders_each_node_once(monkeypatch):
    """prerender renders every math node once; get() reuses the memo."""
    calls = []
    real = render_math_module.render_math

    def _counting(source, display=False):
        calls.append((source, display))
        return real(source, display)

    monkeypatch.setattr(render_math_module, "render_math", _counting)
    tree = parse_markdown("A $x$ b $$y$$.\n\n$$\nz\n$$\n")
    cache = MathCache().prerender(tree)
    assert len(cache) == 3
    assert len(calls) == 3

    block = tree.children[1]
    assert cache.get(block, (1,)).startswith("<math")
    assert len(calls) == 3


def test_math_cache_identical_sources_keyed_by_position():
    """Two identical expressions at different positions get separate entries."""
    tree = parse_markdown("$x$ and $x$\n")
    cache = MathCache().prerender(tree)
    assert len(cache) == 2


def test_math_cache_nested_display_math_rendered_inline(monkeypatch):
    """$$...$$ inside emphasis is prerendered once, in inline mode."""
    calls = []
    real = render_math_module.render_math

    def _counting(source, display=False):
        calls.append((source, display))
        return real(source, display)

    monkeypatch.setattr(render_math_module, "render_math", _counting)
    tree = parse_markdown("**a $$b$$ c**\n")
    cache = MathCache().prerender(tree)
    assert calls == [("b", False)]

    math = tree.children[0].children[0].children[0].children[1]
    assert 'display="inline"' in cache.get(math, (0, 0, 0, 1), display=False)
    assert len(calls) == 1
