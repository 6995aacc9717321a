"""Inline content helpers: flattened text, styled rich-text runs, and inline HTML"""

from html import escape
from typing import Iterable, Sequence

from markdown_it.tree import SyntaxTreeNode

from folio.core.models import RichText
from folio.core.render_math import MATH_TYPES, MathCache, NodePath


BREAK_TYPES = ('softbreak', 'hardbreak')
CODE_TYPES = ('code_inline', 'fence', 'code_block')
BLOCK_TYPES = {
    'paragraph', 'heading', 'blockquote', 'bullet_list', 'ordered_list', 'list_item',
    'fence', 'code_block', 'math_block', 'math_block_label', 'hr', 'table', 'html_block',
}

STYLE_FLAGS = {'strong': 'bold', 'em': 'italic', 's': 'strikethrough'}
HTML_TAGS = {'strong': 'strong', 'em': 'em', 's': 's'}


def node_text(nodes: Iterable[SyntaxTreeNode]) -> str:
    """Flatten nodes to their literal text; code and math contribute their source, images nothing."""
    parts = []
    for node in nodes:
        if node.type == 'text' or node.type in CODE_TYPES or node.type in MATH_TYPES:
            parts.append(node.content)
        elif node.type in BREAK_TYPES:
            parts.append('\n')
        elif node.type != 'image':
            parts.append(node_text(node.children))
    return ''.join(parts)


def _collect(nodes: Iterable[SyntaxTreeNode], style: dict, runs: list[RichText]) -> None:
    for node in nodes:
        kind = node.type
        if kind in ('image', 'html_inline', 'html_block'):
            continue
        if kind in BLOCK_TYPES and runs and runs[-1].content != '\n':
            runs.append(RichText(content='\n'))

        if kind == 'text':
            runs.append(RichText(content=node.content, **style))
        elif kind in BREAK_TYPES:
            runs.append(RichText(content='\n', **style))
        elif kind in CODE_TYPES:
            runs.append(RichText(content=node.content.removesuffix('\n'), **{**style, 'code': True}))
        elif kind in MATH_TYPES:
            # math outside paragraphs is not rendered here, only its source is kept
            runs.append(RichText(content=node.content.strip(), **style))
        elif kind == 'link':
            _collect(node.children, {**style, 'link': str(node.attrs.get('href', ''))}, runs)
        elif kind in STYLE_FLAGS:
            _collect(node.children, {**style, STYLE_FLAGS[kind]: True}, runs)
        else:
            _collect(node.children, style, runs)


def rich_text(nodes: Sequence[SyntaxTreeNode]) -> list[RichText]:
    """Convert nodes to styled runs; each leaf carries the union of its ancestors' flags.

    Falls back to a single unstyled run of the flattened text when no runs are found.
    """
    runs: list[RichText] = []
    _collect(nodes, {}, runs)
    return runs or [RichText(content=node_text(nodes))]


def has_math(nodes: Iterable[SyntaxTreeNode]) -> bool:
    """True if any node (at any depth) is inline or display math."""
    return any(n.type in MATH_TYPES or has_math(n.children) for n in nodes)


def _html(node: SyntaxTreeNode, path: NodePath, math: MathCache) -> str:
    kind = node.type
    if kind == 'text':
        return escape(node.content, quote=False)
    if kind in MATH_TYPES:
        # display math is split out of paragraphs before this, anything left is inline
        return math.get(node, path, display=False)
    if kind == 'softbreak':
        return '\n'
    if kind == 'hardbreak':
        return '<br />\n'
    if kind == 'code_inline':
        return f'<code>{escape(node.content, quote=False)}</code>'
    if kind in ('image', 'html_inline'):
        return ''

    inner = ''.join(_html(child, (*path, i), math) for i, child in enumerate(node.children))
    if kind in HTML_TAGS:
        tag = HTML_TAGS[kind]
        return f'<{tag}>{inner}</{tag}>'
    if kind == 'link':
        href = escape(str(node.attrs.get('href', '')))
        return f'<a href="{href}" target="_blank" rel="noopener noreferrer" class="link-body">{inner}</a>'
    return inner


def inline_html(items: Sequence[tuple[NodePath, SyntaxTreeNode]], math: MathCache) -> str:
    """Flatten positioned inline nodes to one HTML string with math replaced by rendered markup."""
    return ''.join(_html(node, path, math) for path, node in items)
