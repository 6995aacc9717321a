"""Search text extraction: markdown-free plain text from a syntax tree"""

import re
from typing import Iterator

from markdown_it.tree import SyntaxTreeNode

from folio.core.models import Frontmatter
from folio.core.render_math import MATH_TYPES


SKIP_TYPES = {'fence', 'code_block', 'code_inline', 'image', *MATH_TYPES}
SYNTAX_RE = re.compile(r'[#*_`\[\]()]')
WHITESPACE_RE = re.compile(r'\s+')


def _text_nodes(node: SyntaxTreeNode) -> Iterator[str]:
    if node.type in SKIP_TYPES:
        return
    if node.type == 'text':
        yield node.content
    for child in node.children:
        yield from _text_nodes(child)


def extract_plain_text(tree: SyntaxTreeNode) -> str:
    """Join all literal text outside code and math, strip markdown punctuation, normalize whitespace."""
    text = ' '.join(_text_nodes(tree))
    text = SYNTAX_RE.sub(' ', text)
    return WHITESPACE_RE.sub(' ', text).strip()


def build_search_text(frontmatter: Frontmatter, plain_text: str) -> str:
    """Lowercased title, summary, excerpt, tags, and body text for one-field substring search."""
    parts = [
        frontmatter.title,
        frontmatter.summary or '',
        frontmatter.excerpt or '',
        ' '.join(frontmatter.tags or []),
        plain_text,
    ]
    return ' '.join(p for p in parts if p).lower()
