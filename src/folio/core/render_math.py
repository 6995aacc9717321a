"""Math rendering: LaTeX to MathML with per-expression fallback and a per-document memo"""

import logging
from typing import Optional

from latex2mathml.converter import convert
from markdown_it.tree import SyntaxTreeNode


logger = logging.getLogger(__name__)

INLINE_MATH = 'math_inline'
DISPLAY_MATH = ('math_inline_double', 'math_block', 'math_block_label')
MATH_TYPES = (INLINE_MATH, *DISPLAY_MATH)

NodePath = tuple[int, ...]
CacheKey = tuple[NodePath, bool]


def render_math(source: str, display: bool = False) -> str:
    """Render a LaTeX expression to MathML; on failure return the raw source."""
    latex = source.strip()
    try:
        return convert(latex, display="block" if display else "inline")
    except Exception as e:
        logger.warning("Math rendering failed for %r: %s", latex, str(e) or type(e).__name__)
        return source


class MathCache:
    """Rendered markup for one document pass, keyed by node position path (child indices from root)."""

    def __init__(self):
        self._html: dict[CacheKey, str] = {}

    def __len__(self) -> int:
        return len(self._html)

    def prerender(self, tree: SyntaxTreeNode) -> "MathCache":
        """Render every math node in tree once, before block conversion.

        $$...$$ nested inside styled or linked text is rendered inline.
        """
        def _walk(node: SyntaxTreeNode, path: NodePath, parent: str) -> None:
            if node.type in MATH_TYPES:
                nested = node.type == 'math_inline_double' and parent != 'inline'
                self.get(node, path, display=False if nested else None)
            for i, child in enumerate(node.children):
                _walk(child, (*path, i), node.type)

        _walk(tree, (), tree.type)
        return self

    def get(self, node: SyntaxTreeNode, path: NodePath, display: Optional[bool] = None) -> str:
        """Return memoized markup for the node at path, rendering on a miss.

        display defaults to the mode of the node type; pass False to force inline markup.
        """
        if display is None:
            display = node.type in DISPLAY_MATH
        key = (path, display)
        if key not in self._html:
            self._html[key] = render_math(node.content, display=display)
        return self._html[key]
