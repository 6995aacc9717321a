"""Syntax-tree-to-ProcessedBlock conversion with display math split out of paragraphs"""

from dataclasses import dataclass
from typing import Callable, Iterator

from markdown_it.tree import SyntaxTreeNode

from folio.core.extract.richtext import BREAK_TYPES, has_math, inline_html, node_text, rich_text
from folio.core.models import BlockType, ProcessedBlock, RichText
from folio.core.parse import parse_markdown
from folio.core.render_math import MathCache, NodePath


HEADING_TYPES = {1: BlockType.heading_1, 2: BlockType.heading_2}
LIST_TYPES = ('bullet_list', 'ordered_list')
PARAGRAPH_MATH = 'math_inline_double'   # $$...$$ inside a paragraph

Positioned = tuple[NodePath, SyntaxTreeNode]


@dataclass
class _Context:
    """Per-document conversion state: block counter and math memo."""
    math:    MathCache
    counter: int = 0

    def block(self, kind: BlockType, **fields) -> ProcessedBlock:
        block = ProcessedBlock(id=f"block-{self.counter}", type=kind, **fields)
        self.counter += 1
        return block


def _heading(node: SyntaxTreeNode, path: NodePath, ctx: _Context) -> list[ProcessedBlock]:
    level = int(node.tag[1:])
    text = node_text(node.children)
    return [ctx.block(HEADING_TYPES.get(level, BlockType.heading_3), content=[RichText(content=text)])]


def _partition(items: list[Positioned]) -> Iterator[tuple[bool, list[Positioned]]]:
    """Yield (is_math, items) runs, cutting before and after each display math child."""
    run: list[Positioned] = []
    for item in items:
        if item[1].type == PARAGRAPH_MATH:
            yield False, run
            yield True, [item]
            run = []
        else:
            run.append(item)
    yield False, run


def _trim_breaks(run: list[Positioned]) -> list[Positioned]:
    start, end = 0, len(run)
    while start < end and run[start][1].type in BREAK_TYPES:
        start += 1
    while end > start and run[end - 1][1].type in BREAK_TYPES:
        end -= 1
    return run[start:end]


def _images(items: list[Positioned]) -> Iterator[SyntaxTreeNode]:
    for _, node in items:
        if node.type == 'image':
            yield node
        else:
            yield from _images([((), child) for child in node.children])


def _paragraph(node: SyntaxTreeNode, path: NodePath, ctx: _Context) -> list[ProcessedBlock]:
    if not node.children:
        return []
    inline = node.children[0]
    items = [((*path, 0, i), child) for i, child in enumerate(inline.children)]
    blocks: list[ProcessedBlock] = []

    if node_text(inline.children).strip():
        for is_math, run in _partition(items):
            if is_math:
                math_path, math_node = run[0]
                blocks.append(ctx.block(BlockType.math, math_html=ctx.math.get(math_node, math_path)))
                continue
            run = _trim_breaks(run)
            nodes = [n for _, n in run]
            if not node_text(nodes).strip():
                continue
            if has_math(nodes):
                blocks.append(ctx.block(BlockType.paragraph, math_html=inline_html(run, ctx.math)))
            else:
                blocks.append(ctx.block(BlockType.paragraph, content=rich_text(nodes)))

    for image in _images(items):
        src = str(image.attrs.get('src', ''))
        blocks.append(ctx.block(BlockType.image, content=[RichText(content=src)]))
    return blocks


def _math(node: SyntaxTreeNode, path: NodePath, ctx: _Context) -> list[ProcessedBlock]:
    return [ctx.block(BlockType.math, math_html=ctx.math.get(node, path))]


def _quote(node: SyntaxTreeNode, path: NodePath, ctx: _Context) -> list[ProcessedBlock]:
    # Display math inside a quote is not split out; it stays as source text in the runs
    return [ctx.block(BlockType.quote, content=rich_text(node.children))]


def _list(node: SyntaxTreeNode, path: NodePath, ctx: _Context) -> list[ProcessedBlock]:
    """One block per item; nested lists follow their parent item, depth-first."""
    item_type = BlockType.numbered_list_item if node.type == 'ordered_list' else BlockType.bulleted_list_item
    blocks: list[ProcessedBlock] = []
    for i, item in enumerate(node.children):
        own = [c for c in item.children if c.type not in LIST_TYPES]
        if node_text(own).strip():
            blocks.append(ctx.block(item_type, content=rich_text(own)))
        for j, child in enumerate(item.children):
            if child.type in LIST_TYPES:
                blocks.extend(_list(child, (*path, i, j), ctx))
    return blocks


def _code(node: SyntaxTreeNode, path: NodePath, ctx: _Context) -> list[ProcessedBlock]:
    info = node.info.strip() if node.type == 'fence' else ''
    language = info.split()[0] if info else 'plaintext'
    code = node.content.removesuffix('\n')
    return [ctx.block(BlockType.code, content=[RichText(content=code)], language=language)]


def _divider(node: SyntaxTreeNode, path: NodePath, ctx: _Context) -> list[ProcessedBlock]:
    return [ctx.block(BlockType.divider)]


HANDLERS: dict[str, Callable[[SyntaxTreeNode, NodePath, _Context], list[ProcessedBlock]]] = {
    'heading':          _heading,
    'paragraph':        _paragraph,
    'math_block':       _math,
    'math_block_label': _math,
    'blockquote':       _quote,
    'bullet_list':      _list,
    'ordered_list':     _list,
    'fence':            _code,
    'code_block':       _code,
    'hr':               _divider,
}


def tree_to_blocks(tree: SyntaxTreeNode) -> list[ProcessedBlock]:
    """Convert top-level nodes to ProcessedBlocks in source order; unknown nodes are skipped."""
    ctx = _Context(math=MathCache().prerender(tree))
    blocks: list[ProcessedBlock] = []
    for i, node in enumerate(tree.children):
        handler = HANDLERS.get(node.type)
        if handler:
            blocks.extend(handler(node, (i,), ctx))
    return blocks


def markdown_to_blocks(markdown: str, preset: str = 'gfm-like') -> list[ProcessedBlock]:
    """Parse a markdown body and convert it to ProcessedBlocks."""
    return tree_to_blocks(parse_markdown(markdown, preset))
