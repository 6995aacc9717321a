"""File discovery, frontmatter extraction, and markdown-it syntax tree parsing"""

import re
from pathlib import Path
from typing import Any, Iterable

import yaml
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.dollarmath import dollarmath_plugin


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*(?:\n|$)', re.DOTALL)
MD_EXTENSIONS = ('.md', '.mdx')


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance with dollar math ($...$ inline, $$...$$ display)."""
    md = MarkdownIt(preset, options_update={"linkify": False})
    # double_inline keeps $$...$$ that sits inside a paragraph as its own token
    return md.use(dollarmath_plugin, double_inline=True, allow_blank_lines=False)


def parse_markdown(markdown: str, preset: str = 'gfm-like') -> SyntaxTreeNode:
    """Parse a markdown body into a syntax tree rooted at a 'root' node."""
    return SyntaxTreeNode(make_parser(preset).parse(markdown))


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with the YAML header removed.

    Raises ValueError when the header is not valid YAML or not a mapping.
    """
    text = text.removeprefix('\ufeff')
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML frontmatter: {e}") from e
    if not isinstance(fm, dict):
        raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
    return fm, text[m.end():]


def discover_files(path: Path, extensions: Iterable[str] = MD_EXTENSIONS) -> list[Path]:
    """Return sorted post files under path, [path] for a single file, [] if path is missing."""
    suffixes = {e.lower() for e in extensions}
    if path.is_file():
        return [path] if path.suffix.lower() in suffixes else []
    if not path.is_dir():
        return []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix.lower() in suffixes)
