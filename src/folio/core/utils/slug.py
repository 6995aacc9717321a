"""Slug generation for post identifiers"""

import re
import unicodedata
from pathlib import PurePath


_INVALID_RE = re.compile(r'[^a-z0-9\s_-]')
_SEPARATOR_RE = re.compile(r'[\s_]+')
_HYPHENS_RE = re.compile(r'-+')


def normalize_slug(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated, ASCII-only URL-safe slug.

    Diacritics are stripped after NFD decomposition (é -> e); any other
    non-ASCII character is dropped rather than transliterated.
    """
    text = unicodedata.normalize('NFD', text.lower().strip())
    text = ''.join(c for c in text if not unicodedata.combining(c))
    text = _INVALID_RE.sub('', text)
    text = _SEPARATOR_RE.sub('-', text)
    return _HYPHENS_RE.sub('-', text).strip('-')


def path_slug(relative_path: PurePath | str) -> str:
    """Derive a slug from a path relative to the content root ('2024/My Post.md' -> '2024-my-post')."""
    path = PurePath(relative_path)
    return normalize_slug('-'.join(path.with_suffix('').parts))
