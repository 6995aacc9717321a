"""Post repository: discovery, validation, slug bookkeeping, listing, and by-slug lookup"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

from folio.config import DEFAULT_CATEGORIES, Settings
from folio.core.errors import ContentReadError, FrontmatterError, SlugConflictError
from folio.core.extract.blocks import markdown_to_blocks
from folio.core.extract.plaintext import build_search_text, extract_plain_text
from folio.core.frontmatter import check_frontmatter
from folio.core.models import Page, Post, PostContent, PostSummary
from folio.core.parse import MD_EXTENSIONS, discover_files, parse_markdown, split_frontmatter
from folio.core.utils.slug import normalize_slug, path_slug


logger = logging.getLogger(__name__)


class PostRepository:
    """Reads the content root from scratch on every call; nothing is cached between reads."""

    def __init__(
        self,
        content_dir: Path | str,
        extensions: Iterable[str] = MD_EXTENSIONS,
        categories: Sequence[str] = DEFAULT_CATEGORIES,
        debug: bool = False,
        parser_config: str = 'gfm-like',
        ):
        self.content_dir = Path(content_dir)
        self.extensions = tuple(extensions)
        self.categories = list(categories)
        self.debug = debug
        self.parser_config = parser_config

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostRepository":
        return cls(
            settings.content_dir,
            extensions=settings.extensions,
            categories=settings.categories,
            debug=settings.debug,
            parser_config=settings.parser_config,
        )

    def _load(self, path: Path) -> Post:
        """Build one Post (metadata and search text only, no block conversion)."""
        try:
            raw = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ContentReadError(path, str(e)) from e
        try:
            data, body = split_frontmatter(raw)
        except ValueError as e:
            raise FrontmatterError(path, [str(e)]) from e
        frontmatter = check_frontmatter(data, path, self.categories, self.debug)

        if frontmatter.slug:
            slug = normalize_slug(frontmatter.slug)
        else:
            slug = path_slug(path.relative_to(self.content_dir) if path != self.content_dir else path.name)
        if not slug:
            raise FrontmatterError(path, ["slug: normalizes to an empty string"])

        plain_text = extract_plain_text(parse_markdown(body, self.parser_config))
        return Post(
            slug=slug,
            path=str(path),
            frontmatter=frontmatter,
            content=body,
            search_text=build_search_text(frontmatter, plain_text),
        )

    def list_posts(self) -> list[Post]:
        """Return every post sorted by date, newest first.

        A missing content root yields []. Any invalid post or slug collision
        fails the whole read.
        """
        posts: list[Post] = []
        seen: dict[str, str] = {}
        for path in discover_files(self.content_dir, self.extensions):
            post = self._load(path)
            if post.slug in seen:
                error = SlugConflictError(post.slug, path, seen[post.slug])
                if self.debug:
                    logger.error(str(error))
                raise error
            seen[post.slug] = post.path
            posts.append(post)

        logger.debug("Loaded %d post(s) from %s", len(posts), self.content_dir)
        return sorted(posts, key=lambda p: p.frontmatter.date, reverse=True)

    def get_post(self, slug: str) -> Optional[Post]:
        """Return the post with this slug, or None."""
        return next((p for p in self.list_posts() if p.slug == slug), None)

    def list_summaries(self) -> list[PostSummary]:
        """Listing metadata for every post, newest first."""
        return [to_summary(p) for p in self.list_posts()]

    def get_post_content(self, slug: str) -> Optional[PostContent]:
        """Full block sequence plus metadata for one post, or None if the slug is unknown."""
        post = self.get_post(slug)
        if post is None:
            return None
        return PostContent(
            blocks=markdown_to_blocks(post.content, self.parser_config),
            metadata=to_summary(post),
        )


def to_summary(post: Post) -> PostSummary:
    """Project a Post onto the listing contract."""
    fm = post.frontmatter
    return PostSummary(
        id=post.slug,
        slug=post.slug,
        title=fm.title,
        category=fm.category,
        created_time=fm.date,
        published=fm.date,
        excerpt=fm.excerpt or fm.summary or "",
        feature_image=fm.feature_image,
        tags=fm.tags or [],
        search_text=post.search_text,
    )


def filter_summaries(
    items: Iterable[PostSummary],
    category: Optional[str] = None,
    query: Optional[str] = None,
    ) -> list[PostSummary]:
    """Keep items in category (if given) whose search text contains query, case-insensitively."""
    needle = (query or "").strip().lower()
    return [
        item for item in items
        if (category is None or item.category == category)
        and (not needle or needle in item.search_text)
    ]


def paginate(items: Sequence[PostSummary], cursor: Optional[str] = None, limit: int = 20) -> Page:
    """Return the page after the item whose id equals cursor (unknown cursor starts at the top).

    next_cursor is the id of the page's last item when more items remain, else None.
    """
    if limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")
    start = 0
    if cursor:
        index = next((i for i, item in enumerate(items) if item.id == cursor), None)
        if index is not None:
            start = index + 1
    page = list(items[start:start + limit])
    next_cursor = page[-1].id if page and start + limit < len(items) else None
    return Page(items=page, next_cursor=next_cursor)
