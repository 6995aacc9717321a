"""CLI command implementations"""

from typing import Annotated, Optional

import typer

from folio.config import Settings, load_config
from folio.core.errors import FolioError
from folio.core.models import ProcessedBlock
from folio.core.repository import PostRepository, filter_summaries, paginate
from folio.util.logging import setup_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _repository(settings: Settings) -> PostRepository:
    setup_logging(settings.log_level)
    return PostRepository.from_settings(settings)


def _block_text(block: ProcessedBlock) -> str:
    if block.math_html is not None:
        return block.math_html
    return "".join(run.content for run in block.content)


def list_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Writing collection root")] = None,
    category: Annotated[Optional[str], typer.Option("--category", help="Only posts in this category")] = None,
    search: Annotated[Optional[str], typer.Option("--search", help="Case-insensitive search over metadata and body")] = None,
    limit: Annotated[Optional[int], typer.Option("--limit", min=1, help="Page size")] = None,
    cursor: Annotated[Optional[str], typer.Option("--cursor", help="Continue after the post with this slug")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the page as JSON")] = False,
    ):
    """List posts, newest first."""
    settings = _settings(overrides={"content_dir": content, "page_size": limit})
    try:
        items = _repository(settings).list_summaries()
    except FolioError as e:
        _fail("Failed to read writing posts", e)

    page = paginate(filter_summaries(items, category, search), cursor, settings.page_size)
    if as_json:
        typer.echo(page.model_dump_json(indent=2))
        return
    if not page.items:
        typer.echo("No posts found.")
        return
    for item in page.items:
        typer.echo(f"  {item.published.isoformat()}  {item.slug}  {item.title} [{item.category}]")
    if page.next_cursor:
        typer.echo(f"Next cursor: {page.next_cursor}")


def show_cmd(
    slug: Annotated[str, typer.Argument(help="Post slug")],
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Writing collection root")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print blocks and metadata as JSON")] = False,
    ):
    """Render one post to its processed block sequence."""
    settings = _settings(overrides={"content_dir": content})
    try:
        result = _repository(settings).get_post_content(slug)
    except FolioError as e:
        _fail("Failed to read writing posts", e)
    if result is None:
        _fail(f"Post not found: {slug}")

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return
    meta = result.metadata
    typer.echo(f"{meta.title} ({meta.published.isoformat()}, {meta.category})")
    for block in result.blocks:
        typer.echo(f"  {block.id} {block.type.value}: {_block_text(block)}")


def check_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Writing collection root")] = None,
    ):
    """Validate frontmatter and slugs for the whole collection."""
    settings = _settings(overrides={"content_dir": content})
    try:
        posts = _repository(settings).list_posts()
    except FolioError as e:
        _fail("Collection check failed", e)
    typer.echo(f"OK: {len(posts)} post(s) in {settings.content_dir}")
