"""Exception types raised by the content pipeline"""

from pathlib import Path


class FolioError(Exception):
    """Base class for errors that abort a collection read."""


class FrontmatterError(FolioError, ValueError):
    """A post's frontmatter is missing, malformed, or fails schema validation."""

    def __init__(self, path: Path | str, issues: list[str]):
        self.path = str(path)
        self.issues = list(issues)
        super().__init__(f"Invalid frontmatter in {self.path}: {', '.join(self.issues)}")


class SlugConflictError(FolioError, ValueError):
    """Two files in the collection normalize to the same slug."""

    def __init__(self, slug: str, path: Path | str, existing: Path | str):
        self.slug = slug
        self.path = str(path)
        self.existing = str(existing)
        super().__init__(f'Slug conflict: "{slug}" is used by both "{self.path}" and "{self.existing}"')


class ContentReadError(FolioError):
    """A post file cannot be read or is not valid UTF-8."""

    def __init__(self, path: Path | str, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")
