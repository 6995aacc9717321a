"""Root test configuration: shared helpers for building writing collections on disk"""

from pathlib import Path

import pytest
import yaml


def _write_post(root: Path, relpath: str, body: str = "Body text.\n", **frontmatter) -> Path:
    fm = {"title": "Untitled", "date": "2024-01-01", "category": "projects"}
    fm.update(frontmatter)
    path = root / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    header = yaml.safe_dump(fm, default_flow_style=False, allow_unicode=True, sort_keys=False)
    path.write_text(f"---\n{header}---\n\n{body}", encoding="utf-8")
    return path


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path):
    """Empty writing collection root."""
    root = tmp_path / "content" / "writing"
    root.mkdir(parents=True)
    return root


@pytest.fixture(name="write_post")
def write_post_fixture(content_dir):
    """Factory: write_post('a.md', body=..., title=..., ...) -> Path under content_dir."""
    def _factory(relpath: str, body: str = "Body text.\n", **frontmatter) -> Path:
        return _write_post(content_dir, relpath, body, **frontmatter)
    return _factory


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run each test from a clean directory with no FOLIO_* env vars leaking in."""
    monkeypatch.chdir(tmp_path)
    for name in ("CONTENT_DIR", "EXTENSIONS", "CATEGORIES", "DEBUG", "LOG_LEVEL", "PARSER_CONFIG", "PAGE_SIZE"):
        monkeypatch.delenv(f"FOLIO_{name}", raising=False)
