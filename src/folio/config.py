"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "FOLIO_"

DEFAULT_CATEGORIES = ["mathstat", "regression", "projects"]


class Settings(BaseModel):
    app_name:      str = "folio"
    content_dir:   str = Field(default="content/writing", description="Root directory of the writing collection")
    extensions:    list[str] = Field(default=[".md", ".mdx"], description="File suffixes treated as posts")
    categories:    list[str] = Field(default=DEFAULT_CATEGORIES, min_length=1, description="Allowed frontmatter categories")
    debug:         bool = Field(default=False, description="Log offending frontmatter data on validation failure")
    log_level:     str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    parser_config: str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    page_size:     int = Field(default=20, ge=1, description="Default listing page size")

    @field_validator("extensions", "categories", mode="before")
    @classmethod
    def _split_csv(cls, value: Any) -> Any:
        """Accept comma-separated strings (env vars) for list fields."""
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value

    @field_validator("extensions")
    @classmethod
    def _dotted(cls, value: list[str]) -> list[str]:
        """Lowercase suffixes and add a missing leading dot ("md" -> ".md")."""
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in value]

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


def _file_values(path: Path) -> dict[str, Any]:
    """Settings from a YAML file; a missing file contributes nothing."""
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid {path.name}: expected a mapping, got {type(data).__name__}")
    return data


def _env_values(prefix: str = ENV_PREFIX) -> dict[str, str]:
    """Non-empty <prefix><FIELD> environment variables, keyed by settings field."""
    names = {f"{prefix}{name.upper()}": name for name in Settings.model_fields}
    return {field: os.environ[var] for var, field in names.items() if os.environ.get(var)}


def load_config(overrides: dict[str, Any] = None, path: Path | str = CONFIG_FILE) -> Settings:
    """Build Settings with later layers winning.

    Layers: the config file (config.yaml in the working directory), then
    FOLIO_<FIELD> environment variables, then non-None CLI overrides.
    """
    data = _file_values(Path(path))
    data.update(_env_values())
    data.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return Settings(**data)
