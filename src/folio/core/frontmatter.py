"""Frontmatter schema validation with field-level issue reporting"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from folio.core.errors import FrontmatterError
from folio.core.models import Frontmatter


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Validation:
    """Tagged validation result: `value` on success, `issues` on failure."""
    value:  Optional[Frontmatter] = None
    issues: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None


def _issues(error: ValidationError) -> list[str]:
    """Format pydantic errors as 'field: message' strings."""
    issues = []
    for err in error.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "frontmatter"
        issues.append(f"{loc}: {err['msg'].removeprefix('Value error, ')}")
    return issues


def validate_frontmatter(data: Any, categories: Optional[Sequence[str]] = None) -> Validation:
    """Validate raw frontmatter data against the schema without raising."""
    if not isinstance(data, dict):
        return Validation(issues=[f"frontmatter: expected a mapping, got {type(data).__name__}"])
    context = {"categories": list(categories)} if categories else None
    try:
        return Validation(value=Frontmatter.model_validate(data, context=context))
    except ValidationError as e:
        return Validation(issues=_issues(e))


def check_frontmatter(
    data: Any,
    path: Path | str,
    categories: Optional[Sequence[str]] = None,
    debug: bool = False,
    ) -> Frontmatter:
    """Return validated Frontmatter for the file at path, or raise FrontmatterError.

    In debug mode the offending raw data is logged alongside the error.
    """
    result = validate_frontmatter(data, categories)
    if result.ok:
        return result.value

    error = FrontmatterError(path, result.issues)
    if debug:
        logger.error(str(error))
        logger.error("Frontmatter data: %s", json.dumps(data, indent=2, default=str))
    raise error
