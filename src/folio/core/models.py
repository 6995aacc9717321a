"""Value models for posts, frontmatter, and processed content blocks"""

import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, ValidationInfo, field_validator

from folio.config import DEFAULT_CATEGORIES


DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')
_URL = TypeAdapter(AnyUrl)


class Frontmatter(BaseModel):
    """Validated post metadata. Pass `context={"categories": [...]}` to override the category set."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    title:         str = Field(..., min_length=1)
    date:          date
    category:      str
    slug:          Optional[str] = None
    tags:          Optional[list[str]] = None
    summary:       Optional[str] = None
    excerpt:       Optional[str] = None
    feature_image: Optional[str] = Field(default=None, alias="featureImage")

    @field_validator("date", mode="before")
    @classmethod
    def _check_date(cls, value: Any) -> date:
        # YAML loads unquoted dates as date objects; datetimes carry a time and are rejected
        if isinstance(value, datetime):
            raise ValueError("Date must be in YYYY-MM-DD format")
        if isinstance(value, date):
            return value
        if not isinstance(value, str) or not DATE_RE.match(value):
            raise ValueError("Date must be in YYYY-MM-DD format")
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise ValueError("Date must be a valid date") from None

    @field_validator("category")
    @classmethod
    def _check_category(cls, value: str, info: ValidationInfo) -> str:
        categories = (info.context or {}).get("categories") or DEFAULT_CATEGORIES
        if value not in categories:
            raise ValueError(f"Category must be one of: {', '.join(categories)}")
        return value

    @field_validator("feature_image")
    @classmethod
    def _check_url(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return value
        try:
            _URL.validate_python(value)
        except ValidationError:
            raise ValueError("Feature image must be a valid URL or empty") from None
        return value


class RichText(BaseModel):
    """A contiguous span of text sharing one style/link combination."""
    model_config = ConfigDict(frozen=True)

    content:       str
    link:          Optional[str] = None
    bold:          bool = False
    italic:        bool = False
    strikethrough: bool = False
    underline:     bool = False
    code:          bool = False
    color:         str = "default"


class BlockType(str, Enum):
    """Restrict processed blocks to the kinds the page renderer understands"""
    heading_1 = "heading_1"
    heading_2 = "heading_2"
    heading_3 = "heading_3"
    paragraph = "paragraph"
    quote = "quote"
    numbered_list_item = "numbered_list_item"
    bulleted_list_item = "bulleted_list_item"
    code = "code"
    divider = "divider"
    image = "image"
    math = "math"


class ProcessedBlock(BaseModel):
    """One unit of renderable content, ordered within a post."""
    model_config = ConfigDict(frozen=True)

    id:        str
    type:      BlockType
    content:   list[RichText] = []
    language:  Optional[str] = None     # code blocks only
    math_html: Optional[str] = None     # rendered markup for math and inline-math paragraphs


class Post(BaseModel):
    """One discovered content file with validated metadata and its markdown body."""
    model_config = ConfigDict(frozen=True)

    slug:        str
    path:        str
    frontmatter: Frontmatter
    content:     str                # body without frontmatter
    search_text: str


class PostSummary(BaseModel):
    """Listing contract consumed by index pages, search, and feeds."""
    model_config = ConfigDict(frozen=True)

    id:            str
    slug:          str
    title:         str
    category:      str
    status:        str = "Published"
    created_time:  date
    published:     date
    excerpt:       str = ""
    feature_image: Optional[str] = None
    tags:          list[str] = []
    search_text:   str = ""


class PostContent(BaseModel):
    """By-slug lookup result: full block sequence plus listing metadata."""
    model_config = ConfigDict(frozen=True)

    blocks:   list[ProcessedBlock]
    metadata: PostSummary


class Page(BaseModel):
    """One cursor-paginated slice of the listing."""
    items:       list[PostSummary]
    next_cursor: Optional[str] = None
