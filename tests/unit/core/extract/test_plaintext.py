"""Unit tests for core/extract/plaintext.py"""

from folio.core.extract.plaintext import build_search_text, extract_plain_text
from folio.core.frontmatter import validate_frontmatter
from folio.core.parse import parse_markdown


def test_excludes_code_and_math():
    """Code blocks, code spans, and math never reach the search text."""
    md = (
        "Visible words $secret_inline$ here.\n\n"
        "```python\nhidden_code = 1\n```\n\n"
        "$$\nhidden_block\n$$\n\n"
        "Use `hidden_span` please.\n"
    )
    text = extract_plain_text(parse_markdown(md))
    assert "Visible words" in text
    assert "please" in text
    for hidden in ("secret_inline", "hidden_code", "hidden_block", "hidden_span"):
        assert hidden not in text


def test_strips_syntax_and_normalizes_whitespace(sample_tree):
    """Headings, emphasis, and links leave only their words, single-spaced."""
    text = extract_plain_text(sample_tree)
    assert text == (
        "Heading 1 A paragraph with bold text and a link . "
        "Heading 2 item one item two Footer paragraph."
    )


def test_residual_punctuation_removed():
    """Literal markdown punctuation left in text nodes is replaced by spaces."""
    text = extract_plain_text(parse_markdown("a\\*b (c) \\[d\\] e\\_f\n"))
    assert text == "a b c d e f"


def test_empty_document():
    assert extract_plain_text(parse_markdown("")) == ""


def test_build_search_text_prepends_metadata_and_lowercases():
    """Title, summary, excerpt, and tags precede body text; everything is lowercase."""
    fm = validate_frontmatter({
        "title": "Ridge Regression",
        "date": "2024-01-01",
        "category": "regression",
        "summary": "Shrinkage",
        "tags": ["L2", "Penalty"],
    }).value
    assert build_search_text(fm, "Body Text") == "ridge regression shrinkage l2 penalty body text"


def test_build_search_text_skips_empty_parts():
    fm = validate_frontmatter({"title": "Only", "date": "2024-01-01", "category": "projects"}).value
    assert build_search_text(fm, "") == "only"
