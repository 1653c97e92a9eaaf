"""Frontmatter and excerpt extraction for alxblg.

Post documents start with a small metadata block:

    ---
    title: "Hello"
    date: 2024-01-01
    slug: hello
    ---
    Body text...

The parser here is intentionally narrow. It reads one ``key: value`` pair per
line, optionally wrapped in double quotes, and nothing more: no nesting, no
multi-line values, no escaped quotes, no lists. Existing posts rely on this
exact behavior, so it is not a YAML parser.

Key functions:
- parse_frontmatter: Split a document into its frontmatter block and body.
- parse_fields: Turn a frontmatter block into a key/value mapping.
- derive_excerpt: Build the list-view summary of a post body.
"""

from __future__ import annotations

import re

FRONTMATTER_RE = re.compile(r"---\n(.*?)\n---\n(.*)", re.DOTALL)
FIELD_RE = re.compile(r'(\w+):\s*"?([^"]*)"?', re.ASCII)

EXCERPT_LINES = 3
EXCERPT_LENGTH = 200
EXCERPT_SUFFIX = "..."


def parse_frontmatter(text: str) -> tuple[str, str] | None:
    """Split a post document into frontmatter block and body.

    The document must begin with a ``---`` line, followed by the block,
    followed by another ``---`` line. The first closing delimiter ends the
    block.

    Args:
        text: Raw document text.

    Returns:
        Tuple of (frontmatter block, body), or None when the document does
        not start with a frontmatter block.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return None
    return match.group(1), match.group(2)


def parse_fields(block: str) -> dict[str, str]:
    """Parse ``key: value`` lines from a frontmatter block.

    Surrounding double quotes are stripped from values. Lines that do not
    match are ignored, and a repeated key keeps its last value.

    Args:
        block: Frontmatter block without its delimiter lines.

    Returns:
        Mapping of keys to raw string values.
    """
    fields: dict[str, str] = {}
    for line in block.split("\n"):
        match = FIELD_RE.fullmatch(line)
        if match:
            key, value = match.groups()
            fields[key] = value
    return fields


def derive_excerpt(body: str) -> str:
    """Derive an excerpt from a post body.

    Joins the first three lines with single spaces, cuts the result to 200
    characters and appends ``...``. The suffix is appended even when nothing
    was cut. Length is counted in Python string characters (code points).

    Args:
        body: Post body text.

    Returns:
        The excerpt string.

    Examples:
        >>> derive_excerpt("Hello")
        'Hello...'
    """
    head = " ".join(body.split("\n")[:EXCERPT_LINES])
    return head[:EXCERPT_LENGTH] + EXCERPT_SUFFIX
