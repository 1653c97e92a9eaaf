"""Utility functions for alxblg.

Small path and string helpers shared by the build pipeline and the CLI.

Key functions:
    parse_post_date: Parse a post date string into a sortable datetime.
    is_safe_slug: Check whether a slug can be used as an output filename.
    is_markdown: Check if a path is a Markdown file.
    ensure_clean_dir: Ensure a directory exists and is empty.
    titleize: Convert names to human-readable titles.
    slugify: Convert titles to URL slugs.
"""

from __future__ import annotations

import re
import shutil
from datetime import datetime, timezone
from pathlib import Path

UNSAFE_SLUG_CHARS = frozenset("/\\\x00")


def parse_post_date(value: str) -> datetime | None:
    """Parse an ISO 8601 date or timestamp.

    Timezone-aware values are converted to UTC and made naive so that every
    parsed date can be compared with every other one.

    Args:
        value: Date string from a post's frontmatter.

    Returns:
        A naive datetime, or None when the value is not a valid date.

    Examples:
        >>> parse_post_date("2024-01-15")
        datetime.datetime(2024, 1, 15, 0, 0)

        >>> parse_post_date("yesterday") is None
        True
    """
    text = value.strip()
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def is_safe_slug(slug: str) -> bool:
    """Check whether a slug is safe to use as an output filename stem.

    Any text works as a slug (spaces and non-ASCII letters included) as long
    as it names a single file inside the posts directory.

    Args:
        slug: Slug taken from frontmatter.

    Returns:
        False if the slug is empty, is a relative path component, or holds a
        path separator or NUL character.

    Examples:
        >>> is_safe_slug("café-notes")
        True

        >>> is_safe_slug("../index")
        False
    """
    if slug in {"", ".", ".."}:
        return False
    return not any(char in UNSAFE_SLUG_CHARS for char in slug)


def slugify(text: str) -> str:
    """Convert a title to a URL-friendly slug.

    Args:
        text: Title or filename stem.

    Returns:
        Lowercase slug with runs of other characters collapsed to dashes.
    """
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", text)
    return cleaned.strip("-").lower() or "post"


def titleize(name: str) -> str:
    """Convert a name to a human-readable title.

    Args:
        name: Directory or file stem.

    Returns:
        Title-cased words, or "My Blog" when nothing is left.

    Examples:
        >>> titleize("my-travel_notes")
        'My Travel Notes'
    """
    words = re.split(r"[\s\-_]+", name)
    return " ".join(word.capitalize() for word in words if word) or "My Blog"


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has the .md extension.
    """
    return path.suffix == ".md"


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)
