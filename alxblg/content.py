"""Post loading for alxblg.

This module turns Markdown files from ``content/posts`` into Post records.
It discovers the source files, splits off their frontmatter and builds the
structured record, deriving the excerpt when the frontmatter has none.

Key classes:
- Post: Dataclass representing a single published entry.
- FileContentLoader: Discovers post source files in a directory.
- PostBuilder: Builds Post instances from frontmatter fields and a body.
- ContentProcessor: Facade that loads every post in a directory.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .extractors import derive_excerpt, parse_fields, parse_frontmatter
from .utils import is_markdown

# Frontmatter keys that map onto Post attributes. Anything else is kept in
# Post.extra.
POST_FIELDS = ("title", "date", "slug", "excerpt")


@dataclass(frozen=True)
class Post:
    """A single blog post.

    Attributes:
        title: Human-readable title.
        date: Publication date as written in the frontmatter (ISO 8601).
        slug: Output filename stem.
        content: Body text, exactly as found after the frontmatter.
        excerpt: Short summary for list views.
        path: Source file the post was read from.
        extra: Unrecognized frontmatter keys.
    """

    title: str
    date: str
    slug: str
    content: str
    excerpt: str
    path: Path | None = None
    extra: dict[str, str] = field(default_factory=dict)


class PostBuilder:
    """Builds Post objects from parsed frontmatter and a body."""

    def build(
        self, fields: Mapping[str, str], body: str, path: Path | None = None
    ) -> Post:
        """Build a Post.

        Missing title, date and slug become empty strings. The excerpt is
        derived from the body unless the frontmatter supplies one.

        Args:
            fields: Frontmatter key/value mapping.
            body: Post body text.
            path: Optional source path.

        Returns:
            Post object.
        """
        if "excerpt" in fields:
            excerpt = fields["excerpt"]
        else:
            excerpt = derive_excerpt(body)
        return Post(
            title=fields.get("title", ""),
            date=fields.get("date", ""),
            slug=fields.get("slug", ""),
            content=body,
            excerpt=excerpt,
            path=path,
            extra={k: v for k, v in fields.items() if k not in POST_FIELDS},
        )

    def parse(self, text: str, path: Path | None = None) -> Post | None:
        """Parse a raw post document.

        Args:
            text: Raw document text.
            path: Optional source path.

        Returns:
            Post object, or None when the document has no frontmatter.
        """
        parsed = parse_frontmatter(text)
        if parsed is None:
            return None
        block, body = parsed
        return self.build(parse_fields(block), body, path)


class FileContentLoader:
    """Discovers post source files in a directory.

    Attributes:
        posts_dir: Directory containing Markdown posts.
    """

    def __init__(self, posts_dir: Path):
        self.posts_dir = posts_dir

    def iter_files(self) -> list[Path]:
        """List Markdown files directly inside the posts directory.

        Returns:
            Paths sorted by filename, or an empty list when the directory
            does not exist.
        """
        if not self.posts_dir.is_dir():
            return []
        return sorted(
            path
            for path in self.posts_dir.iterdir()
            if path.is_file() and is_markdown(path)
        )


@dataclass
class LoadResult:
    """Posts read from a directory, in discovery order.

    Attributes:
        posts: Successfully parsed posts.
        skipped: Files that had no frontmatter block.
    """

    posts: list[Post]
    skipped: list[Path]


class ContentProcessor:
    """Facade for discovering and parsing every post in a directory.

    Attributes:
        posts_dir: Directory containing Markdown posts.
    """

    def __init__(
        self,
        posts_dir: Path,
        content_loader: FileContentLoader | None = None,
        post_builder: PostBuilder | None = None,
    ):
        """Initialize the content processor.

        Args:
            posts_dir: Path to the posts directory.
            content_loader: Optional custom content loader.
            post_builder: Optional custom post builder.
        """
        self.posts_dir = posts_dir
        self._content_loader = content_loader or FileContentLoader(posts_dir)
        self._post_builder = post_builder or PostBuilder()

    def load(self) -> LoadResult:
        """Load all posts.

        A file without frontmatter contributes no post; it is listed in
        LoadResult.skipped instead.

        Returns:
            LoadResult with posts in discovery order.
        """
        posts: list[Post] = []
        skipped: list[Path] = []
        for path in self._content_loader.iter_files():
            # Decode without newline translation so bodies stay untouched; bytes
            # that are not UTF-8 become U+FFFD.
            text = path.read_bytes().decode("utf-8", errors="replace")
            post = self._post_builder.parse(text, path)
            if post is None:
                skipped.append(path)
                continue
            posts.append(post)
        return LoadResult(posts=posts, skipped=skipped)
