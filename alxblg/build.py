"""Site building functionality for alxblg.

This module contains the core logic for building a static blog from a project
directory. A build runs these steps in order and stops at the first fatal
error:

    load config -> prepare templates -> discover posts -> parse posts ->
    sort posts -> render index -> render posts -> copy assets

Key functions:
- build_site: Main function to build the entire blog.
- load_config: Loads and validates blog.config.json.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .assets import AssetCopier
from .collections import PostCollection, sort_posts
from .content import ContentProcessor, Post
from .templates import TemplateEngine, TemplateError, prepare_templates
from .utils import ensure_clean_dir, is_safe_slug

CONFIG_FILENAME = "blog.config.json"
POSTS_DIR = Path("content") / "posts"
TEMPLATES_DIR = "templates"


class BuildError(Exception):
    """Fatal error during a build.

    Attributes:
        message: Human-readable error message.
        source_path: File involved in the error, when there is one.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        message: str,
        source_path: Path | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.source_path = source_path
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}" if source_path else message)


class ConfigError(BuildError):
    """blog.config.json is missing or invalid."""


@dataclass(frozen=True)
class BlogConfig:
    """Site-wide settings loaded from blog.config.json.

    Attributes:
        title: Blog title.
        description: Short blog description.
        author: Author name.
        base_url: Absolute URL the blog is published at.
        posts_per_page: Page size for index listings.
    """

    title: str
    description: str
    author: str
    base_url: str
    posts_per_page: int

    @classmethod
    def from_dict(cls, data: Any) -> BlogConfig:
        """Build a config from parsed JSON, validating keys and types.

        Raises:
            ConfigError: If a key is missing or has the wrong type.
        """
        if not isinstance(data, dict):
            raise ConfigError(f"{CONFIG_FILENAME} must contain a JSON object")
        values: dict[str, Any] = {}
        for key, attr in _CONFIG_KEYS:
            if key not in data:
                raise ConfigError(f"{CONFIG_FILENAME} is missing required key '{key}'")
            values[attr] = data[key]
        for attr in ("title", "description", "author", "base_url"):
            if not isinstance(values[attr], str):
                raise ConfigError(f"{CONFIG_FILENAME}: '{_JSON_NAMES[attr]}' must be a string")
        per_page = values["posts_per_page"]
        if isinstance(per_page, bool) or not isinstance(per_page, int) or per_page < 1:
            raise ConfigError(f"{CONFIG_FILENAME}: 'postsPerPage' must be a positive integer")
        return cls(**values)

    def to_context(self) -> dict[str, Any]:
        """Return the config as templates see it, keyed by the JSON names."""
        return {key: getattr(self, attr) for key, attr in _CONFIG_KEYS}


_CONFIG_KEYS = (
    ("title", "title"),
    ("description", "description"),
    ("author", "author"),
    ("baseUrl", "base_url"),
    ("postsPerPage", "posts_per_page"),
)
_JSON_NAMES = {attr: key for key, attr in _CONFIG_KEYS}


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        posts: Posts in index order (newest first).
        output_dir: Directory where the blog was built.
        skipped: Source files without a frontmatter block.
        rejected: Posts whose slug cannot be used as an output filename.
        duplicates: Slugs claimed by more than one post.
        templates_created: Default templates written during this build.
    """

    posts: PostCollection
    output_dir: Path
    skipped: list[Path] = field(default_factory=list)
    rejected: list[Post] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)
    templates_created: list[str] = field(default_factory=list)


def load_config(source_dir: Path) -> BlogConfig:
    """Load blog.config.json from a project directory.

    Args:
        source_dir: Root directory of the blog project.

    Returns:
        Validated BlogConfig.

    Raises:
        ConfigError: If the file is missing, unreadable, not JSON, or invalid.
    """
    config_path = source_dir / CONFIG_FILENAME
    if not config_path.is_file():
        raise ConfigError(f'{CONFIG_FILENAME} not found. Run "alxblg init" first.')
    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigError(
            f"{CONFIG_FILENAME} is not valid JSON (line {exc.lineno}): {exc.msg}",
            config_path,
            exc,
        ) from exc
    except OSError as exc:
        raise ConfigError(f"Could not read {CONFIG_FILENAME}: {exc}", config_path, exc) from exc
    return BlogConfig.from_dict(data)


def build_site(
    source_dir: Path,
    output_dir: Path,
    clean_output: bool = False,
) -> BuildResult:
    """Build the entire blog.

    Args:
        source_dir: Root directory of the blog project.
        output_dir: Directory to write the site into.
        clean_output: Whether to wipe the output directory before writing.

    Returns:
        BuildResult describing what was built.

    Raises:
        BuildError: On missing or invalid configuration, template errors, or
            unrecoverable filesystem errors, or when clean_output would
            delete the source directory. Nothing is written when the
            configuration cannot be loaded.
    """
    config = load_config(source_dir)

    if clean_output and source_dir.resolve().is_relative_to(output_dir.resolve()):
        raise BuildError(
            f"Refusing to clean {output_dir}: it contains the blog source",
            output_dir,
        )

    templates_dir = source_dir / TEMPLATES_DIR
    try:
        created = prepare_templates(templates_dir)
    except OSError as exc:
        raise BuildError(f"Could not write default templates: {exc}", templates_dir, exc) from exc

    posts_dir = source_dir / POSTS_DIR
    try:
        loaded = ContentProcessor(posts_dir).load()
    except OSError as exc:
        failed = Path(exc.filename) if exc.filename else posts_dir
        raise BuildError(f"Could not read posts: {exc.strerror or exc}", failed, exc) from exc

    discovered: list[Post] = []
    rejected: list[Post] = []
    for post in loaded.posts:
        if is_safe_slug(post.slug):
            discovered.append(post)
        else:
            rejected.append(post)
    posts = sort_posts(discovered)

    engine = TemplateEngine(templates_dir)
    index_html = _render(engine.render_index, config, posts)
    # Render every page before touching the output directory so template
    # errors leave it alone.
    pages = [(post, _render(engine.render_post, config, post)) for post in discovered]

    try:
        if clean_output:
            ensure_clean_dir(output_dir)
        _write_file(output_dir / "index.html", index_html)
        (output_dir / "posts").mkdir(parents=True, exist_ok=True)
        # Discovery order: for a shared slug the last discovered post wins.
        for post, html in pages:
            _write_file(output_dir / "posts" / f"{post.slug}.html", html)
        AssetCopier(source_dir, output_dir).run()
    except OSError as exc:
        failed = Path(exc.filename) if exc.filename else output_dir
        raise BuildError(f"Could not write output: {exc.strerror or exc}", failed, exc) from exc

    return BuildResult(
        posts=posts,
        output_dir=output_dir,
        skipped=list(loaded.skipped),
        rejected=rejected,
        duplicates=_duplicate_slugs(discovered),
        templates_created=created,
    )


def _render(render, config: BlogConfig, item) -> str:
    try:
        return render(config, item)
    except TemplateError as exc:
        source = getattr(item, "path", None)
        raise BuildError(exc.message, source or Path(exc.template_name), exc) from exc


def _write_file(path: Path, text: str) -> None:
    """Write a rendered page, creating parent directories as needed.

    Args:
        path: Destination file.
        text: Rendered HTML.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def _duplicate_slugs(posts: list[Post]) -> list[str]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for post in posts:
        if post.slug in seen and post.slug not in duplicates:
            duplicates.append(post.slug)
        seen.add(post.slug)
    return duplicates
