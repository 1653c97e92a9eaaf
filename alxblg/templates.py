"""Template rendering engine for alxblg.

This module uses Jinja2 to render the blog's index page and post pages.
Templates live in the blog's ``templates/`` directory; ``index.html`` and
``post.html`` usually extend ``layout.html``.

Key items:
- TemplateEngine: Renders index and post pages from a template directory.
- TemplateError: Raised when a template is missing or fails to render.
- prepare_templates: Writes built-in defaults for any missing template.
- markdown_filter: Optional ``markdown`` filter for templates.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2
import mistune
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from .collections import PostCollection
from .content import Post
from .defaults import DEFAULT_TEMPLATES
from .utils import parse_post_date

__all__ = ["TemplateEngine", "TemplateError", "markdown_filter", "prepare_templates"]

INDEX_TEMPLATE = "index.html"
POST_TEMPLATE = "post.html"


class TemplateError(Exception):
    """A template could not be found or failed to render.

    Attributes:
        template_name: Name of the template being rendered.
        message: Human-readable error message.
    """

    def __init__(self, template_name: str, message: str):
        self.template_name = template_name
        self.message = message
        super().__init__(f"{template_name}: {message}")


def prepare_templates(templates_dir: Path) -> list[str]:
    """Write built-in defaults for any required template that is missing.

    Existing templates are never touched.

    Args:
        templates_dir: The blog's template directory.

    Returns:
        Names of the templates that were created.
    """
    templates_dir.mkdir(parents=True, exist_ok=True)
    created: list[str] = []
    for name, text in DEFAULT_TEMPLATES.items():
        target = templates_dir / name
        if not target.exists():
            target.write_text(text, encoding="utf-8")
            created.append(name)
    return created


class _HighlightRenderer(mistune.HTMLRenderer):
    """Markdown renderer that highlights fenced code with Pygments."""

    def __init__(self):
        super().__init__(escape=False)

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block with Pygments syntax highlighting.

        Args:
            code: The code content.
            info: Language identifier (e.g., 'python', 'javascript').

        Returns:
            HTML string with highlighted code.
        """
        if info:
            from pygments import highlight
            from pygments.formatters import HtmlFormatter
            from pygments.lexers import get_lexer_by_name
            from pygments.util import ClassNotFound

            try:
                lexer = get_lexer_by_name(info.split()[0], stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang_class = f' class="language-{info}"' if info else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


def markdown_filter(text: str) -> Markup:
    """Convert Markdown to HTML for use in templates as ``| markdown``.

    Post content is passed to templates unprocessed; this filter is how a
    template opts in to Markdown rendering.
    """
    markdown = mistune.create_markdown(
        renderer=_HighlightRenderer(), plugins=["strikethrough", "table", "url"]
    )
    return Markup(markdown(text or ""))


def date_format_filter(value: str, fmt: str = "%B %d, %Y") -> str:
    """Format a post date string; unparseable dates are returned unchanged."""
    parsed = parse_post_date(value or "")
    if parsed is None:
        return value
    return parsed.strftime(fmt)


class TemplateEngine:
    """Template rendering engine using Jinja2.

    One engine is created per build and discarded afterwards.

    Attributes:
        templates_dir: Directory containing the blog's templates.
        env: Jinja2 environment.
    """

    def __init__(self, templates_dir: Path):
        """Initialize the template engine.

        Args:
            templates_dir: Directory with layout.html, index.html and post.html.
        """
        self.templates_dir = templates_dir
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            enable_async=False,
        )
        self.env.filters["markdown"] = markdown_filter
        self.env.filters["date_format"] = date_format_filter

    def render_index(self, config: Any, posts: PostCollection) -> str:
        """Render the index page listing every post.

        Args:
            config: Site configuration (anything with to_context() or a mapping).
            posts: Posts in display order.

        Returns:
            Rendered HTML string.
        """
        return self.render(INDEX_TEMPLATE, {"config": _config_context(config), "posts": posts})

    def render_post(self, config: Any, post: Post) -> str:
        """Render a single post page.

        Args:
            config: Site configuration (anything with to_context() or a mapping).
            post: Post to render.

        Returns:
            Rendered HTML string.
        """
        return self.render(POST_TEMPLATE, {"config": _config_context(config), "post": post})

    def render(self, name: str, context: dict[str, Any]) -> str:
        """Render a named template with the given context.

        Args:
            name: Template filename inside the template directory.
            context: Variables to make available in the template.

        Returns:
            Rendered string.

        Raises:
            TemplateError: If the template (or one it extends or includes) is
                missing, has a syntax error or fails while rendering.
        """
        try:
            template = self.env.get_template(name)
            return template.render(**context)
        except jinja2.TemplateNotFound as exc:
            raise TemplateError(name, f"Template not found: {exc.name}") from exc
        except jinja2.TemplateSyntaxError as exc:
            raise TemplateError(
                exc.name or name,
                f"Template syntax error on line {exc.lineno}: {exc.message}",
            ) from exc
        except Exception as exc:
            raise TemplateError(name, _format_error_message(exc)) from exc


def _format_error_message(exc: Exception) -> str:
    """Format an exception raised while rendering into a user-friendly message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    error_msg = str(exc)

    if isinstance(exc, jinja2.UndefinedError):
        return f"Undefined variable: {error_msg}"
    if error_type == "TypeError":
        return f"Type error: {error_msg}"
    if error_type == "AttributeError":
        return f"Attribute error: {error_msg}"

    return f"{error_type}: {error_msg}"


def _config_context(config: Any) -> Any:
    to_context = getattr(config, "to_context", None)
    return to_context() if callable(to_context) else config
