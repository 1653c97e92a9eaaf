"""alxblg static blog generator.

This package turns a folder of Markdown posts with frontmatter headers into a
static HTML site using Jinja2 templates, and ships a small preview server.

The main entry point is the CLI module, which provides commands for scaffolding
new blogs, building them, and previewing the output locally.

The build pipeline, leaf first:
- extractors: frontmatter and excerpt extraction from raw post text
- content: Post records and post discovery
- collections: ordering of posts by date
- templates: Jinja2 rendering of the index and post pages
- build: configuration loading and orchestration of a full build
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
