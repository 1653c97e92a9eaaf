"""Command-line interface for alxblg.

This module defines the CLI commands using Click framework.
It provides commands for creating new blogs, building them, previewing the
output, and adding posts.

Commands:
- init: Scaffold a new blog project.
- build: Build the blog into the output directory.
- serve: Serve a built blog locally.
- post: Create a new post interactively.
"""

from __future__ import annotations

import json
import os
import shutil
import subprocess
from datetime import date
from pathlib import Path

import click
import questionary

from . import __version__
from .defaults import DEFAULT_CONFIG, PROJECT_DIRECTORIES, new_post, sample_post
from .utils import is_safe_slug, parse_post_date, slugify, titleize


@click.group()
@click.version_option(version=__version__, prog_name="alxblg")
def cli():
    """A simple blog generator."""


@cli.command()
@click.option(
    "-s",
    "--source",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Source directory",
)
@click.option(
    "-o",
    "--output",
    default="public",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory",
)
@click.option("--clean", is_flag=True, help="Empty the output directory first")
def build(source: Path, output: Path, clean: bool):
    """Build the static blog site."""
    from .build import BuildError, build_site

    source_dir = source.resolve()
    output_dir = output.resolve()
    click.echo(f"Building blog from {source_dir} to {output_dir}...")

    try:
        result = build_site(source_dir, output_dir, clean_output=clean)
    except BuildError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        if exc.source_path is not None:
            click.echo(click.style(f"  File: {exc.source_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None

    for name in result.templates_created:
        click.echo(f"Created default template: templates/{name}")
    for path in result.skipped:
        click.echo(
            click.style(
                f"Skipped {path.name}: no frontmatter block",
                fg="yellow",
            ),
            err=True,
        )
    for post in result.rejected:
        name = post.path.name if post.path is not None else post.title
        click.echo(
            click.style(
                f"Skipped {name}: slug '{post.slug}' cannot be used as a filename",
                fg="yellow",
            ),
            err=True,
        )
    for slug in result.duplicates:
        click.echo(
            click.style(
                f"Duplicate slug '{slug}': the last post in filename order wins",
                fg="yellow",
            ),
            err=True,
        )
    click.echo("Blog built successfully!")
    click.echo(f"Output: {result.output_dir}")
    click.echo(f"Generated {len(result.posts)} posts")


@cli.command()
@click.argument("project_name", required=False)
@click.option(
    "-d",
    "--directory",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Target directory for the project",
)
def init(project_name: str | None, directory: Path):
    """Initialize a new blog project."""
    target = directory / project_name if project_name else directory
    target = target.resolve()
    click.echo(f"Initializing new blog project in {target}...")
    _scaffold(target, title=titleize(project_name) if project_name else None)

    click.echo(click.style("\nBlog project initialized successfully!", fg="green"))
    click.echo("\nNext steps:")
    click.echo("1. Edit blog.config.json to customize your blog")
    click.echo("2. Add more posts to content/posts/")
    click.echo('3. Run "alxblg build" to generate your blog')
    click.echo('4. Run "alxblg serve" to start the development server')


@cli.command()
@click.option("-p", "--port", type=int, default=3000, help="Port to run the server on")
@click.option(
    "-d",
    "--directory",
    default="public",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to serve",
)
@click.option("-w", "--watch", is_flag=True, help="Watch for changes (not supported)")
def serve(port: int, directory: Path, watch: bool):
    """Start a development server."""
    from .server import PreviewServer

    serve_dir = directory.resolve()
    if not serve_dir.is_dir():
        click.echo(f"Directory {serve_dir} doesn't exist.", err=True)
        click.echo(
            'Run "alxblg build" first to generate your blog, or specify a different directory.',
            err=True,
        )
        raise SystemExit(1)
    if watch:
        click.echo(
            click.style(
                'Watch mode is not supported; run "alxblg build" again to refresh the site.',
                fg="yellow",
            )
        )
    PreviewServer(serve_dir, port=port).start()


@cli.command()
@click.option(
    "-d",
    "--directory",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Blog project directory",
)
def post(directory: Path):
    """Create a new post interactively."""
    from .content import ContentProcessor

    posts_dir = directory.resolve() / "content" / "posts"
    if not posts_dir.is_dir():
        raise click.ClickException(
            'No content/posts directory found. Run "alxblg init" first.'
        )

    title = questionary.text(
        "Title:",
        validate=lambda x: len(x.strip()) > 0 or "Title cannot be empty",
        style=_questionary_style(),
    ).ask()
    if title is None:
        raise click.Abort()
    # Values cannot contain double quotes in frontmatter.
    title = title.strip().replace('"', "'")

    slug = questionary.text(
        "Slug:",
        default=slugify(title),
        validate=lambda x: is_safe_slug(x.strip())
        or "Slug cannot be empty, '.' or '..', or contain a path separator",
        style=_questionary_style(),
    ).ask()
    if slug is None:
        raise click.Abort()
    slug = slug.strip()

    published = questionary.text(
        "Date (YYYY-MM-DD):",
        default=date.today().isoformat(),
        validate=lambda x: parse_post_date(x) is not None or "Enter an ISO 8601 date",
        style=_questionary_style(),
    ).ask()
    if published is None:
        raise click.Abort()

    target_path = posts_dir / f"{slug}.md"
    if target_path.exists():
        raise click.ClickException(f"File already exists: {target_path.name}")
    existing = ContentProcessor(posts_dir).load().posts
    conflicting = [p for p in existing if p.slug == slug]
    if conflicting:
        name = conflicting[0].path.name if conflicting[0].path else slug
        raise click.ClickException(f"A post with slug '{slug}' already exists: {name}")

    target_path.write_text(new_post(title, published.strip(), slug), encoding="utf-8")
    click.echo(f"Created content/posts/{target_path.name}")


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()


def _scaffold(root: Path, title: str | None = None) -> None:
    """Create the directory structure and starter files for a blog.

    Existing directories and files are left alone.

    Args:
        root: Root directory of the blog project.
        title: Optional blog title for a newly written config.
    """
    for rel in PROJECT_DIRECTORIES:
        path = root / rel
        if not path.exists():
            path.mkdir(parents=True, exist_ok=True)
            click.echo(f"Created directory: {rel}")

    config_path = root / "blog.config.json"
    if not config_path.exists():
        config = dict(DEFAULT_CONFIG)
        if title:
            config["title"] = title
        config_path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
        click.echo("Created blog.config.json")

    sample_path = root / "content" / "posts" / "welcome.md"
    if not sample_path.exists():
        sample_path.write_text(sample_post(date.today().isoformat()), encoding="utf-8")
        click.echo("Created sample post: content/posts/welcome.md")

    _try_git_init(root)


def _try_git_init(root: Path) -> None:
    """Initialize a git repository if git is available."""
    if os.environ.get("ALXBLG_SKIP_GIT_INIT") == "1":
        return
    if (root / ".git").exists():
        return
    git_bin = shutil.which("git")
    if not git_bin:
        return
    try:
        subprocess.run(
            [git_bin, "init"],
            cwd=root,
            check=True,
            capture_output=True,
        )
    except (OSError, subprocess.CalledProcessError):
        # Non-fatal: user can run git init manually
        pass
