"""Built-in defaults for alxblg.

DEFAULT_TEMPLATES is consulted before every build: any of the three required
templates missing from a blog's ``templates/`` directory is written from here.
DEFAULT_CONFIG and sample_post() are used by ``alxblg init``.
"""

from __future__ import annotations

LAYOUT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{% block title %}{{ config.title }}{% endblock %}</title>
    <style>
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }
        header { border-bottom: 1px solid #eee; padding-bottom: 20px; margin-bottom: 40px; }
        .post { margin-bottom: 40px; }
        .post-meta { color: #666; font-size: 14px; }
        pre { background: #f5f5f5; padding: 15px; border-radius: 5px; overflow-x: auto; }
    </style>
</head>
<body>
    <header>
        <h1><a href="/" style="text-decoration: none; color: inherit;">{{ config.title }}</a></h1>
        <p>{{ config.description }}</p>
    </header>

    <main>
        {% block content %}{% endblock %}
    </main>

    <footer style="margin-top: 60px; padding-top: 20px; border-top: 1px solid #eee; text-align: center; color: #666;">
        <p>&copy; {{ config.author }}</p>
    </footer>
</body>
</html>
"""

INDEX_TEMPLATE = """{% extends "layout.html" %}

{% block content %}
    {% for post in posts %}
        <article class="post">
            <h2><a href="/posts/{{ post.slug }}.html">{{ post.title }}</a></h2>
            <div class="post-meta">{{ post.date }}</div>
            <p>{{ post.excerpt }}</p>
        </article>
    {% endfor %}
{% endblock %}
"""

POST_TEMPLATE = """{% extends "layout.html" %}

{% block title %}{{ post.title }} - {{ config.title }}{% endblock %}

{% block content %}
    <article>
        <h1>{{ post.title }}</h1>
        <div class="post-meta">{{ post.date }}</div>
        <div class="post-content">
            {{ post.content | safe }}
        </div>
    </article>

    <nav style="margin-top: 40px;">
        <a href="/">&larr; Back to all posts</a>
    </nav>
{% endblock %}
"""

DEFAULT_TEMPLATES: dict[str, str] = {
    "layout.html": LAYOUT_TEMPLATE,
    "index.html": INDEX_TEMPLATE,
    "post.html": POST_TEMPLATE,
}

DEFAULT_CONFIG = {
    "title": "My Blog",
    "description": "A simple blog generated with alxblg",
    "author": "Your Name",
    "baseUrl": "http://localhost:3000",
    "postsPerPage": 10,
}

PROJECT_DIRECTORIES = (
    "content/posts",
    "templates",
    "assets/css",
    "assets/js",
    "public",
)


def sample_post(date: str) -> str:
    """Return the welcome post written by ``alxblg init``.

    Args:
        date: Publication date in YYYY-MM-DD form.
    """
    return f"""---
title: "Welcome to Your New Blog"
date: "{date}"
slug: "welcome"
---

# Welcome to Your New Blog

This is your first blog post! You can edit this file and add more posts to the `content/posts` directory.

## Getting Started

1. Edit `blog.config.json` to customize your blog
2. Add more posts to `content/posts`
3. Run `alxblg build` to generate your blog
4. Run `alxblg serve` to start the development server
"""


def new_post(title: str, date: str, slug: str) -> str:
    """Return the skeleton for a post created with ``alxblg post``."""
    return f'---\ntitle: "{title}"\ndate: "{date}"\nslug: "{slug}"\n---\n\n# {title}\n\n'
