from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from datetime import datetime

from .content import Post
from .utils import parse_post_date


def date_sort_key(post: Post) -> datetime:
    """Return the sort key for a post; unparseable dates sort as the earliest."""
    return parse_post_date(post.date) or datetime.min


class PostCollection(Sequence[Post]):
    """Lightweight helper for working with lists of Posts in templates and code."""

    def __init__(self, posts: Iterable[Post]):
        self._posts = list(posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __getitem__(self, item):
        return self._posts[item]

    def sorted(self) -> PostCollection:
        """Sort posts by date, newest first.

        The sort is stable: posts sharing a date keep their input order.
        Posts with a missing or invalid date come last.

        Returns:
            A new PostCollection with sorted posts.
        """
        # sorted() keeps equal keys in input order even with reverse=True.
        return PostCollection(sorted(self._posts, key=date_sort_key, reverse=True))

    def latest(self, count: int = 5) -> PostCollection:
        return PostCollection(self._posts[:count])

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PostCollection({len(self._posts)} posts)"


def sort_posts(posts: Iterable[Post]) -> PostCollection:
    """Order posts by publication date, newest first."""
    return PostCollection(posts).sorted()
