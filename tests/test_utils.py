from datetime import datetime

from alxblg import utils


def test_parse_post_date():
    assert utils.parse_post_date("2024-01-15") == datetime(2024, 1, 15)
    assert utils.parse_post_date(" 2024-01-15 ") == datetime(2024, 1, 15)
    assert utils.parse_post_date("2024-01-15T10:30:00") == datetime(2024, 1, 15, 10, 30)
    assert utils.parse_post_date("2024-01-15T10:30:00+02:00") == datetime(2024, 1, 15, 8, 30)
    assert utils.parse_post_date("2024-13-01") is None
    assert utils.parse_post_date("January 1st") is None
    assert utils.parse_post_date("") is None


def test_is_safe_slug():
    assert utils.is_safe_slug("hello-world")
    assert utils.is_safe_slug("v1.2_notes")
    assert utils.is_safe_slug("café")
    assert utils.is_safe_slug("my post")
    assert utils.is_safe_slug("...")
    assert not utils.is_safe_slug("")
    assert not utils.is_safe_slug(".")
    assert not utils.is_safe_slug("..")
    assert not utils.is_safe_slug("../etc/passwd")
    assert not utils.is_safe_slug("a/b")
    assert not utils.is_safe_slug("a\\b")
    assert not utils.is_safe_slug("nul\x00byte")


def test_slugify_and_titleize():
    assert utils.slugify("Hello, World!") == "hello-world"
    assert utils.slugify("!!!") == "post"
    assert utils.titleize("my-travel_notes") == "My Travel Notes"
    assert utils.titleize("---") == "My Blog"


def test_is_markdown(tmp_path):
    assert utils.is_markdown(tmp_path / "post.md")
    assert not utils.is_markdown(tmp_path / "post.MD")
    assert not utils.is_markdown(tmp_path / "post.txt")


def test_ensure_clean_dir(tmp_path):
    target = tmp_path / "out"
    (target / "nested").mkdir(parents=True)
    (target / "nested" / "file.txt").write_text("x", encoding="utf-8")
    utils.ensure_clean_dir(target)
    assert target.exists()
    assert list(target.iterdir()) == []

    fresh = tmp_path / "fresh" / "dir"
    utils.ensure_clean_dir(fresh)
    assert fresh.is_dir()
