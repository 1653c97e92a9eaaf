import json
import subprocess
from datetime import date
from pathlib import Path

from click.testing import CliRunner

from alxblg.build import BuildResult
from alxblg.cli import cli
from alxblg.collections import PostCollection
from alxblg.content import Post

SKIP_GIT = {"ALXBLG_SKIP_GIT_INIT": "1"}


def mock_questions(monkeypatch, answers):
    responses = iter(answers)

    def mock_text(*args, **kwargs):
        class MockQuestion:
            def ask(self):
                return next(responses)

        return MockQuestion()

    monkeypatch.setattr("alxblg.cli.questionary.text", mock_text)


def test_cli_init_scaffolds_project(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["init", "--directory", str(tmp_path)], env=SKIP_GIT)
    assert result.exit_code == 0
    for rel in ("content/posts", "templates", "assets/css", "assets/js", "public"):
        assert (tmp_path / rel).is_dir()
    config = json.loads((tmp_path / "blog.config.json").read_text(encoding="utf-8"))
    assert config["title"] == "My Blog"
    assert config["postsPerPage"] == 10
    welcome = (tmp_path / "content" / "posts" / "welcome.md").read_text(encoding="utf-8")
    assert f'date: "{date.today().isoformat()}"' in welcome
    assert 'slug: "welcome"' in welcome
    assert "initialized successfully" in result.output


def test_cli_init_with_project_name(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["init", "travel-notes", "-d", str(tmp_path)], env=SKIP_GIT)
    assert result.exit_code == 0
    project = tmp_path / "travel-notes"
    config = json.loads((project / "blog.config.json").read_text(encoding="utf-8"))
    assert config["title"] == "Travel Notes"


def test_cli_init_keeps_existing_files(tmp_path):
    (tmp_path / "blog.config.json").write_text('{"title": "Mine"}', encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["init", "-d", str(tmp_path)], env=SKIP_GIT)
    assert result.exit_code == 0
    assert (tmp_path / "blog.config.json").read_text(encoding="utf-8") == '{"title": "Mine"}'
    assert "Created blog.config.json" not in result.output


def test_cli_init_then_build(tmp_path, monkeypatch):
    runner = CliRunner()
    runner.invoke(cli, ["init", "-d", str(tmp_path)], env=SKIP_GIT)
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(cli, ["build"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "Generated 1 posts" in result.output
    assert (tmp_path / "public" / "posts" / "welcome.html").exists()
    assert "Welcome to Your New Blog" in (tmp_path / "public" / "index.html").read_text(
        encoding="utf-8"
    )


def test_cli_build_missing_config(tmp_path):
    runner = CliRunner()
    output = tmp_path / "public"
    result = runner.invoke(cli, ["build", "-s", str(tmp_path), "-o", str(output)])
    assert result.exit_code == 1
    assert "Build failed" in result.output
    assert "blog.config.json not found" in result.output
    assert not output.exists()


def test_cli_build_reports_warnings(tmp_path, monkeypatch):
    calls = {}

    def fake_build_site(source_dir, output_dir, clean_output=False):
        calls["args"] = (source_dir, output_dir, clean_output)
        return BuildResult(
            posts=PostCollection([]),
            output_dir=output_dir,
            skipped=[source_dir / "content" / "posts" / "plain.md"],
            rejected=[
                Post(
                    title="Escape",
                    date="2024-01-01",
                    slug="../evil",
                    content="",
                    excerpt="...",
                    path=source_dir / "content" / "posts" / "escape.md",
                )
            ],
            duplicates=["same"],
        )

    monkeypatch.setattr("alxblg.build.build_site", fake_build_site)
    runner = CliRunner()
    result = runner.invoke(
        cli, ["build", "--source", str(tmp_path), "--output", str(tmp_path / "out"), "--clean"]
    )
    assert result.exit_code == 0
    assert calls["args"] == (tmp_path.resolve(), (tmp_path / "out").resolve(), True)
    assert "Skipped plain.md: no frontmatter block" in result.output
    assert "Skipped escape.md: slug '../evil' cannot be used as a filename" in result.output
    assert "Duplicate slug 'same'" in result.output
    assert "Generated 0 posts" in result.output


def write_project(root: Path) -> None:
    posts = root / "content" / "posts"
    posts.mkdir(parents=True)
    (root / "blog.config.json").write_text(
        json.dumps(
            {"title": "T", "description": "D", "author": "A", "baseUrl": "/", "postsPerPage": 5}
        ),
        encoding="utf-8",
    )
    (posts / "hi.md").write_text(
        '---\ntitle: "Hi"\ndate: "2024-01-01"\nslug: "hi"\n---\nHello', encoding="utf-8"
    )


def test_cli_build_template_runtime_error(tmp_path):
    write_project(tmp_path)
    (tmp_path / "templates").mkdir()
    (tmp_path / "templates" / "index.html").write_text(
        "{{ posts.latest('x') }}", encoding="utf-8"
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["build", "-s", str(tmp_path), "-o", str(tmp_path / "public")])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Build failed" in result.output
    assert "Type error:" in result.output
    assert not (tmp_path / "public").exists()


def test_cli_build_clean_refuses_source_directory(tmp_path):
    write_project(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["build", "-s", str(tmp_path), "-o", str(tmp_path), "--clean"])
    assert result.exit_code == 1
    assert "Refusing to clean" in result.output
    assert (tmp_path / "blog.config.json").exists()
    assert (tmp_path / "content" / "posts" / "hi.md").exists()


def test_cli_serve(monkeypatch, tmp_path):
    called = {}

    class DummyServer:
        def __init__(self, directory, port=3000):
            called["directory"] = directory
            called["port"] = port

        def start(self):
            called["started"] = True

    monkeypatch.setattr("alxblg.server.PreviewServer", DummyServer)
    (tmp_path / "public").mkdir()
    runner = CliRunner()
    result = runner.invoke(
        cli, ["serve", "-p", "5050", "-d", str(tmp_path / "public"), "--watch"], catch_exceptions=False
    )
    assert result.exit_code == 0
    assert called == {"directory": (tmp_path / "public").resolve(), "port": 5050, "started": True}
    assert "Watch mode is not supported" in result.output


def test_cli_serve_missing_directory(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["serve", "-d", str(tmp_path / "nope")])
    assert result.exit_code == 1
    assert "doesn't exist" in result.output


def test_post_command_requires_project(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["post", "-d", str(tmp_path)])
    assert result.exit_code != 0
    assert "No content/posts directory found" in result.output


def test_post_command_creates_file(tmp_path, monkeypatch):
    (tmp_path / "content" / "posts").mkdir(parents=True)
    mock_questions(monkeypatch, ['My "New" Post', "my-new-post", "2024-03-01"])
    runner = CliRunner()
    result = runner.invoke(cli, ["post", "-d", str(tmp_path)], catch_exceptions=False)
    assert result.exit_code == 0
    created = tmp_path / "content" / "posts" / "my-new-post.md"
    text = created.read_text(encoding="utf-8")
    assert text.startswith(
        "---\ntitle: \"My 'New' Post\"\ndate: \"2024-03-01\"\nslug: \"my-new-post\"\n---\n"
    )
    assert "# My 'New' Post" in text


def test_post_command_detects_duplicate_slug(tmp_path, monkeypatch):
    posts = tmp_path / "content" / "posts"
    posts.mkdir(parents=True)
    (posts / "existing.md").write_text(
        '---\ntitle: "Old"\ndate: "2024-01-01"\nslug: "taken"\n---\nBody', encoding="utf-8"
    )
    mock_questions(monkeypatch, ["Another", "taken", "2024-03-01"])
    runner = CliRunner()
    result = runner.invoke(cli, ["post", "-d", str(tmp_path)])
    assert result.exit_code != 0
    assert "already exists: existing.md" in result.output


def test_post_command_abort(tmp_path, monkeypatch):
    (tmp_path / "content" / "posts").mkdir(parents=True)
    mock_questions(monkeypatch, [None])
    runner = CliRunner()
    result = runner.invoke(cli, ["post", "-d", str(tmp_path)])
    assert result.exit_code != 0
    assert list((tmp_path / "content" / "posts").iterdir()) == []


def test_try_git_init(monkeypatch, tmp_path):
    from alxblg.cli import _try_git_init

    called = {}
    monkeypatch.delenv("ALXBLG_SKIP_GIT_INIT", raising=False)
    monkeypatch.setattr("alxblg.cli.shutil.which", lambda cmd: "/usr/bin/git")

    def fake_run(cmd, cwd=None, check=None, capture_output=None):
        called["cmd"] = cmd
        called["cwd"] = cwd
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr("alxblg.cli.subprocess.run", fake_run)
    _try_git_init(tmp_path)
    assert called["cmd"] == ["/usr/bin/git", "init"]
    assert called["cwd"] == tmp_path


def test_try_git_init_failure_is_ignored(monkeypatch, tmp_path):
    from alxblg.cli import _try_git_init

    monkeypatch.delenv("ALXBLG_SKIP_GIT_INIT", raising=False)
    monkeypatch.setattr("alxblg.cli.shutil.which", lambda cmd: "/usr/bin/git")

    def fake_run(cmd, cwd=None, check=None, capture_output=None):
        raise subprocess.CalledProcessError(1, cmd)

    monkeypatch.setattr("alxblg.cli.subprocess.run", fake_run)
    _try_git_init(tmp_path)


def test_module_main_entrypoint():
    from alxblg.__main__ import main

    assert callable(main)


def test_main_invokes_cli(monkeypatch):
    import alxblg.cli as cli_mod

    called = {}
    monkeypatch.setattr(cli_mod, "cli", lambda: called.setdefault("ran", True))
    cli_mod.main()
    assert called["ran"]


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "alxblg" in result.output
