"""Tests for document discovery."""

from pathlib import Path

from snippet_test.discovery.file_finder import discover_files


def _touch(root: Path, rel: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("# doc\n", encoding="utf-8")
    return path.resolve()


def test_include_and_exclude_patterns(tmp_path):
    readme = _touch(tmp_path, "README.md")
    guide = _touch(tmp_path, "docs/guide.md")
    page = _touch(tmp_path, "docs/page.mdx")
    _touch(tmp_path, "node_modules/pkg/README.md")
    _touch(tmp_path, "docs/dist/built.md")
    _touch(tmp_path, "notes.txt")

    files = discover_files(["**/*.md", "**/*.mdx"], ["**/node_modules/**", "**/dist/**"], tmp_path)

    assert files == sorted([readme, guide, page])


def test_exclude_single_file_and_dedupe(tmp_path):
    keep = _touch(tmp_path, "a.md")
    _touch(tmp_path, "b.md")

    files = discover_files(["*.md", "**/*.md"], ["b.md"], tmp_path)

    assert files == [keep]


def test_dotfiles_are_included(tmp_path):
    hidden = _touch(tmp_path, ".github/CONTRIBUTING.md")

    assert discover_files(["**/*.md"], [], tmp_path) == [hidden]


def test_absolute_path_taken_literally(tmp_path):
    doc = _touch(tmp_path, "x/guide.md")

    assert discover_files([str(doc)], [], tmp_path / "elsewhere") == [doc]


def test_absolute_exclude_patterns(tmp_path):
    keep = _touch(tmp_path, "docs/keep.md")
    drop = _touch(tmp_path, "docs/drop.md")
    _touch(tmp_path, "vendor/lib/README.md")

    files = discover_files(["**/*.md"], [str(drop), str(tmp_path.resolve() / "vendor")], tmp_path)

    assert files == [keep]


def test_absolute_include_with_wildcard(tmp_path):
    a = _touch(tmp_path, "x/a.md")
    b = _touch(tmp_path, "x/b.md")

    assert discover_files([str(tmp_path.resolve() / "x" / "*.md")], [], tmp_path / "elsewhere") == [a, b]
