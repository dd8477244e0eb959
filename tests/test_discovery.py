"""Tests for hotspots.discovery."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from hotspots.discovery import Discovery, detect_language
from hotspots.models import FileRef, Lang


def _touch(root: Path, *names: str) -> None:
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


def _sorted(refs):
    return sorted(refs, key=lambda ref: ref.path)


def test_discover_returns_none_for_empty_directory(tmp_path: Path) -> None:
    assert Discovery().discover(str(tmp_path)) is None


def test_discover_returns_none_for_missing_directory(tmp_path: Path) -> None:
    assert Discovery().discover(str(tmp_path / "missing")) is None


def test_discover_ignores_hidden_files(tmp_path: Path) -> None:
    _touch(tmp_path, "a.txt", "b.txt", ".hidden.txt")

    result = Discovery().discover(str(tmp_path))

    assert result is not None
    assert _sorted(result) == [
        FileRef(path=os.path.join(str(tmp_path), "a.txt"), lang=Lang.UNSUPPORTED),
        FileRef(path=os.path.join(str(tmp_path), "b.txt"), lang=Lang.UNSUPPORTED),
    ]


def test_discover_walks_recursively(tmp_path: Path) -> None:
    _touch(tmp_path, "a.txt", "b/c.txt")

    result = _sorted(Discovery().discover(str(tmp_path)))

    assert [ref.path for ref in result] == [
        os.path.join(str(tmp_path), "a.txt"),
        os.path.join(str(tmp_path), "b", "c.txt"),
    ]


def test_discover_classifies_languages(tmp_path: Path) -> None:
    _touch(tmp_path, "file1.go", "file2.rs", "file3.lua", "file4.py")

    result = _sorted(Discovery().discover(str(tmp_path)))

    assert [ref.lang for ref in result] == [Lang.GO, Lang.RUST, Lang.LUA, Lang.UNSUPPORTED]


def test_discover_keeps_files_matching_any_prefix(tmp_path: Path) -> None:
    _touch(tmp_path, "src/a.go", "lib/b.go", "cmd/c.go")
    discovery = Discovery()
    discovery.with_prefix(os.path.join(str(tmp_path), "src"))
    discovery.with_prefix(os.path.join(str(tmp_path), "cmd"))

    result = _sorted(discovery.discover(str(tmp_path)))

    assert [os.path.basename(ref.path) for ref in result] == ["c.go", "a.go"]


def test_discover_drops_files_containing_excluded_terms(tmp_path: Path) -> None:
    _touch(tmp_path, "src/a.go", "vendor/b.go", "src/a_test.go")
    discovery = Discovery()
    discovery.not_contains("vendor")
    discovery.not_contains("_test")

    result = discovery.discover(str(tmp_path))

    assert [os.path.basename(ref.path) for ref in result] == ["a.go"]


def test_discover_signals_empty_when_everything_is_filtered(tmp_path: Path) -> None:
    _touch(tmp_path, "a.go")
    discovery = Discovery()
    discovery.not_contains("a.go")

    assert discovery.discover(str(tmp_path)) is None


def test_discover_never_returns_directories(tmp_path: Path) -> None:
    _touch(tmp_path, "dir/nested/file.rs")
    (tmp_path / "empty").mkdir()

    result = Discovery().discover(str(tmp_path))

    assert all(os.path.isfile(ref.path) for ref in result)


def test_detect_language_by_extension() -> None:
    assert detect_language("main.go") == "go"
    assert detect_language("lib.RS") == "rust"
    assert detect_language("init.lua") == "lua"
    assert detect_language("README.md") is None
    assert Lang.from_tag(detect_language("README.md")) is Lang.UNSUPPORTED


def test_discover_walks_hidden_directories(tmp_path: Path) -> None:
    _touch(tmp_path, ".hid/x.go", ".hid/.x.go", ".github/scripts/ci.lua", "main.go")

    result = Discovery().discover(str(tmp_path))

    assert result is not None
    assert _sorted(result) == [
        FileRef(path=os.path.join(str(tmp_path), ".github", "scripts", "ci.lua"), lang=Lang.LUA),
        FileRef(path=os.path.join(str(tmp_path), ".hid", "x.go"), lang=Lang.GO),
        FileRef(path=os.path.join(str(tmp_path), "main.go"), lang=Lang.GO),
    ]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_discover_skips_dangling_and_directory_links(tmp_path: Path) -> None:
    _touch(tmp_path, "a.go", "pkg/b.go")
    os.symlink(tmp_path / "missing.go", tmp_path / "broken.go")
    os.symlink(tmp_path, tmp_path / "loop")
    os.symlink(tmp_path / "a.go", tmp_path / "alias.go")

    result = Discovery().discover(str(tmp_path))

    assert result is not None
    assert sorted(os.path.relpath(ref.path, tmp_path) for ref in result) == [
        "a.go",
        "alias.go",
        os.path.join("pkg", "b.go"),
    ]


def test_discover_walks_current_directory_with_dot_prefix(tmp_path: Path, monkeypatch) -> None:
    _touch(tmp_path, "src/a.go", "b.go")
    monkeypatch.chdir(tmp_path)
    discovery = Discovery()
    discovery.with_prefix(os.path.join(".", "src"))

    result = discovery.discover(".")

    assert result == [FileRef(path=os.path.join(".", "src", "a.go"), lang=Lang.GO)]
