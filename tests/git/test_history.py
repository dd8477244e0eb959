"""Tests for the git history inspector."""

from __future__ import annotations

from pathlib import Path

import pytest

from hotspots.git.history import (
    CommandResult,
    HistoryDecodeError,
    Inspector,
    InspectorError,
    NotGitRepoError,
    commits,
)

HASH_A = "a" * 40
HASH_B = "b" * 40
HASH_C = "c" * 40


class FakeGit:
    """Records git invocations and answers with canned output."""

    def __init__(self, *, probe: int = 0, log: bytes = b"") -> None:
        self.probe = probe
        self.log = log
        self.calls: list[tuple[list[str], Path]] = []

    def __call__(self, args, *, cwd):  # type: ignore[no-untyped-def]
        args = list(args)
        self.calls.append((args, Path(cwd)))
        if args[1:] == ["rev-parse", "--is-inside-work-tree"]:
            return CommandResult(returncode=self.probe, stdout=b"true\n" if self.probe == 0 else b"")
        return CommandResult(returncode=0, stdout=self.log)


def test_commits_returns_nothing_for_empty_input() -> None:
    assert commits("") == []


def test_commits_ignores_malformed_headers() -> None:
    assert commits("something\nsomething\ncommit 1234\nnooo") == []


def test_commits_finds_single_header() -> None:
    assert commits(f"commit {HASH_A}") == [HASH_A]


def test_commits_only_counts_line_start_headers() -> None:
    text = f"commit {HASH_A}\nnocommit {HASH_B}\ncommit {HASH_C}\n"
    assert commits(text) == [HASH_A, HASH_C]


def test_inspector_rejects_non_repositories(tmp_path: Path) -> None:
    with pytest.raises(NotGitRepoError):
        Inspector(str(tmp_path), runner=FakeGit(probe=128))


def test_function_history_builds_line_range(tmp_path: Path) -> None:
    git = FakeGit(log=f"commit {HASH_A}\n\n    change\n\ncommit {HASH_B}\n".encode())
    inspector = Inspector(str(tmp_path), runner=git)

    history = inspector.function_history("src/main.go", "(x) Run")

    assert history == [HASH_A, HASH_B]
    assert git.calls[-1] == (["git", "log", "-L", ":(x) Run:src/main.go"], tmp_path)


def test_function_history_uses_configured_binary(tmp_path: Path) -> None:
    git = FakeGit()
    Inspector(str(tmp_path), git="/opt/git/bin/git", runner=git).function_history("a.rs", "f")

    assert [args[0] for args, _ in git.calls] == ["/opt/git/bin/git", "/opt/git/bin/git"]


def test_function_history_rejects_invalid_utf8(tmp_path: Path) -> None:
    inspector = Inspector(str(tmp_path), runner=FakeGit(log=b"commit \xff\xfe"))

    with pytest.raises(HistoryDecodeError):
        inspector.function_history("a.rs", "f")


def test_inspector_wraps_launch_failures(tmp_path: Path) -> None:
    def runner(args, *, cwd):  # type: ignore[no-untyped-def]
        raise FileNotFoundError("git")

    with pytest.raises(InspectorError):
        Inspector(str(tmp_path), runner=runner)


def test_inspector_against_real_repository(git_repo) -> None:
    git_repo.write({"lib.rs": "fn target() {\n    let a = 1;\n}\n"})
    git_repo.commit("add target")
    git_repo.write({"lib.rs": "fn target() {\n    let a = 2;\n}\n"})
    git_repo.commit("change target")

    inspector = Inspector(str(git_repo.path()))

    assert len(inspector.function_history("lib.rs", "target")) == 2
