"""Function history lookups through ``git log -L``."""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Sequence

_COMMIT_HEADER = re.compile(r"^commit ([0-9a-f]{40})", re.MULTILINE)


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured stdout of a git invocation."""

    returncode: int
    stdout: bytes


Runner = Callable[..., CommandResult]


class InspectorError(RuntimeError):
    """Raised when git cannot be queried."""


class NotGitRepoError(InspectorError):
    """Raised when the inspected path is not inside a git work tree."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git directory: {path}")
        self.path = path


class HistoryDecodeError(InspectorError):
    """Raised when git prints something that is not UTF-8."""


class Inspector:
    """Interrogates a git work tree for the history of functions."""

    def __init__(self, path: str, *, git: str = "git", runner: Runner | None = None) -> None:
        self.path = str(path)
        self._git = git
        self._runner = runner or self._default_runner
        probe = self._run(["rev-parse", "--is-inside-work-tree"])
        if probe.returncode != 0:
            raise NotGitRepoError(self.path)

    def function_history(self, filename: str, func_name: str) -> List[str]:
        """Return the commits that touched ``func_name`` in ``filename``.

        The name and file are handed to ``git log -L`` as-is. A failing git
        command with no output is indistinguishable from an untouched function
        and yields no commits.
        """
        line_range = f":{func_name}:{filename}"
        result = self._run(["log", "-L", line_range])
        try:
            text = result.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise HistoryDecodeError(
                f"git log output for {line_range} is not valid UTF-8"
            ) from exc
        return commits(text)

    def _run(self, args: Sequence[str]) -> CommandResult:
        try:
            return self._runner([self._git, *args], cwd=Path(self.path))
        except OSError as exc:
            raise InspectorError(f"Failed to run {self._git}: {exc}") from exc

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path) -> CommandResult:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=False,
        )
        return CommandResult(returncode=completed.returncode, stdout=completed.stdout)


def commits(text: str) -> List[str]:
    """Return the hashes of every ``commit <sha>`` header in ``text``, in order."""
    return _COMMIT_HEADER.findall(text)


__all__ = [
    "CommandResult",
    "HistoryDecodeError",
    "Inspector",
    "InspectorError",
    "NotGitRepoError",
    "commits",
]
