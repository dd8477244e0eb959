"""Git integration helpers."""

from .history import (
    CommandResult,
    HistoryDecodeError,
    Inspector,
    InspectorError,
    NotGitRepoError,
    commits,
)

__all__ = [
    "CommandResult",
    "HistoryDecodeError",
    "Inspector",
    "InspectorError",
    "NotGitRepoError",
    "commits",
]
