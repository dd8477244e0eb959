"""Version information for the ``version`` subcommand."""

from __future__ import annotations

import subprocess
from importlib import metadata
from pathlib import Path

from . import __version__

DISTRIBUTION = "git-hotspots"


def build_tag() -> str:
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return __version__


def commit_hash() -> str:
    """Return the short hash of the checkout the package runs from."""
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            cwd=str(Path(__file__).parent),
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return "unknown"
    sha = completed.stdout.strip()
    if completed.returncode != 0 or not sha:
        return "unknown"
    return sha


def version_line() -> str:
    return f"{DISTRIBUTION} version: {build_tag()}, git commit: {commit_hash()}"


__all__ = ["build_tag", "commit_hash", "version_line"]
