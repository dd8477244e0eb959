from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

from hotspots import workers
from tests._fixtures.repo_builder import RepoBuilder

FIXTURES = Path(__file__).with_name("fixtures")


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable repo builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def git_repo(repo_builder: RepoBuilder) -> RepoBuilder:
    """Provide a repo builder whose directory is already a git work tree."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo_builder.init()
    return repo_builder


@pytest.fixture
def fixture_path():
    """Return the path of a language fixture as a string."""

    def _path(language: str, name: str) -> str:
        return str(FIXTURES / language / name)

    return _path


@pytest.fixture(autouse=True)
def _reset_worker_pool():
    yield
    workers.shutdown()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("hotspots")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
