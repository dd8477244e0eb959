"""Repository walking and language classification."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .logging import get_logger
from .models import FileRef, Lang
from .workers import parallel_map

logger = get_logger("discovery")

_LANGUAGE_BY_SUFFIX = {
    ".go": "go",
    ".rs": "rust",
    ".lua": "lua",
}


def detect_language(path: str) -> Optional[str]:
    """Return the language tag for ``path`` or None when it is not supported."""
    _, suffix = os.path.splitext(path)
    return _LANGUAGE_BY_SUFFIX.get(suffix.lower())


def _is_utf8(path: str) -> bool:
    try:
        path.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _list_dir(directory: str) -> Tuple[List[str], List[str]]:
    """Split the entries of ``directory`` into files and subdirectories."""
    files: List[str] = []
    subdirs: List[str] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                path = os.path.join(directory, entry.name)
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(path)
                    elif entry.is_file():
                        files.append(path)
                    # Symlinked directories, dangling links and special files are skipped.
                except OSError:
                    continue
    except OSError:
        return [], []
    return files, subdirs


@dataclass
class Discovery:
    """Finds files under a root directory recursively.

    Results can be narrowed with path prefixes (keep when any matches) and
    substrings (drop when any matches). Files whose basename starts with a dot
    are never returned. Hidden directories are still walked.
    """

    prefixes: List[str] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)

    def with_prefix(self, prefix: str) -> None:
        self.prefixes.append(prefix)

    def not_contains(self, term: str) -> None:
        self.excluded.append(term)

    def discover(self, root: str) -> Optional[List[FileRef]]:
        """Return the files under ``root`` that survive filtering, or None."""
        start = time.perf_counter()
        found: List[FileRef] = []
        level: Sequence[str] = [root]
        # Each directory level is listed in parallel; the walk itself stays on
        # the calling thread so pool workers never wait on each other.
        while level:
            listings = parallel_map(_list_dir, level)
            next_level: List[str] = []
            for files, subdirs in listings:
                next_level.extend(subdirs)
                for path in files:
                    ref = self._classify(path)
                    if ref is not None:
                        found.append(ref)
            level = next_level

        logger.debug("Discovery took %.3fs (%d files)", time.perf_counter() - start, len(found))
        if not found:
            return None
        return found

    def _classify(self, path: str) -> Optional[FileRef]:
        if not _is_utf8(path):
            return None
        if os.path.basename(path).startswith("."):
            return None
        if self.prefixes and not any(path.startswith(prefix) for prefix in self.prefixes):
            return None
        if self.excluded and any(term in path for term in self.excluded):
            return None
        return FileRef(path=path, lang=Lang.from_tag(detect_language(path)))


__all__ = ["Discovery", "detect_language"]
