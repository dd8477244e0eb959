"""Discovery, extraction and history lookup composed into a ranked report."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .discovery import Discovery
from .git.history import HistoryDecodeError, Inspector
from .logging import get_logger
from .models import Element, FileRef, Lang, ReportRow
from .parsers import Extractor, NoFilesAddedError, NotCompatibleError, ParseFileError, build_extractors
from .progress import NullProgress, ProgressSink
from .workers import parallel_map


class NoFilesFoundError(RuntimeError):
    """Raised when discovery leaves nothing to inspect."""

    def __init__(self) -> None:
        super().__init__("No files found in the current directory")


@dataclass
class PipelineOptions:
    """Operator choices for a single run."""

    root: str = "."
    total: int = 50
    skip: int = 0
    prefixes: Sequence[str] = field(default_factory=list)
    invert_match: Sequence[str] = field(default_factory=list)
    exclude_func: Sequence[str] = field(default_factory=list)
    verbosity: int = 0
    git: str = "git"


class Pipeline:
    """Ranks the functions under a root directory by how often they changed."""

    def __init__(
        self,
        options: PipelineOptions,
        *,
        inspector: Optional[Inspector] = None,
        extractors: Optional[Iterable[Extractor]] = None,
        discovery: Optional[Discovery] = None,
        progress: Optional[ProgressSink] = None,
    ) -> None:
        self.options = options
        self.logger = get_logger("pipeline")
        self.progress = progress if progress is not None else NullProgress()
        self.inspector = inspector or Inspector(options.root, git=options.git)
        self.extractors = list(extractors) if extractors is not None else build_extractors()
        self.discovery = discovery or Discovery()

    def run(self) -> List[ReportRow]:
        """Return the ranked rows after skip/total have been applied."""
        rows = self.collect()
        rows.sort(key=lambda row: row.freq, reverse=True)
        start = self.options.skip
        return rows[start : start + self.options.total]

    def collect(self) -> List[ReportRow]:
        """Return one unsorted row per extracted function."""
        files = self._discover()
        self._dispatch(files)
        for term in self.options.exclude_func:
            for extractor in self.extractors:
                extractor.filter_name(term)

        rows: List[ReportRow] = []
        for extractor in self.extractors:
            try:
                elements = extractor.extract(self.progress)
            except NoFilesAddedError:
                self.logger.debug("Parser %s didn't find any files", extractor.label)
                continue
            except ParseFileError as exc:
                self.logger.warning("Parser %s encountered an error: %s", extractor.label, exc)
                continue

            start = time.perf_counter()
            rows.extend(parallel_map(self._score, elements))
            self.logger.debug(
                "Function history examination took %.3fs", time.perf_counter() - start
            )
        return rows

    def _discover(self) -> List[FileRef]:
        for prefix in self.options.prefixes:
            self.discovery.with_prefix(os.path.join(self.options.root, prefix))
        for term in self.options.invert_match:
            self.discovery.not_contains(term)
        files = self.discovery.discover(self.options.root)
        if not files:
            raise NoFilesFoundError()
        self.logger.debug("Discovered %d files", len(files))
        return files

    def _dispatch(self, files: Iterable[FileRef]) -> None:
        by_lang = {extractor.lang: extractor for extractor in self.extractors}
        for ref in files:
            extractor = by_lang.get(ref.lang)
            if ref.lang is Lang.UNSUPPORTED or extractor is None:
                if self.options.verbosity > 0:
                    self.logger.warning("Unsupported file: %s", ref.path)
                continue
            try:
                extractor.add_file(ref)
            except NotCompatibleError as exc:
                self.logger.warning("Failed to load file %s: %s", ref.path, exc)
                continue
            if self.options.verbosity > 1:
                self.logger.info("Added %s", ref.path)

    def _score(self, element: Element) -> ReportRow:
        path = os.path.relpath(element.file, self.options.root)
        try:
            freq = len(self.inspector.function_history(path, element.name))
        except HistoryDecodeError as exc:
            self.logger.warning("Can't read history of %s in %s: %s", element.name, element.file, exc)
            freq = 0
        self.progress.increment_done(1)
        return ReportRow(file=element.file, line=element.line, name=element.name, freq=freq)


__all__ = ["NoFilesFoundError", "Pipeline", "PipelineOptions"]
