"""Tree-sitter powered function extraction."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from tree_sitter import Node, Parser, QueryCursor

from ..logging import get_logger
from ..models import Element, FileRef, Lang
from ..progress import NullProgress, ProgressSink
from . import grammars
from .errors import NoFilesAddedError, NotCompatibleError, ParseFileError

logger = get_logger("parsers")

Canonicalizer = Callable[[List[Element]], Tuple[List[Element], int]]


def identity(elements: List[Element]) -> Tuple[List[Element], int]:
    """Leave extracted elements untouched."""
    return elements, 0


@dataclass(frozen=True)
class LanguageSpec:
    """Describes how one language is extracted and how its names are shown."""

    lang: Lang
    label: str
    canonicalize: Canonicalizer = identity


@dataclass
class Container:
    """Files queued for extraction and the name filters to apply afterwards.

    ``capacity`` is only a sizing hint.
    """

    capacity: int = 100
    files: List[FileRef] = field(default_factory=list)
    filters: List[str] = field(default_factory=list)


class Extractor:
    """Finds functions and methods in the files of a single language."""

    def __init__(self, spec: LanguageSpec, container: Optional[Container] = None) -> None:
        self.spec = spec
        self.container = container if container is not None else Container()
        self.language = grammars.language(spec.lang)
        self.query = grammars.query(spec.lang)
        self._captures = {
            self.query.capture_name(index): index for index in range(self.query.capture_count)
        }

    @property
    def lang(self) -> Lang:
        return self.spec.lang

    @property
    def label(self) -> str:
        return self.spec.label

    def supports(self, ref: FileRef) -> bool:
        return ref.lang == self.spec.lang

    def add_file(self, ref: FileRef) -> None:
        """Queue ``ref`` for extraction. Raises NotCompatibleError for other languages."""
        if not self.supports(ref):
            raise NotCompatibleError(ref.path)
        self.container.files.append(ref)

    def filter_name(self, term: str) -> None:
        """Drop functions whose name contains ``term`` from future results."""
        self.container.filters.append(term)

    def is_filtered(self, name: str) -> bool:
        return any(term in name for term in self.container.filters)

    def extract(self, progress: Optional[ProgressSink] = None) -> List[Element]:
        """Return every function found in the queued files.

        Files that cannot be read or parsed are logged and skipped. The total of
        ``progress`` grows by one per match and shrinks again by the number of
        elements removed while canonicalizing and filtering names.
        """
        sink = progress if progress is not None else NullProgress()
        files = self.container.files
        if not files:
            raise NoFilesAddedError()

        parser = self._new_parser()
        start = time.perf_counter()
        found: List[Element] = []
        for ref in files:
            source = self._read(ref)
            if source is None:
                continue
            tree = parser.parse(source)
            if tree is None:
                logger.warning("error while parsing %s", ref.path)
                continue
            for line, group, name in self._collect_matches(tree.root_node):
                sink.increment_total(1)
                found.append(Element(name=name, file=ref.path, line=line, group=group))
        logger.debug("Finding %s functions took %.3fs", self.label, time.perf_counter() - start)

        elements, redacted = self.spec.canonicalize(found)
        kept = [element for element in elements if not self.is_filtered(element.name)]
        redacted += len(elements) - len(kept)
        if redacted:
            sink.increment_total(-redacted)
        return kept

    def _new_parser(self) -> Parser:
        try:
            return Parser(self.language)
        except ValueError as exc:
            raise ParseFileError(f"can't set the {self.label} grammar: {exc}") from exc

    @staticmethod
    def _read(ref: FileRef) -> Optional[bytes]:
        try:
            with open(ref.path, "rb") as handle:
                source = handle.read()
        except OSError as exc:
            logger.warning("error while reading %s: %s", ref.path, exc)
            return None
        try:
            source.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.warning("error while reading %s: %s", ref.path, exc)
            return None
        return source

    def _collect_matches(self, root: Node) -> Iterable[Tuple[int, int, str]]:
        """Yield ``(line, capture index, text)`` for each query match.

        Only the first capture of a match with valid UTF-8 text is used.
        Matches are returned in document order.
        """
        rows: List[Tuple[int, int, int, str]] = []
        for _pattern, captures in QueryCursor(self.query).matches(root):
            candidates: List[Tuple[Node, int]] = []
            for capture_name, nodes in captures.items():
                index = self._captures[capture_name]
                candidates.extend((node, index) for node in nodes)
            candidates.sort(key=lambda item: (item[0].start_byte, item[1]))
            for node, index in candidates:
                text = _node_text(node)
                if text is None:
                    continue
                rows.append((node.start_byte, node.start_point.row + 1, index, text))
                break
        rows.sort(key=lambda row: row[0])
        return [(line, index, text) for _, line, index, text in rows]


def _node_text(node: Node) -> Optional[str]:
    raw = node.text
    if raw is None:
        return None
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return None


__all__ = ["Container", "Extractor", "LanguageSpec", "identity"]
