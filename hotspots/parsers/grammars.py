"""Tree-sitter grammars and the function queries that run against them."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Dict

import tree_sitter_go
import tree_sitter_lua
import tree_sitter_rust
from tree_sitter import Language, Query

from ..models import Lang
from .errors import ParserError

QUERIES_DIR = Path(__file__).with_name("queries")

_GRAMMARS: Dict[Lang, Callable[[], object]] = {
    Lang.GO: tree_sitter_go.language,
    Lang.RUST: tree_sitter_rust.language,
    Lang.LUA: tree_sitter_lua.language,
}

_lock = threading.Lock()
_languages: Dict[Lang, Language] = {}
_queries: Dict[Lang, Query] = {}


class GrammarInitError(ParserError):
    """Raised when a grammar or its query resource cannot be loaded."""


def language(lang: Lang) -> Language:
    """Return the compiled grammar for ``lang``, loading it once per process."""
    with _lock:
        return _language_locked(lang)


def query(lang: Lang) -> Query:
    """Return the parsed function query for ``lang``, loading it once per process."""
    with _lock:
        cached = _queries.get(lang)
        if cached is not None:
            return cached
        grammar = _language_locked(lang)
        source = read_query_source(lang)
        try:
            compiled = Query(grammar, source)
        except Exception as exc:
            raise GrammarInitError(f"Invalid query {lang.value}.scm: {exc}") from exc
        _queries[lang] = compiled
        return compiled


def read_query_source(lang: Lang) -> str:
    """Return the text of the packaged query for ``lang``."""
    path = QUERIES_DIR / f"{lang.value}.scm"
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise GrammarInitError(f"{path.name} not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise GrammarInitError(f"Can't read {path.name}: {exc}") from exc


def _language_locked(lang: Lang) -> Language:
    cached = _languages.get(lang)
    if cached is not None:
        return cached
    factory = _GRAMMARS.get(lang)
    if factory is None:
        raise GrammarInitError(f"No grammar available for {lang.value}")
    try:
        grammar = Language(factory())
    except Exception as exc:
        raise GrammarInitError(f"Can't load the {lang.value} grammar: {exc}") from exc
    _languages[lang] = grammar
    return grammar


__all__ = [
    "GrammarInitError",
    "QUERIES_DIR",
    "language",
    "query",
    "read_query_source",
]
