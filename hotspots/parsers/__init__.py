"""Language-aware function extractors."""

from __future__ import annotations

from typing import List

from .base import Container, Extractor, LanguageSpec
from .errors import NoFilesAddedError, NotCompatibleError, ParseFileError, ParserError
from .go import GO, go_extractor
from .grammars import GrammarInitError
from .lua import LUA, lua_extractor
from .rust import RUST, rust_extractor

# Extraction order used by the pipeline; it decides how ties are ranked.
LANGUAGE_ORDER = (GO, RUST, LUA)


def build_extractors(capacity: int = 100) -> List[Extractor]:
    """Return one extractor per supported language, each with its own container."""
    return [Extractor(spec, Container(capacity=capacity)) for spec in LANGUAGE_ORDER]


__all__ = [
    "Container",
    "Extractor",
    "GO",
    "GrammarInitError",
    "LANGUAGE_ORDER",
    "LUA",
    "LanguageSpec",
    "NoFilesAddedError",
    "NotCompatibleError",
    "ParseFileError",
    "ParserError",
    "RUST",
    "build_extractors",
    "go_extractor",
    "lua_extractor",
    "rust_extractor",
]
