"""Rust function extraction."""

from __future__ import annotations

from ..models import Lang
from .base import Container, Extractor, LanguageSpec

RUST = LanguageSpec(lang=Lang.RUST, label="Rust")


def rust_extractor(container: Container | None = None) -> Extractor:
    return Extractor(RUST, container)


__all__ = ["RUST", "rust_extractor"]
