"""Go function and method extraction."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Tuple

from ..models import Element, Lang
from .base import Container, Extractor, LanguageSpec

RECEIVER_GROUP = 0


def join_receivers(elements: List[Element]) -> Tuple[List[Element], int]:
    """Fold each method receiver into the method name that follows it.

    ``(r *T)`` followed by ``Name`` becomes ``(*T) Name``. Receiver entries are
    dropped and counted as redacted; a receiver with no follower is discarded.
    """
    pending: Optional[str] = None
    redacted = 0
    result: List[Element] = []
    for element in elements:
        if element.group == RECEIVER_GROUP:
            pending = element.name
            redacted += 1
            continue
        if pending is not None:
            parts = pending.split(" ")
            receiver = parts[1] if len(parts) > 1 else pending[1:]
            element = replace(element, name=f"({receiver} {element.name}")
            pending = None
        result.append(element)
    return result, redacted


GO = LanguageSpec(lang=Lang.GO, label="Go", canonicalize=join_receivers)


def go_extractor(container: Container | None = None) -> Extractor:
    return Extractor(GO, container)


__all__ = ["GO", "go_extractor", "join_receivers"]
