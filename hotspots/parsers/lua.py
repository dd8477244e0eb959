"""Lua function extraction."""

from __future__ import annotations

from ..models import Lang
from .base import Container, Extractor, LanguageSpec

LUA = LanguageSpec(lang=Lang.LUA, label="Lua")


def lua_extractor(container: Container | None = None) -> Extractor:
    return Extractor(LUA, container)


__all__ = ["LUA", "lua_extractor"]
