"""Core data models shared across hotspots components."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Lang(Enum):
    """Languages the extractors understand."""

    GO = "go"
    RUST = "rust"
    LUA = "lua"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "Lang":
        """Map a detection tag onto a language, defaulting to UNSUPPORTED."""
        if tag is None:
            return cls.UNSUPPORTED
        try:
            lang = cls(tag.lower())
        except ValueError:
            return cls.UNSUPPORTED
        return lang


@dataclass(frozen=True)
class FileRef:
    """A discovered file and the language it was classified as."""

    path: str
    lang: Lang


@dataclass
class Element:
    """A function or method found in a source file."""

    name: str
    file: str
    line: int
    group: int = 0


@dataclass(frozen=True)
class ReportRow:
    """One ranked row of the hotspot report."""

    file: str
    line: int
    name: str
    freq: int

    def as_tuple(self) -> tuple:
        return (self.file, self.line, self.name, self.freq)

