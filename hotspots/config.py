"""Configuration loading for hotspots (.hotspots.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".hotspots.yml"

DEFAULT_TOTAL = 50
DEFAULT_SKIP = 0


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class HotspotsConfig:
    """Represents the settings defined in .hotspots.yml."""

    root: Path
    total: int = DEFAULT_TOTAL
    skip: int = DEFAULT_SKIP
    prefixes: List[str] = field(default_factory=list)
    invert_match: List[str] = field(default_factory=list)
    exclude_func: List[str] = field(default_factory=list)
    git: str = "git"
    workers: Optional[int] = None

    def merged(
        self,
        *,
        total: Optional[int] = None,
        skip: Optional[int] = None,
        prefixes: Sequence[str] = (),
        invert_match: Sequence[str] = (),
        exclude_func: Sequence[str] = (),
    ) -> "HotspotsConfig":
        """Return a copy with command-line values layered on top."""
        return HotspotsConfig(
            root=self.root,
            total=self.total if total is None else total,
            skip=self.skip if skip is None else skip,
            prefixes=[*self.prefixes, *prefixes],
            invert_match=[*self.invert_match, *invert_match],
            exclude_func=[*self.exclude_func, *exclude_func],
            git=self.git,
            workers=self.workers,
        )


def load_config(config_path: Path) -> HotspotsConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return HotspotsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = HotspotsConfig(root=root)
    total = _as_int(data.get("total"))
    if total is not None and total >= 0:
        config.total = total
    skip = _as_int(data.get("skip"))
    if skip is not None and skip >= 0:
        config.skip = skip
    config.prefixes = _as_str_list(data.get("prefixes"))
    config.invert_match = _as_str_list(data.get("invert_match"))
    config.exclude_func = _as_str_list(data.get("exclude_func"))
    config.git = _as_str(data.get("git")) or "git"
    workers = _as_int(data.get("workers"))
    config.workers = workers if workers is not None and workers > 0 else None
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
