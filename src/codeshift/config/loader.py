"""Load .codeshift.toml (nearest one up the directory tree) and apply env overrides."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from codeshift.config.schema import (
    LOG_LEVELS,
    OUTPUT_FORMATS,
    CacheConfig,
    CodeShiftConfig,
    LoggingConfig,
    OutputConfig,
    PlanConfig,
)
from codeshift.errors import CodeShiftError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".codeshift.toml"

_SECTIONS = {
    "output": OutputConfig,
    "plan": PlanConfig,
    "cache": CacheConfig,
    "logging": LoggingConfig,
}


class ConfigError(CodeShiftError):
    """Raised when config is malformed or unreadable."""


def find_config_file(start: Path, override: Optional[str] = None) -> Optional[Path]:
    """Return *override*, else the nearest CONFIG_FILENAME in *start* or its parents."""
    if override:
        path = Path(override)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return path
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _section(raw: Dict[str, Any], name: str):
    """Instantiate one section dataclass; keys it does not declare are dropped."""
    cls = _SECTIONS[name]
    table = raw.get(name, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[{name}] must be a table")
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(table) - known)
    if unknown:
        logger.debug("ignoring unknown [%s] keys: %s", name, ", ".join(unknown))
    return cls(**{k: v for k, v in table.items() if k in known})


def _apply_env(cfg: CodeShiftConfig) -> None:
    """CODESHIFT_* variables win over the file. Invalid values are ignored."""
    fmt = os.environ.get("CODESHIFT_FORMAT")
    if fmt in OUTPUT_FORMATS:
        cfg.output.format = fmt  # type: ignore[assignment]

    level = (os.environ.get("CODESHIFT_LOG_LEVEL") or "").lower()
    if level in LOG_LEVELS:
        cfg.logging.level = level  # type: ignore[assignment]

    size = os.environ.get("CODESHIFT_CACHE_SIZE")
    if size and size.isdigit():
        cfg.cache.max_entries = int(size)


def _validate(cfg: CodeShiftConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Unknown output format: {cfg.output.format!r}")
    if cfg.logging.level not in LOG_LEVELS:
        raise ConfigError(f"Unknown log level: {cfg.logging.level!r}")
    if not isinstance(cfg.cache.max_entries, int) or cfg.cache.max_entries < 0:
        raise ConfigError(f"cache.max_entries must be a non-negative integer, got {cfg.cache.max_entries!r}")


def load_config(root: Path, config_override: Optional[str] = None) -> CodeShiftConfig:
    """Load, validate, and return a CodeShiftConfig for a run started in *root*."""
    path = find_config_file(root, config_override)

    if path is None:
        cfg = CodeShiftConfig()
    else:
        raw = _read_toml(path)
        cfg = CodeShiftConfig(
            version=str(raw.get("version", "1.0")),
            **{name: _section(raw, name) for name in _SECTIONS},
        )
        logger.debug("loaded config from %s", path)

    _validate(cfg)
    _apply_env(cfg)
    return cfg
