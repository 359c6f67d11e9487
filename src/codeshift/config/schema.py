"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

LogLevel = Literal["debug", "info", "warning", "error"]
OutputFormat = Literal["terminal", "json"]

OUTPUT_FORMATS = ("terminal", "json")

LOG_LEVELS: dict[str, int] = {
    "debug": 10,
    "info": 20,
    "warning": 30,
    "error": 40,
}


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True
    show_tokens: bool = False  # print group boundaries in the terminal table


@dataclass
class PlanConfig:
    lang: str = ""  # default language hint when --lang is not given


@dataclass
class CacheConfig:
    max_entries: int = 32


@dataclass
class LoggingConfig:
    level: LogLevel = "warning"


@dataclass
class CodeShiftConfig:
    version: str = "1.0"
    output: OutputConfig = field(default_factory=OutputConfig)
    plan: PlanConfig = field(default_factory=PlanConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
