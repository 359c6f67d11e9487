"""Configuration loading, schema, and defaults."""

from codeshift.config.loader import ConfigError, load_config
from codeshift.config.schema import LOG_LEVELS, OUTPUT_FORMATS, CodeShiftConfig

__all__ = [
    "LOG_LEVELS",
    "OUTPUT_FORMATS",
    "CodeShiftConfig",
    "ConfigError",
    "load_config",
]
