"""Configuration package for ClawAPI."""

from clawapi.core.config.config import Config
from clawapi.core.config.validation import ConfigError, validate_all

__all__ = ["Config", "ConfigError", "validate_all"]
