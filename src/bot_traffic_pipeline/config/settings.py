"""
Application settings and configuration management.

Supports loading from:
1. YAML pattern/config files (bot_patterns.yaml)
2. Environment variables (fallback)
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from .constants import (
    BOT_PATTERNS,
    CATEGORY_PATTERNS,
    DEFAULT_ENCODING,
    DEFAULT_MAX_WORKERS,
    DEFAULT_SAMPLE_SIZE,
    DEFAULT_TOP_N,
)

logger = logging.getLogger(__name__)


def _default_categories() -> dict[str, tuple[str, ...]]:
    return {name: tuple(patterns) for name, patterns in CATEGORY_PATTERNS.items()}


def _pattern_list(value: Any, key: str) -> tuple[str, ...]:
    """
    Normalize a YAML pattern entry to a tuple of strings.

    A single string is one pattern, not a sequence of characters.

    Raises:
        ValueError: If the value is neither a string nor a list of strings
    """
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)) or not all(
        isinstance(item, str) for item in value
    ):
        raise ValueError(f"{key} must be a string or a list of strings")
    return tuple(value)


@dataclass
class Settings:
    """Settings for a bot traffic analysis run."""

    # Analysis options
    sample_size: int = DEFAULT_SAMPLE_SIZE
    top_n: int = DEFAULT_TOP_N
    max_workers: int = DEFAULT_MAX_WORKERS
    encoding: str = DEFAULT_ENCODING

    # Pattern policy (ordered)
    bot_patterns: tuple[str, ...] = BOT_PATTERNS
    category_patterns: dict[str, tuple[str, ...]] = field(
        default_factory=_default_categories
    )

    def validate(self) -> list[str]:
        """Validate settings values. Returns list of errors."""
        errors = []

        if self.sample_size < 1:
            errors.append(f"sample_size must be >= 1, got {self.sample_size}")
        if self.top_n < 0:
            errors.append(f"top_n must be >= 0, got {self.top_n}")
        if self.max_workers < 1:
            errors.append(f"max_workers must be >= 1, got {self.max_workers}")
        if not self.encoding:
            errors.append("encoding must not be empty")
        if not self.bot_patterns:
            errors.append("bot_patterns must contain at least one pattern")

        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "analysis": {
                "sample_size": self.sample_size,
                "top_n": self.top_n,
                "max_workers": self.max_workers,
                "encoding": self.encoding,
            },
            "bot_patterns": list(self.bot_patterns),
            "categories": {
                name: list(patterns)
                for name, patterns in self.category_patterns.items()
            },
        }

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "Settings":
        """
        Create Settings from a configuration dictionary (e.g., from YAML).

        'bot_patterns' replaces the default pattern set,
        'extra_bot_patterns' is appended to whichever set applies, and
        'categories' replaces the default category groups. A pattern
        entry may be a single string or a list of strings.

        Raises:
            ValueError: If a value has the wrong type
        """
        analysis = config.get("analysis") or {}

        bot_patterns = _pattern_list(config.get("bot_patterns"), "bot_patterns")
        bot_patterns = bot_patterns or BOT_PATTERNS
        extra = _pattern_list(config.get("extra_bot_patterns"), "extra_bot_patterns")
        bot_patterns = bot_patterns + tuple(p for p in extra if p not in bot_patterns)

        categories = config.get("categories")
        if categories:
            if not isinstance(categories, dict):
                raise ValueError("categories must be a mapping of name to patterns")
            category_patterns = {
                str(name): _pattern_list(patterns, f"categories.{name}")
                for name, patterns in categories.items()
            }
        else:
            category_patterns = _default_categories()

        return cls(
            sample_size=int(analysis.get("sample_size", DEFAULT_SAMPLE_SIZE)),
            top_n=int(analysis.get("top_n", DEFAULT_TOP_N)),
            max_workers=int(analysis.get("max_workers", DEFAULT_MAX_WORKERS)),
            encoding=str(analysis.get("encoding", DEFAULT_ENCODING)),
            bot_patterns=bot_patterns,
            category_patterns=category_patterns,
        )

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""

        def safe_int(key: str, default: int) -> int:
            """Safely parse int from env var, using default on error."""
            try:
                return int(os.environ.get(key, str(default)))
            except ValueError:
                return default

        return cls(
            sample_size=safe_int("BOT_STATS_SAMPLE_SIZE", DEFAULT_SAMPLE_SIZE),
            top_n=safe_int("BOT_STATS_TOP_N", DEFAULT_TOP_N),
            max_workers=safe_int("BOT_STATS_MAX_WORKERS", DEFAULT_MAX_WORKERS),
            encoding=os.environ.get("BOT_STATS_ENCODING", DEFAULT_ENCODING),
        )


# Default config file path
DEFAULT_CONFIG_PATH = Path("bot_patterns.yaml")


@lru_cache
def get_settings(config_path: Optional[str] = None) -> Settings:
    """
    Get cached settings instance.

    An explicit config_path must load. Without one, bot_patterns.yaml in
    the working directory is used if present, otherwise env vars.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If config_path is missing or invalid
    """
    from ..ingestion.exceptions import ConfigurationError
    from .loader import load_yaml_config

    if config_path:
        try:
            return Settings.from_dict(load_yaml_config(config_path))
        except (ValueError, TypeError, AttributeError) as e:
            raise ConfigurationError(
                "Invalid configuration values",
                config_path=str(config_path),
                reason=str(e),
            ) from e

    if DEFAULT_CONFIG_PATH.exists():
        try:
            return Settings.from_dict(load_yaml_config(DEFAULT_CONFIG_PATH))
        except (ConfigurationError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Failed to load config from {DEFAULT_CONFIG_PATH}: {e}")
            logger.warning("Falling back to environment variables")

    return Settings.from_env()


def clear_settings_cache() -> None:
    """Clear the cached settings (useful for testing)."""
    get_settings.cache_clear()
