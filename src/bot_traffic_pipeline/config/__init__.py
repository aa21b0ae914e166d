"""Configuration module."""

from .constants import (
    AI_BOT_PATTERNS,
    BOT_PATTERNS,
    CATEGORY_AI,
    CATEGORY_PATTERNS,
    CATEGORY_SEARCH,
    CATEGORY_SEO,
    DEFAULT_MAX_WORKERS,
    DEFAULT_SAMPLE_SIZE,
    DEFAULT_TOP_N,
)
from .loader import load_yaml_config
from .settings import Settings, clear_settings_cache, get_settings

__all__ = [
    # Analysis defaults
    "DEFAULT_SAMPLE_SIZE",
    "DEFAULT_TOP_N",
    "DEFAULT_MAX_WORKERS",
    # Pattern policy
    "BOT_PATTERNS",
    "AI_BOT_PATTERNS",
    "CATEGORY_PATTERNS",
    "CATEGORY_AI",
    "CATEGORY_SEARCH",
    "CATEGORY_SEO",
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Config loading
    "load_yaml_config",
]
