"""
Ingestion layer: log format detection and user-agent extraction.

Usage:
    from bot_traffic_pipeline.ingestion import (
        FormatDetector,
        build_format_sample,
        get_extractor,
        open_file_auto_decompress,
    )

    with open_file_auto_decompress(path) as f:
        log_format = FormatDetector().detect(build_format_sample(f))

    extractor = get_extractor(log_format)
    user_agent = extractor.extract(line)
"""

from .base import LogFormat, UserAgentExtractor
from .exceptions import (
    AnalysisError,
    ConfigurationError,
    ExtractorNotFoundError,
    PatternConfigError,
)
from .file_utils import build_format_sample, is_content_line, open_file_auto_decompress
from .format_detection import DEFAULT_FORMAT_RULES, FormatDetector, FormatRule
from .parsers import ApacheUserAgentExtractor, W3CUserAgentExtractor, decode_w3c_value
from .registry import ExtractorRegistry, get_extractor, list_formats, register_extractor

__all__ = [
    # Base classes and data models
    "LogFormat",
    "UserAgentExtractor",
    # Format detection
    "FormatDetector",
    "FormatRule",
    "DEFAULT_FORMAT_RULES",
    # Extractors
    "ApacheUserAgentExtractor",
    "W3CUserAgentExtractor",
    "decode_w3c_value",
    # Registry functions
    "ExtractorRegistry",
    "get_extractor",
    "register_extractor",
    "list_formats",
    # Exceptions
    "AnalysisError",
    "ConfigurationError",
    "ExtractorNotFoundError",
    "PatternConfigError",
    # File utilities
    "open_file_auto_decompress",
    "build_format_sample",
    "is_content_line",
]
