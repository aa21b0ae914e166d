"""
Format-specific user-agent extractors.

Importing this package registers every built-in extractor with the
ExtractorRegistry.
"""

from .apache_parser import ApacheUserAgentExtractor
from .w3c_parser import W3CUserAgentExtractor, decode_w3c_value

__all__ = [
    "ApacheUserAgentExtractor",
    "W3CUserAgentExtractor",
    "decode_w3c_value",
]
