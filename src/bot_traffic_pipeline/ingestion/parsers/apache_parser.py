"""
Apache / Nginx common log format user-agent extraction.

Common (combined) log format:
    127.0.0.1 - - [10/Oct/2024:00:00:00 +0000] "GET / HTTP/1.1" 200 512 "-" "Mozilla/5.0"

The quoted fields are, in order, the request line, the referer and the
user-agent. Some vendors append further quoted fields after the user-agent.
"""

import logging
import re
from typing import Optional, Sequence

from ...config.constants import APACHE_FALLBACK_TOKENS
from ..base import LogFormat, UserAgentExtractor
from ..registry import ExtractorRegistry

logger = logging.getLogger(__name__)

_QUOTED_FIELD = re.compile(r'"([^"]*)"')


@ExtractorRegistry.register(LogFormat.APACHE)
class ApacheUserAgentExtractor(UserAgentExtractor):
    """
    Extract the user-agent from Apache/Nginx access-log lines.

    Selection policy on the double-quoted substrings of a line:
    - 4 or more: the last one
    - exactly 3: the third one (referer missing)
    - otherwise: the first one containing a browser/bot token, if any

    Usage:
        extractor = ApacheUserAgentExtractor()
        ua = extractor.extract(line)
    """

    def __init__(self, fallback_tokens: Sequence[str] = APACHE_FALLBACK_TOKENS):
        """
        Initialize Apache extractor.

        Args:
            fallback_tokens: Case-sensitive tokens that mark a quoted
                substring as a user-agent when the layout is irregular
        """
        self.fallback_tokens = tuple(fallback_tokens)

    @property
    def log_format(self) -> LogFormat:
        return LogFormat.APACHE

    def extract(self, line: str) -> Optional[str]:
        quoted = _QUOTED_FIELD.findall(line)

        if len(quoted) >= 4:
            return quoted[-1]
        if len(quoted) == 3:
            return quoted[2]

        for candidate in quoted:
            if any(token in candidate for token in self.fallback_tokens):
                return candidate

        logger.debug(f"No user-agent found in line with {len(quoted)} quoted fields")
        return None
