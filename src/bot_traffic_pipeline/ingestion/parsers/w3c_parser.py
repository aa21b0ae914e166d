"""
IIS W3C Extended Log Format user-agent extraction.

W3C Extended Log Format (IIS default field layout):
    #Software: Microsoft Internet Information Services 10.0
    #Fields: date time s-ip cs-method cs-uri-stem cs-uri-query s-port cs-username c-ip cs(User-Agent) cs(Referer) sc-status sc-substatus sc-win32-status time-taken
    2024-01-15 12:30:45 10.0.0.1 GET / - 443 - 192.0.2.100 Mozilla/5.0+(compatible;+bingbot/2.0) - 200 0 0 15

IIS encodes spaces in the user-agent as '+' and escapes reserved
characters with %XX sequences.
"""

import logging
import urllib.parse
from typing import Optional

from ...config.constants import IIS_MAX_TOKENS, IIS_USER_AGENT_INDEX
from ..base import LogFormat, UserAgentExtractor
from ..registry import ExtractorRegistry

logger = logging.getLogger(__name__)


def decode_w3c_value(value: str) -> str:
    """
    Decode an IIS-encoded field value.

    '+' is replaced with a space first, then %XX sequences are decoded.
    Invalid byte sequences are replaced rather than rejected.
    """
    return urllib.parse.unquote(value.replace("+", " "), errors="replace")


@ExtractorRegistry.register(LogFormat.IIS)
class W3CUserAgentExtractor(UserAgentExtractor):
    """
    Extract the user-agent from IIS W3C extended log lines.

    The line is split on whitespace into at most IIS_MAX_TOKENS tokens and
    the field at IIS_USER_AGENT_INDEX is decoded.

    Usage:
        extractor = W3CUserAgentExtractor()
        ua = extractor.extract(line)
    """

    def __init__(
        self,
        user_agent_index: int = IIS_USER_AGENT_INDEX,
        max_tokens: int = IIS_MAX_TOKENS,
        url_decode: bool = True,
    ):
        """
        Initialize W3C extractor.

        Args:
            user_agent_index: 0-based field index of cs(User-Agent)
            max_tokens: Upper bound on the number of split tokens
            url_decode: If True, decode '+' and %XX sequences
        """
        self.user_agent_index = user_agent_index
        self.max_tokens = max_tokens
        self.url_decode = url_decode

    @property
    def log_format(self) -> LogFormat:
        return LogFormat.IIS

    def extract(self, line: str) -> Optional[str]:
        if line.lstrip().startswith("#"):
            return None

        fields = line.split(maxsplit=self.max_tokens - 1)
        if len(fields) <= self.user_agent_index:
            logger.debug(f"Skipping W3C row with {len(fields)} fields")
            return None

        raw_value = fields[self.user_agent_index]
        if not self.url_decode:
            return raw_value
        return decode_w3c_value(raw_value)
