"""
Bot classification from user-agent strings.

Tests user-agent strings against an ordered, externally supplied set of
case-insensitive patterns to flag automated traffic.
"""

import logging
import re
from typing import Iterable, Optional, Sequence

from ..config.constants import BOT_PATTERNS, HTTP_METHOD_TOKENS
from ..ingestion.exceptions import PatternConfigError

logger = logging.getLogger(__name__)


def compile_patterns(patterns: Iterable[str]) -> tuple[re.Pattern, ...]:
    """
    Compile patterns case-insensitively, preserving order.

    Args:
        patterns: Substrings or regular expressions

    Returns:
        Tuple of compiled patterns

    Raises:
        PatternConfigError: If a pattern is not a valid regular expression
    """
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern, re.IGNORECASE))
        except re.error as e:
            raise PatternConfigError(pattern, reason=str(e)) from e
    return tuple(compiled)


def is_usable_user_agent(user_agent: Optional[str]) -> bool:
    """
    Check whether an extracted user-agent should be classified at all.

    None, empty, '-' and values that start with an HTTP method token
    (a request line picked up by mistake) are not usable.

    Examples:
        >>> is_usable_user_agent("Mozilla/5.0")
        True
        >>> is_usable_user_agent("-")
        False
        >>> is_usable_user_agent("GET /index.html HTTP/1.1")
        False
    """
    if not user_agent:
        return False

    stripped = user_agent.strip()
    if not stripped or stripped == "-":
        return False

    first_token = stripped.split(maxsplit=1)[0]
    return first_token not in HTTP_METHOD_TOKENS


class BotClassifier:
    """
    Heuristic bot detector over an ordered pattern set.

    Matching is case-insensitive and stops at the first pattern that
    matches; the matching pattern is not reported.

    Usage:
        classifier = BotClassifier()
        classifier.is_bot("Mozilla/5.0 (compatible; bingbot/2.0)")  # True

        # Synthetic pattern sets for tests or custom policies
        classifier = BotClassifier(patterns=["mycrawler", r"probe/\\d+"])
    """

    def __init__(self, patterns: Sequence[str] = BOT_PATTERNS):
        """
        Initialize classifier.

        Args:
            patterns: Ordered substrings / regular expressions

        Raises:
            PatternConfigError: If a pattern does not compile
        """
        self.patterns = tuple(patterns)
        self._compiled = compile_patterns(self.patterns)
        logger.debug(f"BotClassifier initialized with {len(self.patterns)} patterns")

    def __len__(self) -> int:
        return len(self.patterns)

    def is_bot(self, user_agent: Optional[str]) -> bool:
        """
        Check if a user-agent matches any bot pattern.

        Unusable values (None, '-', request lines) are never bots.

        Args:
            user_agent: The HTTP User-Agent value

        Returns:
            True on the first matching pattern
        """
        if not is_usable_user_agent(user_agent):
            return False

        for pattern in self._compiled:
            if pattern.search(user_agent):
                return True
        return False
