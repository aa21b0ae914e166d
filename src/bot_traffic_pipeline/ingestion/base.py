"""
Abstract base class and data models for user-agent extraction.

Provides the log format enumeration and the interface every
format-specific field extractor implements.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional


class LogFormat(str, Enum):
    """Line grammar of an access-log file."""

    APACHE = "apache"
    IIS = "iis"
    UNKNOWN = "unknown"


class UserAgentExtractor(ABC):
    """
    Abstract base class for format-specific user-agent extractors.

    Each supported log format implements this interface to pull the
    user-agent field out of a single data line.

    Subclasses must implement:
        - log_format: Property returning the LogFormat handled
        - extract(): Return the user-agent or None

    Example Implementation:
        @ExtractorRegistry.register(LogFormat.APACHE)
        class ApacheUserAgentExtractor(UserAgentExtractor):
            @property
            def log_format(self) -> LogFormat:
                return LogFormat.APACHE

            def extract(self, line):
                ...
    """

    @property
    @abstractmethod
    def log_format(self) -> LogFormat:
        """
        Return the log format handled by this extractor.

        This is used for registry lookup and logging.
        """
        pass

    @abstractmethod
    def extract(self, line: str) -> Optional[str]:
        """
        Extract the user-agent from one data line.

        Args:
            line: Raw log line (trailing newline allowed)

        Returns:
            The user-agent string, or None when the line does not yield one
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(log_format={self.log_format.value!r})"
