"""
Log format detection from a sample of file lines.

Detection is an ordered list of rules evaluated against the first
sample line. The first matching rule decides the format; when no rule
matches, the detector's default applies.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..config.constants import IIS_METADATA_MARKERS, IIS_MIN_FIELDS
from .base import LogFormat

logger = logging.getLogger(__name__)

_IPV4_PREFIX = re.compile(r"^\d{1,3}(?:\.\d{1,3}){3}\s")
_QUOTED_SUBSTRING = re.compile(r'"[^"]*"')
_W3C_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_W3C_TIME = re.compile(r"^\d{2}:\d{2}:\d{2}$")


@dataclass(frozen=True)
class FormatRule:
    """A named predicate on a line and the format it implies."""

    name: str
    predicate: Callable[[str], bool]
    log_format: LogFormat

    def matches(self, line: str) -> bool:
        return self.predicate(line)


def has_iis_metadata_marker(line: str) -> bool:
    """Line starts with an IIS header directive (#Software, #Fields, ...)."""
    return line.startswith(IIS_METADATA_MARKERS)


def looks_like_common_log(line: str) -> bool:
    """Line begins with an IPv4-shaped token and contains a quoted substring."""
    return bool(_IPV4_PREFIX.match(line)) and bool(_QUOTED_SUBSTRING.search(line))


def looks_like_w3c_row(line: str) -> bool:
    """Line has enough fields and starts with a W3C date and time."""
    fields = line.split()
    if len(fields) < IIS_MIN_FIELDS:
        return False
    return bool(_W3C_DATE.match(fields[0])) and bool(_W3C_TIME.match(fields[1]))


DEFAULT_FORMAT_RULES: tuple[FormatRule, ...] = (
    FormatRule("iis_metadata", has_iis_metadata_marker, LogFormat.IIS),
    FormatRule("common_log", looks_like_common_log, LogFormat.APACHE),
    FormatRule("w3c_row", looks_like_w3c_row, LogFormat.IIS),
)


class FormatDetector:
    """
    Decide which line grammar applies to a file.

    Usage:
        detector = FormatDetector()
        log_format = detector.detect(sample_lines)

        # Support a new format by adding a rule
        detector = FormatDetector(
            rules=(my_rule, *DEFAULT_FORMAT_RULES),
        )
    """

    def __init__(
        self,
        rules: Sequence[FormatRule] = DEFAULT_FORMAT_RULES,
        default: LogFormat = LogFormat.APACHE,
    ):
        """
        Initialize format detector.

        Args:
            rules: Rules in priority order (first match wins)
            default: Format returned when no rule matches
        """
        self.rules = tuple(rules)
        self.default = default

    def detect(self, sample: Sequence[str]) -> LogFormat:
        """
        Detect the log format of a file from its sample lines.

        Args:
            sample: Up to N leading content lines of the file

        Returns:
            Detected LogFormat; LogFormat.UNKNOWN for an empty sample
        """
        if not sample:
            return LogFormat.UNKNOWN

        first_line = sample[0].strip()
        rule = self.matching_rule(first_line)
        if rule is None:
            logger.debug(f"No format rule matched, using default {self.default.value}")
            return self.default

        logger.debug(f"Format rule '{rule.name}' matched -> {rule.log_format.value}")
        return rule.log_format

    def matching_rule(self, line: str) -> Optional[FormatRule]:
        """Return the first rule matching the line, or None."""
        for rule in self.rules:
            if rule.matches(line):
                return rule
        return None
