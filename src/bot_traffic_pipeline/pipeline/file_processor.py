"""
Per-file processing: format detection, extraction and bot counting.

Each file is processed independently and produces an immutable FileStats
value. No state is shared between files; merging into global totals is
done by the Aggregator.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from ..config.constants import DEFAULT_ENCODING, DEFAULT_SAMPLE_SIZE, DEFAULT_TOP_N
from ..ingestion.base import LogFormat, UserAgentExtractor
from ..ingestion.file_utils import (
    build_format_sample,
    is_content_line,
    open_file_auto_decompress,
)
from ..ingestion.exceptions import ExtractorNotFoundError
from ..ingestion.format_detection import FormatDetector
from ..ingestion.registry import ExtractorRegistry

# Import parsers to ensure built-in extractors are registered
from ..ingestion.parsers import (  # noqa: F401
    ApacheUserAgentExtractor,
    W3CUserAgentExtractor,
)
from ..utils.bot_classifier import BotClassifier, is_usable_user_agent

logger = logging.getLogger(__name__)


def bot_percentage(bot_requests: int, total_requests: int) -> float:
    """Share of bot requests in percent, rounded to 2 decimals (0.0 if empty)."""
    if total_requests <= 0:
        return 0.0
    return round(bot_requests / total_requests * 100, 2)


def rank_bots(bot_counts: Mapping[str, int], top_n: int) -> tuple[tuple[str, int], ...]:
    """
    Rank user-agents by hit count, highest first.

    Ties keep the mapping's insertion order, i.e. first-seen order.
    """
    ranked = sorted(bot_counts.items(), key=lambda item: item[1], reverse=True)
    return tuple(ranked[:top_n])


@dataclass(frozen=True)
class FileStats:
    """
    Bot traffic statistics for a single log file.

    Invariant: 0 <= bot_requests <= total_requests.

    Attributes:
        file_name: Path of the processed file, as given
        format: Detected log format (UNKNOWN for empty/unreadable files)
        total_requests: Non-blank, non-comment lines
        bot_requests: Lines whose user-agent matched a bot pattern
        bot_percentage: bot_requests / total_requests * 100, 2 decimals
        unique_bot_count: Distinct bot user-agent strings
        top_bots: Top entries as (user_agent, count), count descending
        bot_counts: Hits per exact bot user-agent string
        error: Read error message when the file could not be processed
    """

    file_name: str
    format: LogFormat
    total_requests: int = 0
    bot_requests: int = 0
    bot_percentage: float = 0.0
    unique_bot_count: int = 0
    top_bots: tuple[tuple[str, int], ...] = ()
    # Read-only view, excluded from the hash
    bot_counts: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    error: Optional[str] = None

    @classmethod
    def from_counts(
        cls,
        file_name: str,
        log_format: LogFormat,
        total_requests: int,
        bot_counts: dict[str, int],
        top_n: int = DEFAULT_TOP_N,
    ) -> "FileStats":
        """Build FileStats, deriving every computed field from the bot map."""
        bot_requests = sum(bot_counts.values())
        frozen_counts = MappingProxyType(dict(bot_counts))
        return cls(
            file_name=file_name,
            format=log_format,
            total_requests=total_requests,
            bot_requests=bot_requests,
            bot_percentage=bot_percentage(bot_requests, total_requests),
            unique_bot_count=len(frozen_counts),
            top_bots=rank_bots(frozen_counts, top_n),
            bot_counts=frozen_counts,
        )

    @classmethod
    def empty(
        cls,
        file_name: str,
        log_format: LogFormat = LogFormat.UNKNOWN,
        error: Optional[str] = None,
    ) -> "FileStats":
        """Zero-record stats for an empty or unreadable file."""
        return cls(file_name=file_name, format=log_format, error=error)

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/serialization."""
        return {
            "file_name": self.file_name,
            "format": self.format.value,
            "total_requests": self.total_requests,
            "bot_requests": self.bot_requests,
            "bot_percentage": self.bot_percentage,
            "unique_bot_count": self.unique_bot_count,
            "top_bots": [
                {"user_agent": user_agent, "count": count}
                for user_agent, count in self.top_bots
            ],
            "error": self.error,
        }


class FileProcessor:
    """
    Streams one log file and produces its FileStats.

    Pipeline per file:
    1. Sample: collect leading content lines
    2. Detect: choose the line grammar once
    3. Stream: extract and classify every data line

    Usage:
        processor = FileProcessor(BotClassifier())
        stats = processor.process("access.log")
    """

    def __init__(
        self,
        classifier: Optional[BotClassifier] = None,
        detector: Optional[FormatDetector] = None,
        extractors: Optional[Mapping[LogFormat, UserAgentExtractor]] = None,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        top_n: int = DEFAULT_TOP_N,
        encoding: str = DEFAULT_ENCODING,
    ):
        """
        Initialize the file processor.

        Args:
            classifier: Bot classifier (default pattern set if omitted)
            detector: Format detector (default rules if omitted)
            extractors: Per-format extractors; formats not listed here are
                        resolved through the ExtractorRegistry
            sample_size: Lines inspected for format detection
            top_n: Entries kept in FileStats.top_bots
            encoding: Text encoding of the log files
        """
        self.classifier = classifier or BotClassifier()
        self.detector = detector or FormatDetector()
        self.extractors: dict[LogFormat, UserAgentExtractor] = dict(extractors or {})
        self.sample_size = sample_size
        self.top_n = top_n
        self.encoding = encoding

    def get_extractor(self, log_format: LogFormat) -> UserAgentExtractor:
        """
        Return the extractor for a format, creating it on first use.

        Raises:
            ExtractorNotFoundError: If no extractor is registered for the format
        """
        if log_format not in self.extractors:
            self.extractors[log_format] = ExtractorRegistry.get_extractor(log_format)
        return self.extractors[log_format]

    def process(self, file_path: Union[str, Path]) -> FileStats:
        """
        Process a single log file.

        Read failures (permissions, decoding, corrupt gzip) are logged as
        warnings and produce a zero-record FileStats.

        Args:
            file_path: Path to a text (optionally gzip) log file

        Returns:
            FileStats for the file
        """
        file_name = str(file_path)

        try:
            return self._process(file_path, file_name)
        except (OSError, UnicodeDecodeError, EOFError) as e:
            logger.warning(f"Could not read {file_name}: {e}")
            return FileStats.empty(file_name, error=str(e))
        except ExtractorNotFoundError as e:
            logger.warning(f"Skipping {file_name}: {e}")
            return FileStats.empty(file_name, error=str(e))

    def _process(self, file_path: Union[str, Path], file_name: str) -> FileStats:
        with open_file_auto_decompress(file_path, self.encoding) as f:
            sample = build_format_sample(f, self.sample_size)

        log_format = self.detector.detect(sample)
        if log_format == LogFormat.UNKNOWN:
            logger.debug(f"{file_name}: no content lines, skipping")
            return FileStats.empty(file_name)

        extractor = self.get_extractor(log_format)
        total_requests = 0
        bot_counts: dict[str, int] = {}

        with open_file_auto_decompress(file_path, self.encoding) as f:
            for line in f:
                if not is_content_line(line):
                    continue

                total_requests += 1
                user_agent = extractor.extract(line.rstrip("\r\n"))
                if not is_usable_user_agent(user_agent):
                    continue

                if self.classifier.is_bot(user_agent):
                    bot_counts[user_agent] = bot_counts.get(user_agent, 0) + 1

        stats = FileStats.from_counts(
            file_name=file_name,
            log_format=log_format,
            total_requests=total_requests,
            bot_counts=bot_counts,
            top_n=self.top_n,
        )
        logger.debug(
            f"{file_name}: format={log_format.value}, "
            f"{stats.bot_requests}/{stats.total_requests} bot requests, "
            f"{stats.unique_bot_count} unique bots"
        )
        return stats
