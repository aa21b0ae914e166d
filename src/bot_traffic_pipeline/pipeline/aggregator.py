"""
Cross-file aggregation of bot traffic statistics.

Merging is plain addition of totals and per-user-agent counts, so
files may be merged in any order and from any thread.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Iterable

from .file_processor import FileStats, bot_percentage, rank_bots

logger = logging.getLogger(__name__)


@dataclass
class GlobalStats:
    """
    Totals across all processed files.

    Invariant: for every user-agent key, bot_counts[key] equals the sum
    of that key's per-file counts.
    """

    total_requests: int = 0
    bot_requests: int = 0
    bot_counts: dict[str, int] = field(default_factory=dict)
    files_processed: int = 0
    files_failed: int = 0

    @property
    def bot_percentage(self) -> float:
        return bot_percentage(self.bot_requests, self.total_requests)

    @property
    def unique_bot_count(self) -> int:
        return len(self.bot_counts)

    def top_bots(self, n: int = 10) -> list[tuple[str, int]]:
        """Most frequent bot user-agents, count descending."""
        return list(rank_bots(self.bot_counts, n))

    def add(self, file_stats: FileStats) -> None:
        """Add one file's statistics in place."""
        self.total_requests += file_stats.total_requests
        self.bot_requests += file_stats.bot_requests
        for user_agent, count in file_stats.bot_counts.items():
            self.bot_counts[user_agent] = self.bot_counts.get(user_agent, 0) + count
        self.files_processed += 1
        if file_stats.failed:
            self.files_failed += 1

    def combine(self, other: "GlobalStats") -> "GlobalStats":
        """Return a new GlobalStats holding the sum of self and other."""
        bot_counts = dict(self.bot_counts)
        for user_agent, count in other.bot_counts.items():
            bot_counts[user_agent] = bot_counts.get(user_agent, 0) + count
        return GlobalStats(
            total_requests=self.total_requests + other.total_requests,
            bot_requests=self.bot_requests + other.bot_requests,
            bot_counts=bot_counts,
            files_processed=self.files_processed + other.files_processed,
            files_failed=self.files_failed + other.files_failed,
        )

    def copy(self) -> "GlobalStats":
        return GlobalStats(
            total_requests=self.total_requests,
            bot_requests=self.bot_requests,
            bot_counts=dict(self.bot_counts),
            files_processed=self.files_processed,
            files_failed=self.files_failed,
        )

    def to_dict(self, top_n: int = 10) -> dict:
        """Convert to dictionary for logging/serialization."""
        return {
            "total_requests": self.total_requests,
            "bot_requests": self.bot_requests,
            "bot_percentage": self.bot_percentage,
            "unique_bot_count": self.unique_bot_count,
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "top_bots": [
                {"user_agent": user_agent, "count": count}
                for user_agent, count in self.top_bots(top_n)
            ],
        }


class Aggregator:
    """
    Thread-safe accumulator of FileStats into GlobalStats.

    Usage:
        aggregator = Aggregator()
        for stats in file_stats:
            aggregator.merge(stats)
        global_stats = aggregator.result()
    """

    def __init__(self):
        self._stats = GlobalStats()
        self._lock = threading.Lock()

    def merge(self, file_stats: FileStats) -> None:
        """Merge one file's statistics (safe to call from worker threads)."""
        with self._lock:
            self._stats.add(file_stats)
        logger.debug(
            f"Merged {file_stats.file_name}: +{file_stats.bot_requests} bot requests"
        )

    def merge_all(self, file_stats: Iterable[FileStats]) -> "Aggregator":
        for stats in file_stats:
            self.merge(stats)
        return self

    def result(self) -> GlobalStats:
        """Snapshot of the accumulated totals."""
        with self._lock:
            return self._stats.copy()
