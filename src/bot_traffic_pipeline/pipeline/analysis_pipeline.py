"""
Multi-file bot traffic analysis pipeline.

Runs the FileProcessor over a list of log files (optionally on a bounded
thread pool), merges the per-file results into GlobalStats and derives
category totals for reporting.
"""

import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Union

from ..config.settings import Settings
from ..reporting.categorizer import Categorizer, CategoryStats
from ..utils.bot_classifier import BotClassifier
from .aggregator import Aggregator, GlobalStats
from .file_processor import FileProcessor, FileStats

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure root logging for scripts."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


@dataclass
class AnalysisResult:
    """Result of an analysis run."""

    file_stats: list[FileStats] = field(default_factory=list)
    global_stats: GlobalStats = field(default_factory=GlobalStats)
    categories: list[CategoryStats] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now().astimezone())
    completed_at: Optional[datetime] = None

    @property
    def duration_seconds(self) -> Optional[float]:
        """Get run duration in seconds."""
        if self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    @property
    def is_empty(self) -> bool:
        """True when no files were given."""
        return not self.file_stats

    def to_dict(self, top_n: int = 10) -> dict:
        """Convert to dictionary for logging/serialization."""
        return {
            "started_at": self.started_at.isoformat(),
            "completed_at": (
                self.completed_at.isoformat() if self.completed_at else None
            ),
            "duration_seconds": self.duration_seconds,
            "global": self.global_stats.to_dict(top_n=top_n),
            "categories": [category.to_dict() for category in self.categories],
            "files": [stats.to_dict() for stats in self.file_stats],
        }


class AnalysisPipeline:
    """
    Bot traffic analysis over many log files.

    Pipeline stages:
    1. Process: one FileStats per file (parallel across files)
    2. Aggregate: merge FileStats into GlobalStats
    3. Categorize: derive CategoryStats from GlobalStats

    Usage:
        pipeline = AnalysisPipeline.from_settings(get_settings())
        result = pipeline.run(["access.log", "u_ex240101.log"])
    """

    def __init__(
        self,
        processor: Optional[FileProcessor] = None,
        categorizer: Optional[Categorizer] = None,
        max_workers: int = 4,
    ):
        """
        Initialize the pipeline.

        Args:
            processor: Per-file processor (defaults if omitted)
            categorizer: Post-pass categorizer (defaults if omitted)
            max_workers: Worker threads; 1 processes files sequentially
        """
        self.processor = processor or FileProcessor()
        self.categorizer = categorizer or Categorizer()
        self.max_workers = max(1, max_workers)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalysisPipeline":
        """
        Build a pipeline from Settings.

        Raises:
            ValueError: If settings fail validation
            PatternConfigError: If a configured pattern does not compile
        """
        errors = settings.validate()
        if errors:
            raise ValueError(f"Invalid settings: {'; '.join(errors)}")

        processor = FileProcessor(
            classifier=BotClassifier(settings.bot_patterns),
            sample_size=settings.sample_size,
            top_n=settings.top_n,
            encoding=settings.encoding,
        )
        return cls(
            processor=processor,
            categorizer=Categorizer(settings.category_patterns),
            max_workers=settings.max_workers,
        )

    def run(self, file_paths: Iterable[Union[str, Path]]) -> AnalysisResult:
        """
        Analyze a set of log files.

        Unreadable files contribute zero-record FileStats; no single file
        can abort the run. An empty input yields zero totals.

        Args:
            file_paths: Paths of plain or gzip text log files

        Returns:
            AnalysisResult with per-file, global and category statistics
        """
        paths = list(file_paths)
        result = AnalysisResult()

        if not paths:
            logger.warning("No log files to analyze")
            result.categories = self.categorizer.categorize(result.global_stats)
            result.completed_at = datetime.now().astimezone()
            return result

        logger.info(
            f"Analyzing {len(paths)} file(s) with {self.max_workers} worker(s)"
        )

        result.file_stats = self.process_files(paths)

        aggregator = Aggregator().merge_all(result.file_stats)
        result.global_stats = aggregator.result()
        result.categories = self.categorizer.categorize(result.global_stats)
        result.completed_at = datetime.now().astimezone()

        stats = result.global_stats
        logger.info(
            f"Analysis complete: {stats.bot_requests:,}/{stats.total_requests:,} "
            f"bot requests ({stats.bot_percentage}%), "
            f"{stats.unique_bot_count:,} unique bots, "
            f"{stats.files_failed} file(s) failed, "
            f"{result.duration_seconds:.1f}s"
        )
        return result

    def process_files(self, paths: list[Union[str, Path]]) -> list[FileStats]:
        """Process files, returning FileStats in input order."""
        if self.max_workers == 1 or len(paths) == 1:
            return [self.processor.process(path) for path in paths]

        workers = min(self.max_workers, len(paths))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self.processor.process, paths))
