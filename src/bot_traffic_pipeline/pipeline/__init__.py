"""Bot traffic analysis pipeline module."""

from .aggregator import Aggregator, GlobalStats
from .analysis_pipeline import AnalysisPipeline, AnalysisResult, setup_logging
from .file_processor import FileProcessor, FileStats, bot_percentage, rank_bots

__all__ = [
    # Per-file processing
    "FileProcessor",
    "FileStats",
    "bot_percentage",
    "rank_bots",
    # Aggregation
    "Aggregator",
    "GlobalStats",
    # Pipeline
    "AnalysisPipeline",
    "AnalysisResult",
    "setup_logging",
]
