"""
Tabular and JSON exports of analysis results.

Builds pandas DataFrames from FileStats, GlobalStats and CategoryStats
so report renderers can format them as text, CSV, Excel or JSON.
"""

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

import pandas as pd

from .categorizer import CategoryStats

if TYPE_CHECKING:
    from ..pipeline.aggregator import GlobalStats
    from ..pipeline.analysis_pipeline import AnalysisResult
    from ..pipeline.file_processor import FileStats

logger = logging.getLogger(__name__)

FILE_COLUMNS = [
    "file_name",
    "format",
    "total_requests",
    "bot_requests",
    "bot_percentage",
    "unique_bot_count",
    "error",
]
CATEGORY_COLUMNS = ["category_name", "total_hits", "percentage_of_bot_traffic"]
TOP_BOT_COLUMNS = ["rank", "user_agent", "count", "percentage_of_bot_traffic"]


def file_stats_to_dataframe(file_stats: Iterable["FileStats"]) -> pd.DataFrame:
    """One row per file, in processing order."""
    rows = []
    for stats in file_stats:
        row = stats.to_dict()
        rows.append({column: row[column] for column in FILE_COLUMNS})
    return pd.DataFrame(rows, columns=FILE_COLUMNS)


def categories_to_dataframe(categories: Iterable[CategoryStats]) -> pd.DataFrame:
    """One row per category, in configured order."""
    rows = [category.to_dict() for category in categories]
    return pd.DataFrame(rows, columns=CATEGORY_COLUMNS)


def top_bots_to_dataframe(
    global_stats: "GlobalStats", top_n: int = 10
) -> pd.DataFrame:
    """Most frequent bot user-agents across all files."""
    rows = []
    for rank, (user_agent, count) in enumerate(global_stats.top_bots(top_n), 1):
        share = (
            round(count / global_stats.bot_requests * 100, 2)
            if global_stats.bot_requests
            else 0.0
        )
        rows.append(
            {
                "rank": rank,
                "user_agent": user_agent,
                "count": count,
                "percentage_of_bot_traffic": share,
            }
        )
    return pd.DataFrame(rows, columns=TOP_BOT_COLUMNS)


def result_to_json(
    result: "AnalysisResult", top_n: int = 10, indent: Optional[int] = 2
) -> str:
    """Serialize an analysis result to a JSON string."""
    return json.dumps(result.to_dict(top_n=top_n), indent=indent, ensure_ascii=False)


def export_to_csv(
    result: "AnalysisResult", output_dir: Path, top_n: int = 10
) -> list[Path]:
    """
    Write files.csv, categories.csv and top_bots.csv to a directory.

    Returns:
        Paths of the written files
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    tables = {
        "files.csv": file_stats_to_dataframe(result.file_stats),
        "categories.csv": categories_to_dataframe(result.categories),
        "top_bots.csv": top_bots_to_dataframe(result.global_stats, top_n),
    }

    written = []
    for name, df in tables.items():
        path = output_dir / name
        df.to_csv(path, index=False)
        written.append(path)

    logger.info(f"Exported {len(written)} tables to {output_dir}")
    return written


def export_to_excel(
    result: "AnalysisResult", output_path: Path, top_n: int = 10
) -> Path:
    """
    Write the analysis result to an Excel workbook.

    Sheets:
        - Files: Per-file statistics
        - Categories: Category totals
        - Top Bots: Most frequent bot user-agents
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        file_stats_to_dataframe(result.file_stats).to_excel(
            writer, sheet_name="Files", index=False
        )
        categories_to_dataframe(result.categories).to_excel(
            writer, sheet_name="Categories", index=False
        )
        top_bots_to_dataframe(result.global_stats, top_n).to_excel(
            writer, sheet_name="Top Bots", index=False
        )

    logger.info(f"Exported analysis workbook to {output_path}")
    return output_path
