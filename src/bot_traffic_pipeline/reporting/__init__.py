"""Reporting and categorization module."""

from .categorizer import Categorizer, CategoryStats
from .exports import (
    categories_to_dataframe,
    export_to_csv,
    export_to_excel,
    file_stats_to_dataframe,
    result_to_json,
    top_bots_to_dataframe,
)

__all__ = [
    # Categorization
    "Categorizer",
    "CategoryStats",
    # DataFrames
    "file_stats_to_dataframe",
    "categories_to_dataframe",
    "top_bots_to_dataframe",
    # Exports
    "result_to_json",
    "export_to_csv",
    "export_to_excel",
]
