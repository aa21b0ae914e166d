"""
Coarse categorization of aggregated bot traffic.

Buckets the global bot user-agent counts into reporting categories
(AI agents, search engines, SEO/marketing). Categories are independent
tallies: a user-agent matching several categories counts in each.
"""

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Sequence

from ..config.constants import CATEGORY_PATTERNS
from ..utils.bot_classifier import compile_patterns

if TYPE_CHECKING:
    from ..pipeline.aggregator import GlobalStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryStats:
    """Hit total of one category, relative to all bot requests."""

    category_name: str
    total_hits: int
    percentage_of_bot_traffic: float

    def to_dict(self) -> dict:
        return {
            "category_name": self.category_name,
            "total_hits": self.total_hits,
            "percentage_of_bot_traffic": self.percentage_of_bot_traffic,
        }


class Categorizer:
    """
    Derive CategoryStats from the final GlobalStats.

    Usage:
        categorizer = Categorizer()
        for category in categorizer.categorize(global_stats):
            print(category.category_name, category.total_hits)
    """

    def __init__(
        self, category_patterns: Mapping[str, Sequence[str]] = CATEGORY_PATTERNS
    ):
        """
        Initialize categorizer.

        Args:
            category_patterns: Category name -> case-insensitive patterns,
                               in reporting order

        Raises:
            PatternConfigError: If a pattern does not compile
        """
        self.category_patterns = {
            name: tuple(patterns) for name, patterns in category_patterns.items()
        }
        self._compiled: dict[str, tuple[re.Pattern, ...]] = {
            name: compile_patterns(patterns)
            for name, patterns in self.category_patterns.items()
        }

    @property
    def category_names(self) -> list[str]:
        return list(self.category_patterns.keys())

    def matching_categories(self, user_agent: str) -> list[str]:
        """Names of every category whose patterns match the user-agent."""
        return [
            name
            for name, patterns in self._compiled.items()
            if any(pattern.search(user_agent) for pattern in patterns)
        ]

    def categorize(self, global_stats: "GlobalStats") -> list[CategoryStats]:
        """
        Sum hit counts per category over the global bot map.

        Percentages are relative to global_stats.bot_requests, rounded to
        2 decimals, and 0.0 when there are no bot requests.

        Args:
            global_stats: Final aggregated statistics

        Returns:
            One CategoryStats per configured category, in configured order
        """
        hits = {name: 0 for name in self._compiled}

        for user_agent, count in global_stats.bot_counts.items():
            for name in self.matching_categories(user_agent):
                hits[name] += count

        denominator = global_stats.bot_requests
        results = []
        for name, total in hits.items():
            percentage = round(total / denominator * 100, 2) if denominator else 0.0
            results.append(
                CategoryStats(
                    category_name=name,
                    total_hits=total,
                    percentage_of_bot_traffic=percentage,
                )
            )

        logger.debug(
            "Category totals: "
            + ", ".join(f"{c.category_name}={c.total_hits}" for c in results)
        )
        return results
