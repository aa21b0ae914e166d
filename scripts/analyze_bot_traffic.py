#!/usr/bin/env python3
"""
Analyze bot traffic in Apache/Nginx and IIS access logs.

Usage:
    # Single files (plain text or gzip)
    python scripts/analyze_bot_traffic.py access.log u_ex240101.log.gz

    # Every file in a directory (one level)
    python scripts/analyze_bot_traffic.py --input logs/

    # Custom pattern file and CSV tables
    python scripts/analyze_bot_traffic.py --config bot_patterns.yaml \\
        --format csv --output reports/ logs/*.log
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bot_traffic_pipeline.config import Settings, get_settings
from bot_traffic_pipeline.ingestion import ConfigurationError
from bot_traffic_pipeline.pipeline import AnalysisPipeline, setup_logging
from bot_traffic_pipeline.reporting import (
    categories_to_dataframe,
    export_to_csv,
    export_to_excel,
    file_stats_to_dataframe,
    result_to_json,
    top_bots_to_dataframe,
)

logger = logging.getLogger(__name__)


def collect_paths(inputs: list[str]) -> list[Path]:
    """Expand directories one level; keep files as given."""
    paths = []
    for item in inputs:
        path = Path(item)
        if path.is_dir():
            paths.extend(sorted(p for p in path.glob("*") if p.is_file()))
        else:
            paths.append(path)
    return paths


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Bot traffic statistics from HTTP access logs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("files", nargs="*", help="Log files to analyze")
    parser.add_argument(
        "--input",
        "-i",
        action="append",
        default=[],
        help="Log file or directory (repeatable)",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="YAML file with analysis options and bot patterns",
    )
    parser.add_argument(
        "--format",
        choices=["table", "json", "csv", "excel"],
        default="table",
        help="Output format (default: table)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output directory (csv) or file (excel, json)",
    )
    parser.add_argument("--top", type=int, default=10, help="Global top bots to show")
    parser.add_argument("--workers", type=int, help="Worker threads")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args()
    setup_logging("DEBUG" if args.verbose else "INFO")

    try:
        settings: Settings = get_settings(args.config)
        if args.workers:
            settings = replace(settings, max_workers=args.workers)
        pipeline = AnalysisPipeline.from_settings(settings)
    except (ConfigurationError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    paths = collect_paths(args.files + args.input)
    if not paths:
        logger.warning("No log files found")

    result = pipeline.run(paths)

    if args.format == "json":
        output = result_to_json(result, top_n=args.top)
        if args.output:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(output, encoding="utf-8")
        else:
            print(output)
    elif args.format == "csv":
        export_to_csv(result, args.output or Path("bot_report"), top_n=args.top)
    elif args.format == "excel":
        export_to_excel(
            result, args.output or Path("bot_report.xlsx"), top_n=args.top
        )
    else:
        stats = result.global_stats
        print(
            f"\nTotal requests: {stats.total_requests:,}  "
            f"Bot requests: {stats.bot_requests:,} ({stats.bot_percentage}%)\n"
        )
        print(file_stats_to_dataframe(result.file_stats).to_string(index=False))
        print()
        print(categories_to_dataframe(result.categories).to_string(index=False))
        print()
        print(top_bots_to_dataframe(stats, args.top).to_string(index=False))

    return 0


if __name__ == "__main__":
    sys.exit(main())
