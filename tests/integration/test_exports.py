"""
Integration tests for report exports and the analyze_bot_traffic.py script.

Tests DataFrame builders, JSON serialization, CSV and Excel export.
"""

import json
import subprocess
import sys
from pathlib import Path

import pandas as pd
import pytest

from bot_traffic_pipeline.reporting import (
    categories_to_dataframe,
    export_to_csv,
    export_to_excel,
    file_stats_to_dataframe,
    result_to_json,
    top_bots_to_dataframe,
)
from bot_traffic_pipeline.reporting.exports import (
    CATEGORY_COLUMNS,
    FILE_COLUMNS,
    TOP_BOT_COLUMNS,
)

SCRIPT = Path(__file__).parent.parent.parent / "scripts" / "analyze_bot_traffic.py"


@pytest.fixture
def result(pipeline, log_files):
    return pipeline.run(log_files)


class TestDataFrames:
    """Tests for the DataFrame builders."""

    def test_file_stats_frame(self, result):
        df = file_stats_to_dataframe(result.file_stats)

        assert list(df.columns) == FILE_COLUMNS
        assert len(df) == 3
        assert df["total_requests"].sum() == 13
        assert list(df["format"]) == ["apache", "apache", "iis"]

    def test_categories_frame(self, result):
        df = categories_to_dataframe(result.categories)

        assert list(df.columns) == CATEGORY_COLUMNS
        assert list(df["category_name"]) == [c.category_name for c in result.categories]

    def test_top_bots_frame(self, result, agents):
        df = top_bots_to_dataframe(result.global_stats, top_n=2)

        assert list(df.columns) == TOP_BOT_COLUMNS
        assert list(df["rank"]) == [1, 2]
        assert df.iloc[0]["user_agent"] == agents["googlebot"]
        assert df.iloc[0]["percentage_of_bot_traffic"] == 44.44

    def test_empty_frames_keep_columns(self, pipeline):
        empty = pipeline.run([])

        assert list(file_stats_to_dataframe(empty.file_stats).columns) == FILE_COLUMNS
        assert top_bots_to_dataframe(empty.global_stats).empty


class TestJsonExport:
    """Tests for result_to_json."""

    def test_parses_back(self, result):
        data = json.loads(result_to_json(result, top_n=3))

        assert data["global"]["total_requests"] == 13
        assert data["global"]["bot_requests"] == 9
        assert len(data["global"]["top_bots"]) == 3
        assert [f["format"] for f in data["files"]] == ["apache", "apache", "iis"]

    def test_compact(self, result):
        assert "\n" not in result_to_json(result, indent=None)


class TestFileExports:
    """Tests for CSV and Excel export."""

    def test_export_to_csv(self, result, tmp_path: Path):
        written = export_to_csv(result, tmp_path / "report")

        assert [p.name for p in written] == [
            "files.csv",
            "categories.csv",
            "top_bots.csv",
        ]
        files = pd.read_csv(tmp_path / "report" / "files.csv")
        assert list(files.columns) == FILE_COLUMNS
        assert files["bot_requests"].tolist() == [4, 3, 2]

    def test_export_to_excel(self, result, tmp_path: Path):
        pytest.importorskip("openpyxl")
        output = export_to_excel(result, tmp_path / "report.xlsx")

        sheets = pd.read_excel(output, sheet_name=None)
        assert set(sheets) == {"Files", "Categories", "Top Bots"}
        assert len(sheets["Files"]) == 3


class TestAnalyzeScript:
    """Run the CLI script as a subprocess."""

    def run_script(self, *args: str, cwd: Path) -> subprocess.CompletedProcess:
        return subprocess.run(
            [sys.executable, str(SCRIPT), *args],
            capture_output=True,
            text=True,
            cwd=cwd,
        )

    def test_json_output(self, log_dir: Path, tmp_path: Path):
        proc = self.run_script("--format", "json", "--input", str(log_dir), cwd=tmp_path)

        assert proc.returncode == 0, proc.stderr
        data = json.loads(proc.stdout)
        assert data["global"]["files_processed"] == 3
        assert data["global"]["bot_requests"] == 9

    def test_table_output(self, log_files, tmp_path: Path):
        proc = self.run_script(*[str(p) for p in log_files], cwd=tmp_path)

        assert proc.returncode == 0, proc.stderr
        assert "Total requests: 13" in proc.stdout
        assert "AI Agents" in proc.stdout

    def test_csv_output(self, log_dir: Path, tmp_path: Path):
        out_dir = tmp_path / "tables"

        proc = self.run_script(
            "--format", "csv", "--output", str(out_dir), str(log_dir), cwd=tmp_path
        )

        assert proc.returncode == 0, proc.stderr
        assert (out_dir / "top_bots.csv").exists()

    def test_invalid_config_exits_nonzero(self, log_dir: Path, tmp_path: Path):
        config = tmp_path / "bad.yaml"
        config.write_text("analysis:\n  max_workers: 0\n")

        proc = self.run_script("--config", str(config), str(log_dir), cwd=tmp_path)

        assert proc.returncode == 1
        assert "Invalid configuration" in proc.stderr

    def test_missing_config_exits_nonzero(self, log_dir: Path, tmp_path: Path):
        proc = self.run_script(
            "--config", str(tmp_path / "typo.yaml"), str(log_dir), cwd=tmp_path
        )

        assert proc.returncode == 1
        assert "typo.yaml" in proc.stderr
