"""
Pytest configuration and shared fixtures for unit tests.
"""

import pytest


@pytest.fixture
def write_log(tmp_path):
    """
    Fixture returning a helper that writes lines to a log file.

    Usage:
        path = write_log("access.log", [line1, line2])
    """

    def _write(name: str, lines: list[str]):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def preserve_registry():
    """
    Snapshot the extractor registry and restore it after the test.

    Use this fixture in tests that register or clear extractors.
    """
    from bot_traffic_pipeline.ingestion.registry import ExtractorRegistry

    saved = dict(ExtractorRegistry._extractors)
    yield ExtractorRegistry
    ExtractorRegistry._extractors.clear()
    ExtractorRegistry._extractors.update(saved)
