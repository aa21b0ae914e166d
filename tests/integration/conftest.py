"""
Shared fixtures for integration tests.

Provides:
- Sample Apache and IIS log generators
- Log directories written to tmp_path
- A pipeline configured with default patterns
"""

import gzip
from pathlib import Path

import pytest

from bot_traffic_pipeline.pipeline import AnalysisPipeline

# =============================================================================
# SAMPLE DATA
# =============================================================================

GOOGLEBOT = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"
GPTBOT = "Mozilla/5.0 AppleWebKit/537.36 (KHTML, like Gecko; compatible; GPTBot/1.0)"
CLAUDEBOT = "Mozilla/5.0 (compatible; ClaudeBot/1.0; +claudebot@anthropic.com)"
AHREFSBOT = "Mozilla/5.0 (compatible; AhrefsBot/7.0; +http://ahrefs.com/robot/)"
CHROME = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

IIS_HEADER = [
    "#Software: Microsoft Internet Information Services 10.0",
    "#Version: 1.0",
    "#Date: 2024-01-15 00:00:00",
    "#Fields: date time s-ip cs-method cs-uri-stem cs-uri-query s-port "
    "cs-username c-ip cs(User-Agent) cs(Referer) sc-status sc-substatus "
    "sc-win32-status time-taken",
]


def apache_line(user_agent: str, path: str = "/", ip: str = "203.0.113.5") -> str:
    """Build one combined-format access log line."""
    return (
        f'{ip} - - [15/Jan/2024:12:30:45 +0000] "GET {path} HTTP/1.1" 200 1024 '
        f'"-" "{user_agent}"'
    )


def iis_line(user_agent: str, path: str = "/") -> str:
    """Build one W3C row with the user-agent '+'-encoded."""
    encoded = user_agent.replace("+", "%2B").replace(" ", "+")
    return (
        f"2024-01-15 12:30:45 10.0.0.1 GET {path} - 443 - 192.0.2.100 "
        f"{encoded} - 200 0 0 15"
    )


def write_lines(path: Path, lines: list[str]) -> Path:
    if path.suffix == ".gz":
        with gzip.open(path, "wt", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
    else:
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """
    Directory with three logs.

    - site_a.log: Apache, 6 requests, 4 bots (Googlebot x2, GPTBot x2)
    - site_b.log.gz: Apache gzip, 4 requests, 3 bots (Googlebot, GPTBot, AhrefsBot)
    - u_ex240115.log: IIS, 3 requests, 2 bots (ClaudeBot, Googlebot)
    """
    directory = tmp_path / "logs"
    directory.mkdir()

    write_lines(
        directory / "site_a.log",
        [
            apache_line(GOOGLEBOT),
            apache_line(CHROME, "/about"),
            apache_line(GPTBOT, "/docs"),
            apache_line("-", "/health"),
            apache_line(GOOGLEBOT, "/blog"),
            apache_line(GPTBOT, "/pricing"),
        ],
    )
    write_lines(
        directory / "site_b.log.gz",
        [
            apache_line(GOOGLEBOT),
            apache_line(GPTBOT),
            apache_line(CHROME),
            apache_line(AHREFSBOT),
        ],
    )
    write_lines(
        directory / "u_ex240115.log",
        IIS_HEADER
        + [
            iis_line(CLAUDEBOT),
            iis_line(CHROME, "/contact"),
            iis_line(GOOGLEBOT, "/sitemap.xml"),
        ],
    )
    return directory


@pytest.fixture
def log_files(log_dir: Path) -> list[Path]:
    return [
        log_dir / "site_a.log",
        log_dir / "site_b.log.gz",
        log_dir / "u_ex240115.log",
    ]


@pytest.fixture
def pipeline() -> AnalysisPipeline:
    return AnalysisPipeline(max_workers=4)


@pytest.fixture
def agents() -> dict[str, str]:
    """User-agent strings written by log_dir, by short name."""
    return {
        "googlebot": GOOGLEBOT,
        "gptbot": GPTBOT,
        "claudebot": CLAUDEBOT,
        "ahrefsbot": AHREFSBOT,
        "chrome": CHROME,
    }
