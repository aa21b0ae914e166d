"""
Shared file utilities for ingestion module.

Provides file opening and sampling helpers used by the format detector
and the file processor.
"""

import codecs
import gzip
from pathlib import Path
from typing import IO, Iterable, Union


GZIP_MAGIC = b"\x1f\x8b"


def text_encoding(encoding: str) -> str:
    """Map UTF-8 to utf-8-sig, which drops a leading byte-order mark."""
    if codecs.lookup(encoding).name == "utf-8":
        return "utf-8-sig"
    return encoding


def is_gzip_file(path: Path) -> bool:
    """True for a '.gz' name or a file starting with the gzip magic bytes."""
    if path.suffix.lower() == ".gz":
        return True
    with open(path, "rb") as f:
        return f.read(2) == GZIP_MAGIC


def open_file_auto_decompress(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
) -> IO[str]:
    """
    Open a log file as text, decompressing gzip transparently.

    Rotated logs are often compressed without keeping the '.gz' suffix
    (access.log.2, u_ex240101.log.1), so the magic bytes are checked too.

    Args:
        file_path: Path to the log file
        encoding: Text encoding (default: utf-8); UTF-8 input may carry a BOM

    Returns:
        Open text-mode handle

    Raises:
        FileNotFoundError: If the file doesn't exist
        PermissionError: If the file cannot be read
        gzip.BadGzipFile: If the data is not valid gzip (raised on read)
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    encoding = text_encoding(encoding)
    if is_gzip_file(path):
        return gzip.open(path, "rt", encoding=encoding)
    return open(path, "r", encoding=encoding)


def is_content_line(line: str) -> bool:
    """Return True for lines that are neither blank nor '#' comments."""
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith("#")


def build_format_sample(lines: Iterable[str], sample_size: int = 10) -> list[str]:
    """
    Collect the first content lines of a file for format detection.

    Blank lines and comment lines are skipped; reading stops as soon as
    sample_size lines have been collected.

    Args:
        lines: Line iterator (usually an open file handle)
        sample_size: Maximum number of lines to collect

    Returns:
        List of stripped content lines (possibly empty)
    """
    sample: list[str] = []
    if sample_size <= 0:
        return sample

    for line in lines:
        if not is_content_line(line):
            continue
        sample.append(line.strip())
        if len(sample) >= sample_size:
            break
    return sample
