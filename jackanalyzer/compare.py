"""Compare analyzer output with reference XML files.

Reference fixtures differ from our output only in indentation and line
endings, so the comparison strips each line and ignores blank lines.
"""

from __future__ import annotations

from pathlib import Path


def _normalize(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def compare_output(actual: str, expected: str, limit: int = 10) -> list[str]:
    """Return human readable differences between two outputs.

    An empty list means the outputs match. At most ``limit`` line
    differences are reported, followed by a length mismatch if any.
    """
    actual_lines = _normalize(actual)
    expected_lines = _normalize(expected)
    differences: list[str] = []

    for number, (got, want) in enumerate(zip(actual_lines, expected_lines), start=1):
        if got != want:
            differences.append(f"line {number}: expected {want!r}, got {got!r}")
            if len(differences) >= limit:
                break

    if len(actual_lines) != len(expected_lines):
        differences.append(
            f"length mismatch: expected {len(expected_lines)} lines, got {len(actual_lines)}"
        )
    return differences


def compare_files(actual: Path, expected: Path, encoding: str = "utf-8") -> list[str]:
    """Compare two files with :func:`compare_output`."""
    return compare_output(
        actual.read_text(encoding=encoding),
        expected.read_text(encoding=encoding),
    )
