"""Coverage parser registry and auto-detection.

This module provides:
- PARSER_REGISTRY: All available parsers
- detect_parser: Auto-detect format from a file
- parse_artifact: Convenience function to parse with auto-detection
"""

from collections.abc import Sequence
from pathlib import Path

from changecov.coverage.models import CoverageParseError, CoverageReport

from .base import CoverageParser
from .lcov import LcovParser

PARSER_REGISTRY: Sequence[CoverageParser] = (LcovParser(),)

PARSER_BY_FORMAT: dict[str, CoverageParser] = {p.format_id: p for p in PARSER_REGISTRY}

__all__ = [
    "PARSER_REGISTRY",
    "PARSER_BY_FORMAT",
    "detect_parser",
    "parse_artifact",
    "CoverageParser",
    "LcovParser",
]


def detect_parser(path: Path) -> CoverageParser | None:
    """Return the first registered parser that claims the file, if any."""
    for parser in PARSER_REGISTRY:
        if parser.can_parse(path):
            return parser
    return None


def parse_artifact(path: Path, *, format_id: str | None = None) -> CoverageReport:
    """Parse a coverage artifact into a CoverageReport.

    Args:
        path: Path to the coverage file.
        format_id: Force a specific format (skip auto-detection).

    Returns:
        Parsed CoverageReport. Empty when the file does not exist.

    Raises:
        CoverageParseError: If the format is unknown or the file is unreadable.
    """
    if format_id:
        parser = PARSER_BY_FORMAT.get(format_id)
        if not parser:
            valid = ", ".join(sorted(PARSER_BY_FORMAT))
            raise CoverageParseError.parse_failed(
                str(path), f"Unknown coverage format: {format_id!r}. Valid formats: {valid}"
            )
    elif not path.exists():
        # Let the default parser report the absence
        parser = PARSER_REGISTRY[-1]
    else:
        detected = detect_parser(path)
        if not detected:
            valid = ", ".join(sorted(PARSER_BY_FORMAT))
            raise CoverageParseError.parse_failed(
                str(path), f"Could not detect coverage format. Supported formats: {valid}"
            )
        parser = detected

    return parser.parse(path)
