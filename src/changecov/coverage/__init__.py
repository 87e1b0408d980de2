"""Coverage report parsing and path reconciliation.

Usage:
    from changecov.coverage import parse_artifact, SuffixPathResolver

    report = parse_artifact(Path("coverage/lcov.info"), format_id="lcov")
    coverage = SuffixPathResolver().resolve("src/utils/math.ts", report)
"""

from changecov.coverage.models import CoverageParseError, CoverageReport, FileCoverage
from changecov.coverage.parsers import (
    PARSER_BY_FORMAT,
    PARSER_REGISTRY,
    CoverageParser,
    LcovParser,
    detect_parser,
    parse_artifact,
)
from changecov.coverage.paths import (
    PathResolver,
    SuffixPathResolver,
    normalize_path,
    paths_match,
)

__all__ = [
    # Models
    "CoverageParseError",
    "CoverageReport",
    "FileCoverage",
    # Parsers
    "CoverageParser",
    "LcovParser",
    "PARSER_BY_FORMAT",
    "PARSER_REGISTRY",
    "detect_parser",
    "parse_artifact",
    # Paths
    "PathResolver",
    "SuffixPathResolver",
    "normalize_path",
    "paths_match",
]
