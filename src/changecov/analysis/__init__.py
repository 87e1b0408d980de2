"""Changed-line coverage calculation."""

from changecov.analysis.calculator import (
    calculate_line_coverage,
    file_result,
    percentage,
    summarize,
    unmatched_file_result,
    vacuous_summary,
)
from changecov.analysis.models import CoverageSummary, FileResult

__all__ = [
    "CoverageSummary",
    "FileResult",
    "calculate_line_coverage",
    "file_result",
    "percentage",
    "summarize",
    "unmatched_file_result",
    "vacuous_summary",
]
