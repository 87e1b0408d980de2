"""Structured (JSON) report generation.

Output schema:
{
    "summary": {
        "total_changed_lines": int,
        "covered_lines": int,
        "uncovered_lines": int,
        "coverage_percent": float,
        "threshold": float,
        "passed": bool
    },
    "files": [
        {
            "path": str,
            "changed_lines": int,
            "covered_lines": int,
            "coverage_percent": float,
            "passed": bool,
            "matched": bool,
            "uncovered_lines": [int, ...]
        },
        ...
    ]
}

Files are ordered lowest coverage first to surface problem areas.
"""

import json
from typing import Any

from changecov.analysis.models import CoverageSummary
from changecov.report.markdown import sort_worst_first


def build_summary_dict(summary: CoverageSummary) -> dict[str, Any]:
    """Build a JSON-serializable dict from a summary."""
    files = [
        {
            "path": result.path,
            "changed_lines": result.total_changed_lines,
            "covered_lines": result.covered_changed_lines,
            "coverage_percent": round(result.coverage_percentage, 2),
            "passed": result.meets(summary.threshold),
            "matched": result.matched,
            "uncovered_lines": list(result.uncovered_lines),
        }
        for result in sort_worst_first(summary.file_results)
    ]
    return {
        "summary": {
            "total_changed_lines": summary.total_changed_lines,
            "covered_lines": summary.total_covered_lines,
            "uncovered_lines": summary.total_uncovered_lines,
            "coverage_percent": round(summary.overall_percentage, 2),
            "threshold": summary.threshold,
            "passed": summary.passed,
        },
        "files": files,
    }


def render_json(summary: CoverageSummary) -> str:
    """Render a summary as stable, indented JSON."""
    return json.dumps(build_summary_dict(summary), indent=2, sort_keys=True, ensure_ascii=False)


def build_text_summary(summary: CoverageSummary) -> str:
    """One-line summary for status output."""
    if summary.total_changed_lines == 0:
        return "No changed executable lines"
    return (
        f"Changed-line coverage: {summary.overall_percentage:.2f}% "
        f"({summary.total_covered_lines}/{summary.total_changed_lines} lines)"
    )
