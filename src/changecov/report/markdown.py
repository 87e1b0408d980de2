"""Markdown report for pull-request comments and console output.

Output depends only on the summary: no timestamps, no randomness.
"""

from __future__ import annotations

from changecov.analysis.models import CoverageSummary, FileResult

PASS_MARK = "✅"
FAIL_MARK = "❌"

TITLE = "## 📊 Code Coverage Report for Changed Lines"
TIP = (
    "💡 **Tip:** This report shows coverage for only the lines you changed/added "
    "in this PR, not the entire codebase."
)


def _format_threshold(threshold: float) -> str:
    return f"{threshold:g}"


def sort_worst_first(results: tuple[FileResult, ...]) -> list[FileResult]:
    """Ascending by coverage percentage, ties by path."""
    return sorted(results, key=lambda r: (r.coverage_percentage, r.path))


def _file_table(summary: CoverageSummary) -> list[str]:
    lines = [
        "### Coverage by File",
        "",
        "| File | Changed Lines | Covered Lines | Coverage | Status |",
        "|------|---------------|---------------|----------|--------|",
    ]
    for result in sort_worst_first(summary.file_results):
        mark = PASS_MARK if result.meets(summary.threshold) else FAIL_MARK
        lines.append(
            f"| {result.path} | {result.total_changed_lines} | "
            f"{result.covered_changed_lines} | {result.coverage_percentage:.1f}% | {mark} |"
        )
    return lines


def _uncovered_listing(summary: CoverageSummary) -> list[str]:
    files = sort_worst_first(summary.files_with_uncovered_lines)
    if not files:
        return []
    lines = ["### ⚠️ Uncovered Lines", ""]
    for result in files:
        lines.append(f"**{result.path}:**")
        lines.append(f"- Lines: {', '.join(str(n) for n in result.uncovered_lines)}")
        lines.append("")
    return lines


def render_markdown(summary: CoverageSummary) -> str:
    """Render a summary as a markdown report.

    Sections: headline status with threshold, per-file table (worst first),
    aggregate counts, and uncovered line numbers per file.
    """
    mark = PASS_MARK if summary.passed else FAIL_MARK
    status = "PASS" if summary.passed else "FAIL"

    lines = [
        TITLE,
        "",
        f"### Overall New Code Coverage: {summary.overall_percentage:.2f}% {mark}",
        "",
        f"**Status:** {status} (Threshold: {_format_threshold(summary.threshold)}%)",
        "",
    ]

    if summary.total_changed_lines == 0 and not summary.file_results:
        lines.append("ℹ️ No changed lines detected in source files.")
        return "\n".join(lines) + "\n"

    lines += ["---", ""]
    lines += _file_table(summary)
    lines += [
        "",
        "---",
        "",
        "### 📈 Summary",
        f"- **Total changed lines:** {summary.total_changed_lines}",
        f"- **Covered lines:** {summary.total_covered_lines}",
        f"- **Uncovered lines:** {summary.total_uncovered_lines}",
        f"- **New code coverage:** {summary.overall_percentage:.2f}%",
        "",
    ]
    if summary.unmatched_files:
        lines.append(
            f"_No coverage data found for {len(summary.unmatched_files)} file(s); "
            "their changed lines count as uncovered._"
        )
        lines.append("")
    lines += _uncovered_listing(summary)
    lines += ["---", "", TIP]
    return "\n".join(lines) + "\n"
