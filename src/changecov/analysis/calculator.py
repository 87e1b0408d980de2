"""Intersect changed lines with coverage data.

Per file:
- No coverage entry: every changed line is uncovered (0%). The file stays in
  the totals so missing instrumentation cannot inflate the result.
- Otherwise only changed lines the instrumentation can execute are counted.
  Blank lines, comments and punctuation can never be hit, so they leave both
  numerator and denominator. A file whose changed lines are all
  non-executable is 100%.

The overall percentage is 100 when nothing executable changed.
"""

from __future__ import annotations

from changecov.analysis.models import CoverageSummary, FileResult
from changecov.config.constants import DEFAULT_THRESHOLD
from changecov.core.logging import get_logger
from changecov.coverage.models import CoverageReport, FileCoverage
from changecov.coverage.paths import PathResolver, SuffixPathResolver
from changecov.diff.models import ChangedLineSet

log = get_logger("analysis.calculator")


def percentage(covered: int, total: int) -> float:
    """covered/total as a percentage, 100 when total is zero."""
    if total <= 0:
        return 100.0
    return covered * 100.0 / total


def unmatched_file_result(path: str, changed: frozenset[int]) -> FileResult:
    """Result for a changed file the coverage report does not mention."""
    return FileResult(
        path=path,
        total_changed_lines=len(changed),
        covered_changed_lines=0,
        uncovered_lines=tuple(sorted(changed)),
        coverage_percentage=0.0,
        matched=False,
    )


def file_result(path: str, changed: frozenset[int], coverage: FileCoverage) -> FileResult:
    """Coverage of one file's changed lines against its report entry."""
    executable = changed & coverage.executable_lines
    covered = executable & coverage.covered_lines
    return FileResult(
        path=path,
        total_changed_lines=len(executable),
        covered_changed_lines=len(covered),
        uncovered_lines=tuple(sorted(executable - covered)),
        coverage_percentage=percentage(len(covered), len(executable)),
    )


def summarize(
    results: tuple[FileResult, ...] | list[FileResult],
    threshold: float = DEFAULT_THRESHOLD,
) -> CoverageSummary:
    """Aggregate file results into a summary with a verdict."""
    total = sum(r.total_changed_lines for r in results)
    covered = sum(r.covered_changed_lines for r in results)
    overall = percentage(covered, total)
    return CoverageSummary(
        total_changed_lines=total,
        total_covered_lines=covered,
        overall_percentage=overall,
        threshold=threshold,
        file_results=tuple(results),
        passed=overall >= threshold,
    )


def vacuous_summary(threshold: float = DEFAULT_THRESHOLD) -> CoverageSummary:
    """Summary for a changeset with no measurable source files."""
    return summarize((), threshold)


def calculate_line_coverage(
    changed: ChangedLineSet,
    report: CoverageReport,
    *,
    threshold: float = DEFAULT_THRESHOLD,
    resolver: PathResolver | None = None,
) -> CoverageSummary:
    """Compute changed-line coverage for every file in the changeset.

    Args:
        changed: Changed lines per diff path.
        report: Parsed coverage report.
        threshold: Minimum overall percentage to pass.
        resolver: Maps diff paths to report entries. Defaults to suffix matching.

    Returns:
        CoverageSummary with one FileResult per changed file, in diff order.
    """
    resolver = resolver or SuffixPathResolver()
    results: list[FileResult] = []

    for path, lines in changed.items():
        coverage = resolver.resolve(path, report)
        if coverage is None:
            log.warning("no_coverage_for_file", path=path, changed_lines=len(lines))
            results.append(unmatched_file_result(path, lines))
            continue
        results.append(file_result(path, lines, coverage))

    summary = summarize(results, threshold)
    log.info(
        "coverage_calculated",
        files=len(results),
        changed_lines=summary.total_changed_lines,
        covered_lines=summary.total_covered_lines,
        percentage=round(summary.overall_percentage, 2),
    )
    return summary
