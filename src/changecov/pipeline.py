"""End-to-end changed-line coverage check.

Steps, in order:
1. Require the coverage report to exist (fatal otherwise).
2. Collect changed source lines (retrieval failure degrades to no changes).
3. No changes: vacuous pass, coverage is never parsed.
4. Parse coverage, calculate, render, deliver.

Only this module and the CLI decide exit codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from changecov.analysis import CoverageSummary, calculate_line_coverage, vacuous_summary
from changecov.config.models import ChangeCovConfig
from changecov.core.errors import CoverageError
from changecov.core.logging import get_logger
from changecov.coverage import PathResolver, parse_artifact
from changecov.delivery import ReportSink, build_sink
from changecov.diff import ChangedLineSet, SourceFilter, changed_lines_from_text
from changecov.git import GitError, GitOps
from changecov.report import RENDERERS

log = get_logger("pipeline")


class ExitCode(IntEnum):
    PASSED = 0
    FAILED = 1


@dataclass(frozen=True, slots=True)
class CheckOutcome:
    """Result of one run."""

    summary: CoverageSummary
    report: str

    @property
    def exit_code(self) -> ExitCode:
        return ExitCode.PASSED if self.summary.passed else ExitCode.FAILED


def resolve_report_path(config: ChangeCovConfig, repo_path: Path) -> Path:
    path = Path(config.coverage.report_path).expanduser()
    return path if path.is_absolute() else repo_path / path


def collect_changed_lines(
    config: ChangeCovConfig,
    repo_path: Path,
    *,
    diff_text: str | None = None,
) -> ChangedLineSet:
    """Changed source lines for this run.

    Uses diff_text when given, otherwise asks git for the diff against the
    configured base. Git failures are logged and yield an empty set.
    """
    source_filter = SourceFilter.from_config(config.diff)
    if diff_text is None:
        log.info("parsing_git_diff", base_ref=config.diff.base_ref, remote=config.diff.remote)
        try:
            diff_text = GitOps(repo_path).diff_against(
                config.diff.base_ref, remote=config.diff.remote
            )
        except GitError as e:
            log.warning("diff_unavailable", base_ref=config.diff.base_ref, error=str(e))
            return ChangedLineSet.empty()

    changed = changed_lines_from_text(diff_text, source_filter)
    log.info("changed_source_files", files=len(changed), lines=changed.total_lines)
    return changed


def run_check(
    config: ChangeCovConfig,
    repo_path: Path,
    *,
    diff_text: str | None = None,
    sink: ReportSink | None = None,
    resolver: PathResolver | None = None,
    console_only: bool = False,
) -> CheckOutcome:
    """Run the full check and deliver the report.

    Raises:
        CoverageError: The coverage report is missing or unreadable.
    """
    report_path = resolve_report_path(config, repo_path)
    if not report_path.exists():
        raise CoverageError.report_missing(str(report_path))

    threshold = config.coverage.threshold
    changed = collect_changed_lines(config, repo_path, diff_text=diff_text)

    if not changed:
        log.info("no_source_changes")
        summary = vacuous_summary(threshold)
    else:
        format_id = None if config.coverage.format == "auto" else config.coverage.format
        coverage = parse_artifact(report_path, format_id=format_id)
        summary = calculate_line_coverage(
            changed, coverage, threshold=threshold, resolver=resolver
        )

    report = RENDERERS[config.report.format](summary)
    sink = sink or build_sink(config, repo_path, console_only=console_only)
    sink.deliver(report)

    log.info(
        "check_complete",
        passed=summary.passed,
        percentage=round(summary.overall_percentage, 2),
        threshold=threshold,
        sink=sink.name,
    )
    return CheckOutcome(summary=summary, report=report)
