"""changecov check command - changed-line coverage gate."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click

from changecov.config import load_config
from changecov.core.console import print_error, print_status
from changecov.core.errors import ChangeCovError, ConfigError, ErrorCode, InternalError
from changecov.core.logging import configure_logging, get_logger, set_run_id
from changecov.pipeline import ExitCode, run_check
from changecov.report import build_text_summary

log = get_logger("cli.check")


def _overrides(
    base_ref: str | None,
    lcov: Path | None,
    threshold: float | None,
    output_format: str | None,
) -> dict[str, Any]:
    """CLI options as load_config kwargs, keyed by config section."""
    overrides: dict[str, dict[str, Any]] = {}
    if base_ref:
        overrides.setdefault("diff", {})["base_ref"] = base_ref
    if lcov is not None:
        overrides.setdefault("coverage", {})["report_path"] = str(lcov)
    if threshold is not None:
        overrides.setdefault("coverage", {})["threshold"] = threshold
    if output_format:
        overrides.setdefault("report", {})["format"] = output_format
    return overrides


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--base-ref", help="Base branch to diff against (default: $BASE_REF or main)")
@click.option(
    "--lcov",
    type=click.Path(dir_okay=False, path_type=Path),
    help="LCOV report path (default: coverage/lcov.info)",
)
@click.option(
    "--threshold",
    type=click.FloatRange(0, 100),
    help="Minimum changed-line coverage percentage (default: 70)",
)
@click.option(
    "--diff-file",
    type=click.File("r", encoding="utf-8"),
    help="Read a unified diff from a file ('-' for stdin) instead of git",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["markdown", "json"]),
    help="Report format (default: markdown)",
)
@click.option("--console-only", is_flag=True, help="Never post to the pull request")
@click.pass_context
def check_command(
    ctx: click.Context,
    path: Path,
    base_ref: str | None,
    lcov: Path | None,
    threshold: float | None,
    diff_file: Any,
    output_format: str | None,
    console_only: bool,
) -> None:
    """Measure test coverage of the lines changed since the base branch.

    PATH is the repository root (default: current directory). Exits 1 when
    coverage of changed lines is below the threshold or the coverage report
    is missing.
    """
    repo_root = path.resolve()
    verbose = bool((ctx.obj or {}).get("verbose"))

    try:
        config = load_config(
            repo_root, **_overrides(base_ref, lcov, threshold, output_format)
        )
    except ConfigError as e:
        print_error(str(e))
        sys.exit(ExitCode.FAILED)

    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)
    set_run_id()

    diff_text = diff_file.read() if diff_file is not None else None

    try:
        outcome = run_check(config, repo_root, diff_text=diff_text, console_only=console_only)
    except ChangeCovError as e:
        log.error("check_aborted", error=e.error_name, **e.details)
        hint = None
        if e.code == ErrorCode.COVERAGE_REPORT_MISSING:
            hint = "Run the tests with coverage first (LCOV reporter enabled)."
        print_error(e.message, hint=hint)
        sys.exit(ExitCode.FAILED)
    except Exception as e:
        err = InternalError.unexpected(str(e) or type(e).__name__)
        log.exception("unhandled_error", error=err.error_name)
        print_error(err.message)
        sys.exit(ExitCode.FAILED)

    summary = outcome.summary
    verdict = "passed" if summary.passed else "failed"
    print_status(
        summary.passed,
        f"Coverage check {verdict}. {build_text_summary(summary)}, threshold {summary.threshold:g}%",
    )
    sys.exit(outcome.exit_code)
