"""Report sinks: where a rendered report goes.

The analysis core only produces text; a sink decides how it reaches a human.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import click
from rich.console import Console
from rich.markdown import Markdown

from changecov.core.errors import DeliveryError
from changecov.core.logging import get_logger
from changecov.delivery.github import GitHubCommentSink
from changecov.git import GitError, GitOps

if TYPE_CHECKING:
    from changecov.config.models import ChangeCovConfig

log = get_logger("delivery.sinks")


class ReportSink(Protocol):
    """Delivers a rendered report. Raises DeliveryError on failure."""

    @property
    def name(self) -> str: ...

    def deliver(self, report: str) -> None: ...


class ConsoleSink:
    """Writes the report to stdout.

    With ``markdown=True`` and an interactive terminal, rich renders the
    markdown; otherwise the raw text is written so pipes and CI logs get the
    exact report.
    """

    name = "console"

    def __init__(self, *, markdown: bool = False, console: Console | None = None) -> None:
        self._markdown = markdown
        self._console = console

    def deliver(self, report: str) -> None:
        console = self._console or Console()
        if self._markdown and console.is_terminal:
            console.print(Markdown(report))
            return
        click.echo(report.rstrip("\n"))


class FallbackSink:
    """Tries a primary sink and degrades to a fallback on DeliveryError."""

    def __init__(self, primary: ReportSink, fallback: ReportSink) -> None:
        self._primary = primary
        self._fallback = fallback
        self.last_error: DeliveryError | None = None

    @property
    def name(self) -> str:
        return self._primary.name

    def deliver(self, report: str) -> None:
        try:
            self._primary.deliver(report)
            self.last_error = None
        except DeliveryError as e:
            self.last_error = e
            log.warning(
                "delivery_failed",
                sink=self._primary.name,
                error=e.error_name,
                message=e.message,
                fallback=self._fallback.name,
            )
            self._fallback.deliver(report)


def remote_url_provider(repo_path: Path, remote: str) -> Callable[[], str]:
    """Lazily read a remote URL; git failures become DeliveryError."""

    def provider() -> str:
        try:
            return GitOps(repo_path).remote_url(remote)
        except GitError as e:
            raise DeliveryError.invalid_target("remote", f"{remote}: {e}") from e

    return provider


def build_sink(
    config: ChangeCovConfig,
    repo_path: Path,
    *,
    console_only: bool = False,
) -> ReportSink:
    """Pick the sink for this run.

    Remote delivery needs a token and a PR number and only carries markdown.
    Without them the report goes to stdout.
    """
    console = ConsoleSink(markdown=config.report.pretty and config.report.format == "markdown")
    github = config.github

    if console_only or not github.enabled:
        log.debug("remote_delivery_disabled", console_only=console_only)
        return console
    if config.report.format != "markdown":
        log.debug("remote_delivery_skipped", report_format=config.report.format)
        return console

    remote = GitHubCommentSink(
        token=github.token or "",
        pr_number=github.pr_number or "",
        repository=github.repository,
        remote_url=remote_url_provider(repo_path, config.diff.remote),
        api_url=github.api_url,
        timeout_sec=github.timeout_sec,
    )
    return FallbackSink(remote, console)
