"""Report delivery: console output and pull-request comments."""

from changecov.delivery.github import (
    GitHubCommentSink,
    parse_github_remote,
    parse_repository_slug,
)
from changecov.delivery.sinks import (
    ConsoleSink,
    FallbackSink,
    ReportSink,
    build_sink,
    remote_url_provider,
)

__all__ = [
    "ConsoleSink",
    "FallbackSink",
    "GitHubCommentSink",
    "ReportSink",
    "build_sink",
    "parse_github_remote",
    "parse_repository_slug",
    "remote_url_provider",
]
