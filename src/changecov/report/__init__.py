"""Report rendering: markdown for humans, JSON for tooling."""

from changecov.report.markdown import render_markdown, sort_worst_first
from changecov.report.summary import build_summary_dict, build_text_summary, render_json

RENDERERS = {
    "markdown": render_markdown,
    "json": render_json,
}

__all__ = [
    "RENDERERS",
    "build_summary_dict",
    "build_text_summary",
    "render_json",
    "render_markdown",
    "sort_worst_first",
]
