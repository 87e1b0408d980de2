"""Diff parsing: unified diff text to changed source lines.

Usage:
    from changecov.diff import SourceFilter, changed_lines_from_text

    changed = changed_lines_from_text(diff_text, SourceFilter())
    for path, lines in changed.items():
        print(path, sorted(lines))
"""

from changecov.diff.filters import SourceFilter
from changecov.diff.models import ChangedLineSet, FileDiff, Hunk
from changecov.diff.parser import (
    build_changed_line_set,
    changed_lines_from_text,
    parse_unified_diff,
)

__all__ = [
    # Models
    "ChangedLineSet",
    "FileDiff",
    "Hunk",
    # Filtering
    "SourceFilter",
    # Parsing
    "build_changed_line_set",
    "changed_lines_from_text",
    "parse_unified_diff",
]
