"""Unified diff parsing.

Diff text is read with ``unidiff.PatchSet``, which tracks hunk body lengths
and so finds file boundaries in both git-style and plain ``diff -ruN``
output. Each patched file becomes a FileDiff keyed by its new-side path;
each hunk keeps its ``-a,b +c,d`` header as a Hunk (omitted counts are 1).

Deleted files are dropped. Binary sections become a FileDiff without hunks.
Malformed file sections are skipped; the rest of the diff still counts.
"""

from __future__ import annotations

from unidiff import PatchedFile, PatchSet
from unidiff.errors import UnidiffParseError

from changecov.core.logging import get_logger
from changecov.diff.filters import SourceFilter
from changecov.diff.models import ChangedLineSet, FileDiff, Hunk

log = get_logger("diff.parser")

_DEV_NULL = "/dev/null"


def _new_side_path(patched_file: PatchedFile) -> str:
    """Target path without quotes or the ``b/`` prefix."""
    path = patched_file.target_file
    if len(path) >= 2 and path[0] == '"' and path[-1] == '"':
        path = path[1:-1]
    if path.startswith("b/"):
        return path[2:]
    return path


def _is_deleted(patched_file: PatchedFile) -> bool:
    return patched_file.is_removed_file or patched_file.target_file == _DEV_NULL


def _file_diff(patched_file: PatchedFile) -> FileDiff:
    hunks = tuple(
        Hunk(
            old_start=hunk.source_start,
            old_count=hunk.source_length,
            new_start=hunk.target_start,
            new_count=hunk.target_length,
        )
        for hunk in patched_file
    )
    return FileDiff(path=_new_side_path(patched_file), hunks=hunks)


def _split_sections(text: str) -> list[str]:
    """Cut diff text at file headers, one chunk per file.

    ``diff ...`` lines mark git-style and ``diff -ruN`` sections. Without
    them, a ``---`` line directly followed by ``+++`` starts a section.
    """
    lines = text.splitlines(keepends=True)
    starts = [i for i, line in enumerate(lines) if line.startswith("diff ")]
    if not starts:
        starts = [
            i
            for i, line in enumerate(lines[:-1])
            if line.startswith("--- ") and lines[i + 1].startswith("+++ ")
        ]
    bounds = sorted({0, *starts, len(lines)})
    return ["".join(lines[lo:hi]) for lo, hi in zip(bounds, bounds[1:])]


def _parse_sections(text: str) -> list[PatchedFile]:
    """Parse each file section on its own, skipping the ones that fail."""
    patched: list[PatchedFile] = []
    for section in _split_sections(text):
        try:
            patched.extend(PatchSet.from_string(section))
        except UnidiffParseError as e:
            header = section.splitlines()[0] if section.strip() else ""
            log.warning("diff_section_skipped", header=header, error=str(e))
    return patched


def parse_unified_diff(text: str) -> tuple[FileDiff, ...]:
    """Parse unified diff text into file sections in diff order.

    When the text as a whole does not parse, every file section is parsed
    separately and only the malformed ones are dropped.
    """
    if not text.strip():
        return ()
    try:
        patched: list[PatchedFile] = list(PatchSet.from_string(text))
    except UnidiffParseError as e:
        log.warning("diff_unparseable", error=str(e))
        patched = _parse_sections(text)

    diffs = tuple(_file_diff(pf) for pf in patched if not _is_deleted(pf))
    log.debug("diff_parsed", files=len(diffs))
    return diffs


def build_changed_line_set(
    diffs: tuple[FileDiff, ...] | list[FileDiff],
    source_filter: SourceFilter | None = None,
) -> ChangedLineSet:
    """Collect changed lines per source file.

    Sections for the same path are merged. Files rejected by the filter, and
    files left with no changed lines (pure deletions), are dropped.
    """
    source_filter = source_filter or SourceFilter()
    collected: dict[str, set[int]] = {}
    for file_diff in diffs:
        collected.setdefault(file_diff.path, set()).update(file_diff.changed_lines)

    kept = {
        path: lines for path, lines in collected.items() if lines and source_filter.accepts(path)
    }
    log.debug("diff_filtered", files_in_diff=len(collected), source_files=len(kept))
    return ChangedLineSet(kept)


def changed_lines_from_text(text: str, source_filter: SourceFilter | None = None) -> ChangedLineSet:
    """Parse diff text and build the filtered ChangedLineSet in one step."""
    return build_changed_line_set(parse_unified_diff(text), source_filter)
