"""Changed-line coverage results."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FileResult:
    """Coverage of the changed lines in one file.

    total_changed_lines counts only changed lines the instrumentation can
    execute (or every changed line when the file has no coverage entry).
    """

    path: str
    total_changed_lines: int
    covered_changed_lines: int
    uncovered_lines: tuple[int, ...]
    coverage_percentage: float
    matched: bool = True  # False when the report had no entry for the file

    def meets(self, threshold: float) -> bool:
        return self.coverage_percentage >= threshold


@dataclass(frozen=True, slots=True)
class CoverageSummary:
    """Aggregate changed-line coverage with a pass/fail verdict."""

    total_changed_lines: int
    total_covered_lines: int
    overall_percentage: float
    threshold: float
    file_results: tuple[FileResult, ...]
    passed: bool

    @property
    def total_uncovered_lines(self) -> int:
        return self.total_changed_lines - self.total_covered_lines

    @property
    def files_with_uncovered_lines(self) -> tuple[FileResult, ...]:
        return tuple(r for r in self.file_results if r.uncovered_lines)

    @property
    def unmatched_files(self) -> tuple[str, ...]:
        return tuple(r.path for r in self.file_results if not r.matched)
