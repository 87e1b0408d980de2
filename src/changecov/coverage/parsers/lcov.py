"""LCOV format parser.

LCOV format is a plain text format with records like:
- SF:<source file path>
- DA:<line>,<hit count>[,<checksum>]
- end_of_record

Other record types (TN, FN, FNDA, BRDA, LF, LH, ...) carry nothing needed for
line coverage and are skipped, as is anything unrecognized.

Used by: jest/istanbul (lcov reporter), vitest, pytest-cov, cargo-llvm-cov, gcov
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from changecov.core.logging import get_logger
from changecov.coverage.models import CoverageParseError, CoverageReport, FileCoverage

log = get_logger("coverage.lcov")


@dataclass(slots=True)
class _RecordState:
    """Fold state for one parse call."""

    path: str | None = None
    hits: dict[int, int] = field(default_factory=dict)
    files: dict[str, FileCoverage] = field(default_factory=dict)

    def open_record(self, path: str) -> None:
        self.path = path
        self.hits = {}

    def add_line(self, line_num: int, hits: int) -> None:
        # Repeated DA lines for one line keep the highest count
        self.hits[line_num] = max(hits, self.hits.get(line_num, 0))

    def close_record(self) -> None:
        if self.path is not None:
            # A later record for the same path replaces the earlier one
            self.files[self.path] = FileCoverage.from_hits(self.path, self.hits)
        self.path = None
        self.hits = {}


def _parse_line_data(payload: str) -> tuple[int, int] | None:
    """Parse the part after ``DA:``. None when malformed."""
    parts = payload.split(",")
    if len(parts) < 2:
        return None
    try:
        line_num = int(parts[0])
        hits_str = parts[1].strip()
        # Handle '-' as 0 (some tools use this)
        hits = 0 if hits_str == "-" else int(hits_str)
    except ValueError:
        return None
    if line_num < 1 or hits < 0:
        return None
    return line_num, hits


def _step(state: _RecordState, line: str) -> _RecordState:
    if line.startswith("SF:"):
        state.open_record(line[3:])
    elif line.startswith("DA:"):
        if state.path is None:
            return state
        parsed = _parse_line_data(line[3:])
        if parsed is not None:
            state.add_line(*parsed)
    elif line == "end_of_record":
        state.close_record()
    return state


class LcovParser:
    """Parser for LCOV format coverage files."""

    @property
    def format_id(self) -> str:
        return "lcov"

    def can_parse(self, path: Path) -> bool:
        """Check if file looks like LCOV format."""
        if not path.is_file():
            return False
        if path.suffix in (".info", ".lcov"):
            return True
        # Content sniff: look for SF: at start of a line
        try:
            with path.open(encoding="utf-8", errors="replace") as f:
                for line in f:
                    stripped = line.strip()
                    if stripped.startswith(("SF:", "TN:")):
                        return True
                    # Stop after first non-empty line that's not a comment
                    if stripped and not stripped.startswith("#"):
                        break
        except OSError:
            pass
        return False

    def parse(self, path: Path) -> CoverageReport:
        """Parse an LCOV file. A missing file yields an empty report."""
        if not path.exists():
            log.warning("lcov_not_found", path=str(path))
            return CoverageReport.empty(self.format_id)

        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise CoverageParseError.parse_failed(str(path), str(e)) from e

        report = self.parse_text(content)
        log.info(
            "lcov_parsed",
            path=str(path),
            files=len(report),
            lines_found=sum(fc.lines_found for fc in report),
            lines_hit=sum(fc.lines_hit for fc in report),
        )
        return report

    def parse_text(self, text: str) -> CoverageReport:
        """Parse LCOV content. Malformed lines are skipped."""
        state = _RecordState()
        for raw in text.splitlines():
            line = raw.strip()
            if line:
                state = _step(state, line)

        if state.path is not None:
            log.debug("lcov_unterminated_record", path=state.path)

        return CoverageReport(source_format=self.format_id, files=state.files)
