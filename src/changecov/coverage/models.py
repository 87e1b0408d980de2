"""Coverage data model.

File-centric: each report maps a path to the lines the instrumentation can
count and the subset that ran. Everything is immutable once parsed.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from changecov.core.errors import CoverageError


class CoverageParseError(CoverageError):
    """Coverage report could not be read."""


@dataclass(frozen=True, slots=True)
class FileCoverage:
    """Line coverage for a single file.

    Line numbers are 1-based to match source file conventions.
    Invariant: covered_lines is a subset of executable_lines.
    """

    path: str  # as written in the report
    executable_lines: frozenset[int] = frozenset()
    covered_lines: frozenset[int] = frozenset()

    def __post_init__(self) -> None:
        # Enforce the subset invariant even for hand-built instances
        object.__setattr__(self, "executable_lines", frozenset(self.executable_lines))
        object.__setattr__(
            self, "covered_lines", frozenset(self.covered_lines) & self.executable_lines
        )

    @classmethod
    def from_hits(cls, path: str, hits: Mapping[int, int]) -> FileCoverage:
        """Build from a line -> hit count mapping."""
        return cls(
            path=path,
            executable_lines=frozenset(hits),
            covered_lines=frozenset(line for line, count in hits.items() if count > 0),
        )

    @property
    def lines_found(self) -> int:
        return len(self.executable_lines)

    @property
    def lines_hit(self) -> int:
        return len(self.covered_lines)


@dataclass(frozen=True, slots=True)
class CoverageReport:
    """Coverage for every file in one report, keyed by report path.

    Iteration follows report order.
    """

    source_format: str  # format id, e.g. "lcov"
    files: Mapping[str, FileCoverage] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", MappingProxyType(dict(self.files)))

    @classmethod
    def empty(cls, source_format: str = "lcov") -> CoverageReport:
        return cls(source_format=source_format)

    def get(self, path: str) -> FileCoverage | None:
        return self.files.get(path)

    def __iter__(self) -> Iterator[FileCoverage]:
        return iter(self.files.values())

    def __len__(self) -> int:
        return len(self.files)

    def __bool__(self) -> bool:
        return bool(self.files)
