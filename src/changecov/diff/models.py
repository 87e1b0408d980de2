"""Structured diff model.

Hunks and file sections are typed records rather than free text so the
changed-line computation never has to re-read the diff.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class Hunk:
    """One ``@@ -a,b +c,d @@`` header. Counts default to 1 when omitted."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int

    @property
    def new_lines(self) -> range:
        """New-side line numbers covered by this hunk. Empty for pure deletions."""
        start = max(self.new_start, 1)
        end = self.new_start + self.new_count
        return range(start, max(end, start))


@dataclass(frozen=True, slots=True)
class FileDiff:
    """A single file section of a unified diff, keyed by its new-side path."""

    path: str
    hunks: tuple[Hunk, ...] = ()

    @property
    def changed_lines(self) -> frozenset[int]:
        return frozenset(line for hunk in self.hunks for line in hunk.new_lines)


@dataclass(frozen=True, slots=True)
class ChangedLineSet:
    """Changed (added or modified) line numbers per file path.

    Paths are kept as they appear in the diff. Iteration follows diff order.
    """

    files: Mapping[str, frozenset[int]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {path: frozenset(lines) for path, lines in self.files.items()}
        object.__setattr__(self, "files", MappingProxyType(frozen))

    @classmethod
    def empty(cls) -> ChangedLineSet:
        return cls({})

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(self.files)

    @property
    def total_lines(self) -> int:
        return sum(len(lines) for lines in self.files.values())

    def lines_for(self, path: str) -> frozenset[int]:
        return self.files.get(path, frozenset())

    def items(self) -> Iterator[tuple[str, frozenset[int]]]:
        yield from self.files.items()

    def __iter__(self) -> Iterator[str]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    def __bool__(self) -> bool:
        return bool(self.files)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChangedLineSet):
            return NotImplemented
        return dict(self.files) == dict(other.files)

    def __hash__(self) -> int:
        return hash(frozenset(self.files.items()))
